"""
Release selection: custom format score first, point heuristic as fallback.
"""

import logging
from typing import Callable, Optional, Sequence

from radarr_grab.core.scoring import calculate_movie_release_score
from radarr_grab.models.release import Release

log = logging.getLogger(__name__)

Scorer = Callable[[Release], float]


def find_best_release(
    releases: Sequence[Release],
    scorer: Scorer = calculate_movie_release_score,
) -> Optional[Release]:
    """
    Picks the release to grab.

    The release with the highest custom format score wins, the earliest one on
    ties. When that winner's score is exactly 0 the list is re-ranked with
    `scorer`; if no release earns any points the first winner is kept.

    Returns:
        The chosen release, or None for an empty list.
    """
    if not releases:
        return None

    best = releases[0]
    for release in releases[1:]:
        if release.score > best.score:
            best = release

    # A missing score (None) does not trigger the fallback, only an explicit 0.
    if best.custom_format_score == 0:
        by_points = find_best_release_by_points(releases, scorer)
        if by_points is not None:
            log.debug(f"No custom format score, picked by points: {by_points.title}")
            best = by_points

    return best


def find_best_release_by_points(
    releases: Sequence[Release],
    scorer: Scorer = calculate_movie_release_score,
) -> Optional[Release]:
    """Returns the first release reaching the highest positive point total."""
    best: Optional[Release] = None
    max_points = 0

    for release in releases:
        points = scorer(release)
        if points > max_points:
            max_points = points
            best = release

    return best


def rank_releases(
    releases: Sequence[Release],
    scorer: Scorer = calculate_movie_release_score,
) -> list[tuple[Release, float]]:
    """
    Orders releases for display: custom format score, then points.

    Equal keys keep their original order. Each release is paired with its points.
    """
    scored = [(release, scorer(release)) for release in releases]
    return sorted(scored, key=lambda pair: (pair[0].score, pair[1]), reverse=True)
