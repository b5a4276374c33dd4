"""
Point-based fallback ranking for releases that carry no custom format score.
"""

from radarr_grab.models.release import Release

# Radarr quality sources, best first.
SOURCE_POINTS = {
    "bluray": 30,
    "webdl": 25,
    "webrip": 20,
    "tv": 10,
    "dvd": 8,
    "telecine": 2,
    "telesync": 1,
    "cam": 0,
    "workprint": 0,
}

RESOLUTION_POINTS = (
    (2160, 40),
    (1080, 30),
    (720, 20),
    (576, 10),
    (480, 5),
)

USENET_BONUS = 10
MAX_SEEDER_POINTS = 20
REJECTED_PENALTY = 50


def _resolution_points(resolution: int) -> int:
    for threshold, points in RESOLUTION_POINTS:
        if resolution >= threshold:
            return points
    return 0


def _availability_points(release: Release) -> int:
    if release.protocol == "usenet":
        return USENET_BONUS
    # One point per five seeders; dead torrents earn nothing.
    return min((release.seeders or 0) // 5, MAX_SEEDER_POINTS)


def calculate_movie_release_score(release: Release) -> int:
    """
    Scores a release from its quality and availability.

    The result is deterministic and never negative, so zero means
    "no reason to prefer this release".
    """
    points = _resolution_points(release.resolution)
    points += SOURCE_POINTS.get(release.source.lower(), 0)
    points += _availability_points(release)
    if release.rejected:
        points -= REJECTED_PENALTY
    return max(points, 0)
