"""
Workflow that searches a movie's releases, picks the best one and grabs it.
"""

import logging
from typing import Callable, Optional

from radarr_grab.core.downloader import download_release
from radarr_grab.core.fetcher import fetch_releases
from radarr_grab.core.retry import RetryPolicy
from radarr_grab.core.scoring import calculate_movie_release_score
from radarr_grab.core.selector import Scorer, find_best_release
from radarr_grab.exceptions import GrabError, NoSuitableReleaseError
from radarr_grab.models.release import Release

log = logging.getLogger(__name__)

SEARCH_MESSAGE = "(1/2) Checking for best releases..."
NO_SUITABLE_MESSAGE = "No suitable release found."


async def grab_best_release(
    client,
    movie_id: int,
    on_progress: Callable[[str], None],
    on_error: Callable[[str], None],
    retry_policy: Optional[RetryPolicy] = None,
    scorer: Scorer = calculate_movie_release_score,
) -> Release:
    """
    Runs fetch, selection and grab for one movie.

    Each failure is passed to `on_error` once and then raised; callers should
    rely on the exception, the callback only mirrors it for display.

    Returns:
        The release that Radarr accepted.

    Raises:
        FetchError, NoSuitableReleaseError, GrabFailedError or GrabError.
    """
    on_progress(SEARCH_MESSAGE)
    releases = await fetch_releases(client, movie_id, on_error, retry_policy)

    best = find_best_release(releases, scorer)
    if best is None:
        on_error(NO_SUITABLE_MESSAGE)
        raise NoSuitableReleaseError(NO_SUITABLE_MESSAGE)

    log.debug(
        f"Selected '{best.title}' (score {best.score}) out of {len(releases)} releases"
    )

    if not await download_release(client, best, on_progress, on_error):
        raise GrabError("Download failed for the best release.")

    return best


class GrabManager:
    """
    Binds a Radarr client, the reporting callbacks and a retry policy so that
    movies can be grabbed one call at a time.
    """

    def __init__(
        self,
        client,
        on_progress: Callable[[str], None],
        on_error: Callable[[str], None],
        retry_policy: Optional[RetryPolicy] = None,
        scorer: Scorer = calculate_movie_release_score,
    ):
        self.client = client
        self.on_progress = on_progress
        self.on_error = on_error
        self.retry_policy = retry_policy or RetryPolicy()
        self.scorer = scorer

    async def grab(self, movie_id: int) -> Release:
        return await grab_best_release(
            self.client,
            movie_id,
            self.on_progress,
            self.on_error,
            retry_policy=self.retry_policy,
            scorer=self.scorer,
        )

    async def list_releases(self, movie_id: int) -> list[Release]:
        """Fetches releases without grabbing anything."""
        self.on_progress(SEARCH_MESSAGE)
        return await fetch_releases(
            self.client, movie_id, self.on_error, self.retry_policy
        )
