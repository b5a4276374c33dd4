"""
Retrieves the candidate releases for a movie.
"""

import logging
from typing import Callable, Optional

from radarr_grab.core.retry import RetryPolicy
from radarr_grab.exceptions import FetchError
from radarr_grab.models.release import ReleaseList

log = logging.getLogger(__name__)


async def fetch_releases(
    client,
    movie_id: int,
    on_error: Callable[[str], None],
    retry_policy: Optional[RetryPolicy] = None,
) -> ReleaseList:
    """
    Fetches the release list, retrying while Radarr returns nothing.

    Args:
        client: Anything exposing `async get_releases(movie_id)`.
        movie_id: Radarr's internal movie ID.
        on_error: Receives a readable message before FetchError is raised.
        retry_policy: Defaults to two extra attempts.

    Raises:
        FetchError: If every attempt came back empty or the call failed.
    """
    policy = retry_policy or RetryPolicy(retries=2)

    try:
        releases = await policy.execute(
            lambda: client.get_releases(movie_id),
            lambda result: bool(result),
        )
    except Exception as e:
        message = f"Error fetching releases: {e}"
        on_error(message)
        raise FetchError(message) from e

    log.debug(f"Fetched {len(releases)} releases for movie {movie_id}")
    return list(releases)
