"""
Issues the grab command for a selected release.
"""

import logging
from typing import Callable

from rich.markup import escape

from radarr_grab.exceptions import GrabError, GrabFailedError
from radarr_grab.models.release import Release

log = logging.getLogger(__name__)

DOWNLOAD_MESSAGE = "(2/2) Downloading best release..."


async def download_release(
    client,
    release: Release,
    on_progress: Callable[[str], None],
    on_error: Callable[[str], None],
) -> bool:
    """
    Sends `release` to Radarr's download client.

    Raises:
        GrabFailedError: Radarr refused the release.
        GrabError: The grab request itself failed.
    """
    on_progress(DOWNLOAD_MESSAGE)

    guid = release.guid or ""
    indexer_id = release.indexer_id or -1

    try:
        accepted = await client.download_movie(guid, indexer_id)
    except Exception as e:
        message = f"Error during grabbing release: {e}"
        on_error(message)
        raise GrabError(message) from e

    if not accepted:
        message = f"Failed to grab release: {release.title}"
        on_error(message)
        raise GrabFailedError(message)

    log.info(f"[green]✓ Grabbed:[/green] {escape(release.title)}")
    return True
