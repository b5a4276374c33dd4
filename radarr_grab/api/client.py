"""
Async client for the subset of the Radarr v3 API used to search and grab releases.
"""

import logging
import time
from typing import Any, Dict, List, Optional

import aiohttp
from pydantic import ValidationError

from radarr_grab.exceptions import AuthenticationError, RadarrAPIError
from radarr_grab.models.release import Release

log = logging.getLogger(__name__)


class RadarrAPIClient:
    """
    Async client for a Radarr instance.

    The session is created lazily and reused for every call; close it with
    `close()` or by using the client as an async context manager.
    """

    API_PREFIX = "/api/v3/"

    def __init__(self, base_url: str, api_key: str, timeout: int = 60):
        """
        Initializes the API client.

        Args:
            base_url: Root URL of the Radarr instance, e.g. http://localhost:7878.
            api_key: API key from Radarr's Settings > General page.
            timeout: Total timeout in seconds for a single request. Release
                searches hit every indexer, so this should stay generous.
        """
        self.base_url = base_url.rstrip("/")
        self.api_key = api_key
        self.timeout = timeout
        self._session: Optional[aiohttp.ClientSession] = None

    async def _initialize_session(self) -> None:
        """Ensures an active aiohttp session is available."""
        if self._session is None or self._session.closed:
            self._session = aiohttp.ClientSession(
                headers={
                    "X-Api-Key": self.api_key,
                    "Accept": "application/json",
                },
                timeout=aiohttp.ClientTimeout(total=self.timeout, connect=15),
            )

    async def close(self) -> None:
        """Gracefully closes the aiohttp session."""
        if self._session and not self._session.closed:
            await self._session.close()

    async def __aenter__(self) -> "RadarrAPIClient":
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
        await self.close()

    def _url(self, endpoint: str) -> str:
        return self.base_url + self.API_PREFIX + endpoint

    async def api_call(
        self,
        method: str,
        endpoint: str,
        params: Optional[Dict[str, Any]] = None,
        json: Optional[Dict[str, Any]] = None,
    ) -> Any:
        """
        Makes an authenticated API call and returns the decoded JSON body.

        Raises:
            AuthenticationError: If Radarr rejects the API key.
            RadarrAPIError: For any other non-2xx status.
        """
        await self._initialize_session()
        start_time = time.monotonic()

        async with self._session.request(
            method, self._url(endpoint), params=params, json=json
        ) as r:
            duration_ms = (time.monotonic() - start_time) * 1000
            log.debug(f"{method} {endpoint} -> {r.status} ({duration_ms:.0f} ms)")

            if r.status == 401:
                raise AuthenticationError("Radarr rejected the configured API key.")

            if r.status >= 400:
                body = await r.text()
                raise RadarrAPIError(
                    f"Radarr returned HTTP {r.status} for {endpoint}: {body[:200]}",
                    status=r.status,
                )

            if r.content_length == 0:
                return None
            return await r.json(content_type=None)

    # Public API Methods
    async def get_releases(self, movie_id: int) -> List[Release]:
        """Runs an interactive search for a movie and returns every candidate."""
        payload = await self.api_call("GET", "release", params={"movieId": movie_id})
        if not payload:
            return []
        if not isinstance(payload, list):
            raise RadarrAPIError(
                f"Unexpected release payload type: {type(payload).__name__}"
            )

        try:
            return [Release.model_validate(item) for item in payload]
        except ValidationError as e:
            raise RadarrAPIError(f"Could not parse release list: {e}") from e

    async def download_movie(self, guid: str, indexer_id: int) -> bool:
        """
        Asks Radarr to grab a release previously returned by `get_releases`.

        Returns:
            True when Radarr accepted the grab, False when it refused the
            release (unknown guid, release no longer cached, rejected by profile).
        """
        try:
            await self.api_call(
                "POST", "release", json={"guid": guid, "indexerId": indexer_id}
            )
        except RadarrAPIError as e:
            if e.status in (400, 404):
                log.debug(f"Grab of {guid} refused by Radarr: {e}")
                return False
            raise
        return True

    async def get_movie(self, movie_id: int) -> Dict[str, Any]:
        return await self.api_call("GET", f"movie/{movie_id}")

    async def system_status(self) -> Dict[str, Any]:
        return await self.api_call("GET", "system/status")
