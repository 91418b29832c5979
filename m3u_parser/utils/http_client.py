"""Shared HTTP helpers for playlist downloads and stream liveness probes."""

from __future__ import annotations

import asyncio
import logging
from typing import Dict, Optional

import aiohttp
import requests

DEFAULT_USER_AGENT = (
    "Mozilla/5.0 (Macintosh; Intel Mac OS X 10_15_7) AppleWebKit/537.36 "
    "(KHTML, like Gecko) Chrome/111.0.0.0 Safari/537.36"
)
DEFAULT_TIMEOUT = 5.0

PLAYLIST_HEADERS: Dict[str, str] = {
    "accept": "*/*",
}


class HttpClient:
    """Fetches playlist documents and probes stream URLs with one timeout."""

    def __init__(self, timeout: float = DEFAULT_TIMEOUT, user_agent: str = DEFAULT_USER_AGENT) -> None:
        self.timeout = timeout
        self.user_agent = user_agent
        self._session = requests.Session()
        self._session.headers.update(PLAYLIST_HEADERS)

    def fetch_text(self, url: str) -> str:
        """Download a playlist document as text."""

        try:
            response = self._session.get(url, timeout=self.timeout)
            response.raise_for_status()
        except requests.RequestException as exc:
            logging.error("Playlist download from %s failed: %s", url, exc)
            raise
        return response.text

    def open_probe_session(self, limit: Optional[int] = None) -> aiohttp.ClientSession:
        """Build the async session shared by the probes of one parse batch."""

        timeout = aiohttp.ClientTimeout(total=self.timeout)
        connector = aiohttp.TCPConnector(limit=limit or 0)
        return aiohttp.ClientSession(
            timeout=timeout,
            connector=connector,
            headers={"User-Agent": self.user_agent},
        )

    async def probe(self, session: aiohttp.ClientSession, url: str) -> bool:
        """Issue a single GET to ``url``; ``True`` on a 2xx response."""

        try:
            async with session.get(url) as resp:
                return 200 <= resp.status < 300
        except asyncio.TimeoutError:
            logging.debug("Probe of %s timed out after %ss", url, self.timeout)
        except (aiohttp.ClientError, ValueError) as exc:
            logging.debug("Probe of %s failed: %s", url, exc)
        return False

    def close(self) -> None:
        self._session.close()

    def __enter__(self) -> "HttpClient":
        return self

    def __exit__(self, exc_type, exc_value, traceback) -> None:
        self.close()
