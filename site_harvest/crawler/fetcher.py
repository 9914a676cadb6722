# === FILE: site_harvest/crawler/fetcher.py ===
"""
Fetcher module: single-attempt HTTP GET with timeout and a fixed User-Agent.
"""
from __future__ import annotations

import asyncio
from typing import Optional

from aiohttp import ClientError, ClientSession, ClientTimeout

from site_harvest.config import CrawlConfig
from site_harvest.logger import logger

ACCEPT_HEADER = "text/html,application/xhtml+xml,application/xml;q=0.9,*/*;q=0.8"


class TransportError(Exception):
    """Fetch failed: timeout, network error or a non-2xx status."""

    def __init__(self, url: str, message: str, status: Optional[int] = None) -> None:
        super().__init__(message)
        self.url = url
        self.status = status


def build_session(config: CrawlConfig) -> ClientSession:
    """Create the shared session used by :class:`Fetcher`."""
    return ClientSession(
        timeout=ClientTimeout(total=config.timeout),
        headers={"User-Agent": config.user_agent, "Accept": ACCEPT_HEADER},
        raise_for_status=False,
    )


class Fetcher:
    """Retrieves page markup. No retry: one request per call."""

    def __init__(self, session: ClientSession) -> None:
        self.session = session

    async def fetch(self, url: str) -> str:
        """
        Return the response body of *url* as text.

        Raises TransportError on timeout, connection failure or non-2xx status.
        """
        logger.debug("GET %s", url)
        try:
            async with self.session.get(url) as resp:
                if not 200 <= resp.status < 300:
                    raise TransportError(
                        url, f"Request failed with status code {resp.status}", status=resp.status
                    )
                return await resp.text(errors="replace")
        except asyncio.TimeoutError as exc:
            raise TransportError(url, f"Timeout while fetching {url}") from exc
        except ClientError as exc:
            raise TransportError(url, f"{type(exc).__name__}: {exc}") from exc


__all__ = ["ACCEPT_HEADER", "Fetcher", "TransportError", "build_session"]
