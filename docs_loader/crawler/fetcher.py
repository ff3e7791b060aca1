# docs_loader/crawler/fetcher.py
"""
Fetcher module: one bounded-timeout HTTP GET per URL, no retries.
"""
from __future__ import annotations

import asyncio
from typing import Protocol

from aiohttp import ClientError, ClientSession, ClientTimeout

from docs_loader.config import LoaderConfig
from docs_loader.errors import NetworkError


class PageFetcher(Protocol):
    """Anything able to return the markup of a URL or raise NetworkError."""

    async def get(self, url: str) -> str: ...


def create_session(config: LoaderConfig) -> ClientSession:
    """Build the client session shared by all fetch workers of a run."""
    return ClientSession(
        timeout=ClientTimeout(total=config.timeout),
        headers={"User-Agent": config.user_agent},
        raise_for_status=False,
    )


class Fetcher:
    """Fetches pages through an aiohttp session with a fixed timeout."""

    def __init__(self, session: ClientSession, config: LoaderConfig) -> None:
        self.session = session
        self.config = config

    async def get(self, url: str) -> str:
        """
        Fetch the URL and return its body as text.

        Raises NetworkError on timeout, transport failure or non-2xx status.
        """
        try:
            async with self.session.get(url) as resp:
                if not 200 <= resp.status < 300:
                    raise NetworkError(url, f"HTTP {resp.status}")
                return await resp.text(errors="replace")
        except asyncio.TimeoutError as exc:
            raise NetworkError(url, f"timed out after {self.config.timeout:g} s") from exc
        except ClientError as exc:
            raise NetworkError(url, str(exc) or type(exc).__name__) from exc
