# File: tests/conftest.py
import asyncio
from collections import Counter
from pathlib import Path
from typing import Callable, Dict, Iterable, List, Optional

import pytest
import pytest_asyncio
from aiohttp import web

from docs_loader.config import LoaderConfig
from docs_loader.errors import NetworkError

ORIGIN = "https://docs.example"


class FakeFetcher:
    """In-memory fetcher counting calls per URL; unknown URLs answer 404."""

    def __init__(
        self,
        pages: Dict[str, str],
        failures: Iterable[str] = (),
        delays: Optional[Dict[str, float]] = None,
        on_get: Optional[Callable[[str], None]] = None,
    ) -> None:
        self.pages = pages
        self.failures = set(failures)
        self.delays = delays or {}
        self.on_get = on_get
        self.calls: Counter = Counter()
        self.order: List[str] = []

    async def get(self, url: str) -> str:
        self.calls[url] += 1
        self.order.append(url)
        if self.on_get is not None:
            self.on_get(url)
        if url in self.delays:
            await asyncio.sleep(self.delays[url])
        if url in self.failures:
            raise NetworkError(url, "timed out after 10 s")
        if url not in self.pages:
            raise NetworkError(url, "HTTP 404")
        return self.pages[url]


def page(*hrefs: str, title: str = "Page") -> str:
    """Small HTML document with a heading, a paragraph and the given links."""
    links = "".join(f'<a href="{href}">{href}</a>' for href in hrefs)
    return f"<html><body><main><h1>{title}</h1><p>About {title}.</p>{links}</main></body></html>"


@pytest.fixture()
def make_config(tmp_path: Path) -> Callable[..., LoaderConfig]:
    """Factory for configs writing into a temporary output root."""

    def _make(**overrides) -> LoaderConfig:
        data = {
            "base_url": ORIGIN,
            "seeds": ["/"],
            "max_depth": 1,
            "timeout": 2.0,
            "output_dir": tmp_path / "out",
        }
        data.update(overrides)
        return LoaderConfig(**data)

    return _make


@pytest_asyncio.fixture
async def serve_app(unused_tcp_port: int):
    """Start an aiohttp application on a free port and return its base URL."""
    runners: List[web.AppRunner] = []

    async def _serve(app: web.Application) -> str:
        runner = web.AppRunner(app)
        await runner.setup()
        site = web.TCPSite(runner, "127.0.0.1", unused_tcp_port)
        await site.start()
        runners.append(runner)
        return f"http://127.0.0.1:{unused_tcp_port}"

    yield _serve
    for runner in runners:
        await runner.cleanup()
