# File: tests/conftest.py
from collections.abc import AsyncIterator
from typing import Callable, Dict, Iterable, List

import pytest
import pytest_asyncio
from aiohttp import web

from site_harvest.config import CrawlConfig
from site_harvest.crawler.fetcher import TransportError


def pytest_configure(config):
    """Register custom markers so that `--strict-markers` does not fail."""
    config.addinivalue_line(
        "markers",
        "slow: marks tests as slow (deselect with '-m \"not slow\"')",
    )


class FakeFetcher:
    """In-memory fetcher: serves *pages* by exact URL, anything else fails like a 404."""

    def __init__(self, pages: Dict[str, str], failures: Iterable[str] = ()) -> None:
        self.pages = pages
        self.failures = set(failures)
        self.calls: List[str] = []

    async def fetch(self, url: str) -> str:
        self.calls.append(url)
        if url in self.failures or url not in self.pages:
            raise TransportError(url, "Request failed with status code 404", status=404)
        return self.pages[url]


@pytest.fixture()
def make_config() -> Callable[..., CrawlConfig]:
    """
    Return a factory for CrawlConfig with fast test defaults (no pacing delay).
    """

    def _make(start_url: str = "https://a.test/x", **kwargs) -> CrawlConfig:
        kwargs.setdefault("delay_ms", 0)
        kwargs.setdefault("user_agent", "TestAgent/1.0")
        return CrawlConfig(start_url=start_url, **kwargs)

    return _make


@pytest.fixture()
def fake_fetcher() -> Callable[..., FakeFetcher]:
    """Factory fixture: `fake_fetcher(pages, failures=())`."""
    return FakeFetcher


@pytest_asyncio.fixture
async def serve_app(unused_tcp_port_factory) -> AsyncIterator[Callable]:
    """Start aiohttp apps on free ports; yields a coroutine returning the base URL."""
    runners: List[web.AppRunner] = []

    async def _serve(app: web.Application) -> str:
        runner = web.AppRunner(app)
        await runner.setup()
        runners.append(runner)
        port = unused_tcp_port_factory()
        site = web.TCPSite(runner, "127.0.0.1", port)
        await site.start()
        return f"http://127.0.0.1:{port}"

    try:
        yield _serve
    finally:
        for runner in runners:
            await runner.cleanup()
