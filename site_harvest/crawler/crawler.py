# === FILE: site_harvest/crawler/crawler.py ===
from __future__ import annotations

import asyncio
import logging
import time
from typing import Callable, List, Optional, Protocol

from aiohttp import ClientSession

from site_harvest.config import CrawlConfig
from site_harvest.crawler.fetcher import Fetcher, TransportError, build_session
from site_harvest.crawler.frontier import Frontier
from site_harvest.crawler.models import CrawlRecord, ErrorRecord, FrontierNode, PageRecord
from site_harvest.parser.html_parser import ExtractedPage, extract
from site_harvest.utils import is_http_url, same_origin

__all__ = ("AsyncCrawler", "PageFetcher")

Extractor = Callable[[str, str, Optional[str]], ExtractedPage]


class PageFetcher(Protocol):
    async def fetch(self, url: str) -> str: ...


class AsyncCrawler:
    """Breadth-first crawler: one page at a time, with a fixed pause between requests.

    Usage::

        async with AsyncCrawler(config) as crawler:
            records = await crawler.crawl()

    A custom *fetcher* (anything with ``async fetch(url) -> str``) may be
    supplied; otherwise an aiohttp-backed :class:`Fetcher` is opened on enter.
    """

    def __init__(
        self,
        config: CrawlConfig,
        fetcher: Optional[PageFetcher] = None,
        extractor: Extractor = extract,
    ) -> None:
        self.config = config
        self.fetcher = fetcher
        self.extractor = extractor
        self.session: Optional[ClientSession] = None
        self.frontier = Frontier(config.max_queue_size)
        self.logger = logging.getLogger("SiteHarvest")

    async def __aenter__(self) -> AsyncCrawler:
        if self.fetcher is None:
            self.session = build_session(self.config)
            self.fetcher = Fetcher(self.session)
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:
        if self.session and not self.session.closed:
            await self.session.close()

    async def crawl(self) -> List[CrawlRecord]:
        if self.fetcher is None:
            raise RuntimeError("Fetcher not initialized; use 'async with AsyncCrawler(...)'")
        seed = self.config.seed
        self.logger.info("Старт обхода: %s (depth=%d, max=%d)", seed, self.config.max_depth, self.config.max_pages)
        start = time.monotonic()

        if self.config.max_depth == 0:
            results = [await self._visit(FrontierNode(seed, 0))]
            self.frontier.mark_visited(seed)
        else:
            results = await self._traverse(seed)

        duration = time.monotonic() - start
        failed = sum(1 for r in results if isinstance(r, ErrorRecord))
        self.logger.info(
            "Завершено: %d страниц (%d с ошибкой) за %.2f с", len(results), failed, duration
        )
        if self.frontier.dropped:
            self.logger.info("Отброшено при переполнении очереди: %d", self.frontier.dropped)
        return results

    async def _traverse(self, seed: str) -> List[CrawlRecord]:
        frontier = self.frontier
        results: List[CrawlRecord] = []
        frontier.push(FrontierNode(seed, 0))

        while frontier and len(frontier.visited) < self.config.max_pages:
            node = frontier.pop()
            if frontier.is_visited(node.url):
                continue

            record = await self._visit(node)
            results.append(record)
            frontier.mark_visited(node.url)

            if isinstance(record, PageRecord) and node.depth < self.config.max_depth:
                self._enqueue_links(record, node.depth + 1)

            await asyncio.sleep(self.config.delay)
        return results

    async def _visit(self, node: FrontierNode) -> CrawlRecord:
        if self.fetcher is None:
            raise RuntimeError("Fetcher not initialized")
        try:
            html = await self.fetcher.fetch(node.url)
        except TransportError as e:
            self.logger.warning("Failed %s: %s", node.url, e)
            return ErrorRecord(url=node.url, depth=node.depth, error=str(e))
        page = self.extractor(html, node.url, self.config.selector)
        self.logger.debug("Fetched %s (depth %d, %d links)", node.url, node.depth, len(page.links))
        return PageRecord(url=node.url, depth=node.depth, **page.as_fields())

    def _enqueue_links(self, record: PageRecord, depth: int) -> None:
        seed = self.config.seed
        for link in record.links:
            href = link.href
            if not is_http_url(href):
                continue
            if self.config.same_origin_only and not same_origin(seed, href):
                continue
            self.frontier.push(FrontierNode(href, depth))
