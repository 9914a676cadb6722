# === FILE: site_harvest/engine.py ===
"""site_harvest.engine: Оркестрация запуска обхода."""

from __future__ import annotations

from typing import List

from site_harvest.config import CrawlConfig
from site_harvest.crawler.crawler import AsyncCrawler
from site_harvest.crawler.models import CrawlRecord
from site_harvest.logger import logger

__all__ = ["start_crawl"]


async def start_crawl(cfg: CrawlConfig) -> List[CrawlRecord]:
    """
    Запускает асинхронный краулер в контексте и возвращает список записей.

    Parameters
    ----------
    cfg : CrawlConfig
        Конфигурация обхода.

    Returns
    -------
    List[CrawlRecord]
        PageRecord / ErrorRecord в порядке обработки.
    """
    try:
        async with AsyncCrawler(cfg) as crawler:
            return await crawler.crawl()
    except Exception as exc:
        logger.error("Crawl failed: %s", exc)
        raise
