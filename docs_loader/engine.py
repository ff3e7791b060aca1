# File: docs_loader/engine.py
"""docs_loader.engine: orchestration layer between the CLI and the crawler."""

from __future__ import annotations

import asyncio
from typing import Optional

from docs_loader.config import LoaderConfig, load_config
from docs_loader.crawler.crawler import DocsCrawler
from docs_loader.logger import logger
from docs_loader.summary import CrawlReport

__all__ = ["Engine", "start_crawl"]


async def start_crawl(config: LoaderConfig) -> CrawlReport:
    """Run one crawl with a fresh crawler and return its report."""
    async with DocsCrawler(config) as crawler:
        return await crawler.crawl()


class Engine:
    """Facade for the CLI and tests: load config, run the crawl, return the report."""

    @staticmethod
    def load_config(path: Optional[str]) -> LoaderConfig:
        """Load the config from YAML/JSON (``configs/default.yaml`` when *path* is None)."""
        return load_config(path)

    def __init__(self, config: LoaderConfig) -> None:
        self.config = config

    def start_crawl(self) -> CrawlReport:
        """Run the crawl synchronously; the run deadline comes from ``run_timeout``."""
        logger.info("Starting crawl…")
        try:
            report = asyncio.run(start_crawl(self.config))
        except Exception as exc:
            logger.error("Crawl failed: %s", exc)
            raise
        if report.cancelled:
            logger.warning("Crawl did not finish within %s seconds", self.config.run_timeout)
        return report
