"""docs_loader.crawler: frontier, fetcher, link extraction and the crawl orchestrator."""

from docs_loader.crawler.crawler import DocsCrawler
from docs_loader.crawler.frontier import CrawlFrontier
from docs_loader.crawler.models import CrawlState, PageResult

__all__ = ["DocsCrawler", "CrawlFrontier", "CrawlState", "PageResult"]
