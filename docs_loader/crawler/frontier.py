"""
Crawl frontier: the single dedup and depth gate of a crawl run.
"""
from __future__ import annotations

import threading

from docs_loader.crawler.models import CrawlState
from docs_loader.logger import logger
from docs_loader.utils import normalize_url, same_origin


class CrawlFrontier:
    """Admits each (url, depth) at most once and never beyond ``max_depth``."""

    def __init__(self, state: CrawlState) -> None:
        self.state = state
        self._lock = threading.Lock()

    def admit(self, url: str, depth: int) -> bool:
        """
        Record *url* as visited and return True if it may be fetched.

        Returns False when the URL was already admitted, the depth bound is
        exceeded, the page limit is reached or the URL is off-origin.
        """
        if depth < 0 or depth > self.state.max_depth:
            logger.debug("Refused (depth %d > %d): %s", depth, self.state.max_depth, url)
            return False
        if not same_origin(url, self.state.origin):
            logger.debug("Refused (off origin): %s", url)
            return False
        key = normalize_url(url)
        with self._lock:
            if key in self.state.visited:
                return False
            limit = self.state.max_pages
            if limit is not None and len(self.state.visited) >= limit:
                logger.debug("Refused (page limit %d reached): %s", limit, url)
                return False
            self.state.visited.add(key)
        return True

    def is_visited(self, url: str) -> bool:
        with self._lock:
            return normalize_url(url) in self.state.visited

    def __len__(self) -> int:
        return len(self.state.visited)
