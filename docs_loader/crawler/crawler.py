from __future__ import annotations

import asyncio
import time
from typing import Iterable, List, Optional, Set, Tuple

from aiohttp import ClientSession

from docs_loader.config import LoaderConfig
from docs_loader.crawler.fetcher import Fetcher, PageFetcher, create_session
from docs_loader.crawler.frontier import CrawlFrontier
from docs_loader.crawler.link_extractor import partition_links
from docs_loader.crawler.models import CrawlState, PageResult
from docs_loader.errors import FilesystemError, NetworkError, ParseError
from docs_loader.logger import logger
from docs_loader.parser.content_extractor import extract_content
from docs_loader.parser.markup import MarkupParser, get_parser
from docs_loader.storage import ArtifactWriter
from docs_loader.summary import CrawlReport
from docs_loader.utils import normalize_url

__all__ = ("DocsCrawler",)

_WorkItem = Tuple[str, int]


class DocsCrawler:
    """Crawls one origin up to ``max_depth`` and writes one artifact per page.

    Work items ``(url, depth)`` live in an explicit LIFO stack (depth-first) or
    FIFO queue (breadth-first); the frontier is the only admission gate.
    """

    def __init__(
        self,
        config: LoaderConfig,
        *,
        fetcher: Optional[PageFetcher] = None,
        writer: Optional[ArtifactWriter] = None,
        parser: Optional[MarkupParser] = None,
    ) -> None:
        self.config = config
        self.state = CrawlState(
            origin=config.origin,
            max_depth=config.max_depth,
            max_pages=config.max_pages,
        )
        self.frontier = CrawlFrontier(self.state)
        self.fetcher = fetcher
        self.writer = writer or ArtifactWriter(config.output_dir, config.origin)
        self.parser = parser or get_parser(config.parser)
        self.session: Optional[ClientSession] = None
        self.report = CrawlReport(
            origin=config.origin,
            seeds=config.seed_urls,
            max_depth=config.max_depth,
        )
        self._ignored: Set[str] = set()
        self._cancel = asyncio.Event()

    async def __aenter__(self) -> DocsCrawler:
        if self.fetcher is None:
            self.session = create_session(self.config)
            self.fetcher = Fetcher(self.session, self.config)
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:
        if self.session and not self.session.closed:
            await self.session.close()

    @property
    def depth_first(self) -> bool:
        return self.config.traversal == "depth"

    def cancel(self) -> None:
        """Stop admitting URLs and abort outstanding fetches."""
        self._cancel.set()

    async def crawl(self) -> CrawlReport:
        if self.fetcher is None:
            raise RuntimeError("Fetcher not initialized, use 'async with DocsCrawler(...)'")
        root = self.writer.prepare()
        logger.info("Crawl start: %s -> %s", self.config.origin, root)
        start = time.monotonic()

        queue: asyncio.Queue[_WorkItem] = asyncio.LifoQueue() if self.depth_first else asyncio.Queue()
        self._schedule(queue, self.config.seed_urls, 0)

        workers = [asyncio.create_task(self._worker(queue)) for _ in range(self.config.concurrency)]
        drained = asyncio.create_task(queue.join())
        stopped = asyncio.create_task(self._cancel.wait())
        try:
            done, _ = await asyncio.wait(
                {drained, stopped},
                timeout=self.config.run_timeout,
                return_when=asyncio.FIRST_COMPLETED,
            )
            if drained not in done:
                self._cancel.set()
            if self._cancel.is_set():
                self.report.cancelled = True
                logger.warning("Crawl stopped before the frontier was exhausted")
        finally:
            pending = [drained, stopped, *workers]
            for task in pending:
                task.cancel()
            await asyncio.gather(*pending, return_exceptions=True)

        self.report.ignored_links = len(self._ignored)
        self.report.finish()
        self._write_summary()

        duration = time.monotonic() - start
        logger.info(
            "Done: %d pages in %.2f s, %d failed, %d links ignored",
            self.report.page_count, duration, len(self.report.failed), self.report.ignored_links,
        )
        return self.report

    def _schedule(self, queue: asyncio.Queue[_WorkItem], urls: Iterable[str], depth: int) -> None:
        if depth > self.config.max_depth:
            return
        pending: List[str] = [u for u in urls if not self.frontier.is_visited(u)]
        # pushed in reverse so the stack pops them in document order
        if self.depth_first:
            pending.reverse()
        for url in pending:
            queue.put_nowait((normalize_url(url), depth))

    async def _worker(self, queue: asyncio.Queue[_WorkItem]) -> None:
        while True:
            url, depth = await queue.get()
            try:
                if self._cancel.is_set() or not self.frontier.admit(url, depth):
                    continue
                await self._visit(queue, url, depth)
            except Exception as exc:
                logger.exception("Unexpected error on %s", url)
                self.report.add_failure(url, f"{type(exc).__name__}: {exc}")
            finally:
                queue.task_done()

    async def _visit(self, queue: asyncio.Queue[_WorkItem], url: str, depth: int) -> None:
        logger.info("Loading: %s (depth: %d)", url, depth)
        try:
            markup = await self.fetcher.get(url)  # type: ignore[union-attr]
        except NetworkError as exc:
            logger.warning("Failed %s: %s", url, exc.reason)
            self.report.add_failure(url, exc.reason)
            return

        page = self._extract(url, depth, markup)
        try:
            self.writer.save(url, page.text)
        except FilesystemError as exc:
            logger.error("Artifact for %s not written: %s", url, exc.reason)
            self.report.add_failure(url, exc.reason)
        else:
            self.report.add_page(url, depth, self.writer.relative_path(url))

        if depth < self.config.max_depth:
            self._schedule(queue, page.links, depth + 1)

    def _extract(self, url: str, depth: int, markup: str) -> PageResult:
        try:
            soup = self.parser.parse(markup)
        except ParseError as exc:
            logger.warning("Unparseable markup on %s: %s", url, exc)
            return PageResult(url=url, depth=depth, text="")
        links, ignored = partition_links(soup, url, self.config.origin)
        self._ignored.update(ignored)
        return PageResult(url=url, depth=depth, text=extract_content(soup), links=links)

    def _write_summary(self) -> None:
        try:
            self.writer.write_index(self.report, title=self.config.title, purpose=self.config.purpose)
            self.writer.write_metadata(self.report)
        except FilesystemError as exc:
            logger.error("Run summary not written: %s", exc)
