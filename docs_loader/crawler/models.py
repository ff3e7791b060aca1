"""
Data models for the DocsLoader crawler.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import List, Optional, Set


@dataclass(slots=True)
class CrawlState:
    """Visited URLs plus the bounds of one crawl run."""

    origin: str
    max_depth: int
    max_pages: Optional[int] = None
    visited: Set[str] = field(default_factory=set)


@dataclass(slots=True)
class PageResult:
    """Outcome of one fetched page: extracted text and outbound links."""

    url: str
    depth: int
    text: str
    links: List[str] = field(default_factory=list)
