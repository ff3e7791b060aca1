"""docs_loader.summary: run summary collected by the crawler."""

from __future__ import annotations

import json
from dataclasses import asdict, dataclass, field
from datetime import datetime, timezone
from typing import Any, Dict, List, Optional, TypedDict


class ArtifactInfo(TypedDict):
    """One written artifact."""

    url: str
    depth: int
    path: str


def utc_now() -> str:
    return datetime.now(timezone.utc).isoformat(timespec="seconds")


@dataclass(slots=True)
class CrawlReport:
    """Outcome of one crawl run: written artifacts, failures and ignored links."""

    origin: str
    seeds: List[str]
    max_depth: int
    started_at: str = field(default_factory=utc_now)
    finished_at: Optional[str] = None
    pages: List[ArtifactInfo] = field(default_factory=list)
    failed: Dict[str, str] = field(default_factory=dict)
    ignored_links: int = 0
    cancelled: bool = False

    @property
    def page_count(self) -> int:
        return len(self.pages)

    def add_page(self, url: str, depth: int, path: str) -> None:
        self.pages.append({"url": url, "depth": depth, "path": path})

    def add_failure(self, url: str, reason: str) -> None:
        self.failed[url] = reason

    def finish(self) -> None:
        self.finished_at = utc_now()

    def to_dict(self) -> Dict[str, Any]:
        data = asdict(self)
        data["page_count"] = self.page_count
        return data

    def json(self, *, pretty: bool = False) -> str:
        """Return the JSON representation of the report."""
        return json.dumps(self.to_dict(), ensure_ascii=False, indent=2 if pretty else None)
