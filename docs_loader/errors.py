"""docs_loader.errors: exception taxonomy of the crawler.

Only :class:`FilesystemError` raised while preparing the output root is fatal
for a run; every other error is scoped to a single page.
"""
from __future__ import annotations

from pathlib import Path
from typing import Union

__all__ = ("DocsLoaderError", "NetworkError", "ParseError", "FilesystemError")


class DocsLoaderError(Exception):
    """Base class for all crawler errors."""


class NetworkError(DocsLoaderError):
    """Timeout, connection failure or non-success status for one URL."""

    def __init__(self, url: str, reason: str) -> None:
        super().__init__(f"{url}: {reason}")
        self.url = url
        self.reason = reason


class ParseError(DocsLoaderError):
    """Markup too malformed to yield any content or links."""


class FilesystemError(DocsLoaderError):
    """Failure to create a directory or write an artifact."""

    def __init__(self, path: Union[str, Path], reason: str) -> None:
        super().__init__(f"{path}: {reason}")
        self.path = Path(path)
        self.reason = reason
