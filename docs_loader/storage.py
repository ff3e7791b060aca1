"""docs_loader.storage: maps URLs to artifact paths and writes the artifacts."""

from __future__ import annotations

import os
import re
import tempfile
from pathlib import Path
from typing import Union
from urllib.parse import urlparse

from docs_loader.errors import FilesystemError
from docs_loader.logger import logger
from docs_loader.report import render_index, render_json
from docs_loader.summary import CrawlReport
from docs_loader.utils import normalize_url

__all__ = ("ArtifactWriter", "ARTIFACT_SUFFIX", "INDEX_NAME", "METADATA_NAME")

ARTIFACT_SUFFIX = ".md"
INDEX_NAME = "README.md"
METADATA_NAME = "crawl-metadata.json"

_UNSAFE_RE = re.compile(r"[^A-Za-z0-9_/-]")


class ArtifactWriter:
    """Persists one text artifact per URL under ``root``."""

    def __init__(self, root: Union[str, Path], origin: str) -> None:
        self.root = Path(root)
        self.origin = origin.rstrip("/").lower()

    def prepare(self) -> Path:
        """Create the output root. Failure here aborts the whole run."""
        try:
            self.root.mkdir(parents=True, exist_ok=True)
        except OSError as exc:
            raise FilesystemError(self.root, f"cannot create output root: {exc}") from exc
        return self.root

    def relative_path(self, url: str) -> str:
        """
        Artifact path of *url* relative to the root; a pure function of the URL.

        ``https://docs.example/Plugins/Getting+started`` -> ``Plugins/Getting-started.md``
        """
        parsed = urlparse(normalize_url(url))
        rel = parsed.path
        if parsed.query:
            rel += "?" + parsed.query
        rel = _UNSAFE_RE.sub("-", rel)
        segments = [segment for segment in rel.split("/") if segment]
        if not segments or rel.endswith("/"):
            segments.append("index")
        name = "/".join(segments) + ARTIFACT_SUFFIX
        if name == INDEX_NAME:
            # sanitized names never contain "."
            name = "README.page" + ARTIFACT_SUFFIX
        return name

    def path_for(self, url: str) -> Path:
        return self.root / self.relative_path(url)

    def save(self, url: str, text: str) -> Path:
        """Write *text* for *url*, replacing any previous artifact atomically."""
        path = self.path_for(url)
        tmp_name = None
        try:
            path.parent.mkdir(parents=True, exist_ok=True)
            fd, tmp_name = tempfile.mkstemp(dir=path.parent, prefix=".", suffix=".tmp")
            with os.fdopen(fd, "w", encoding="utf-8") as fh:
                fh.write(text)
            os.replace(tmp_name, path)
        except OSError as exc:
            if tmp_name is not None and os.path.exists(tmp_name):
                os.unlink(tmp_name)
            raise FilesystemError(path, str(exc)) from exc
        logger.debug("Saved %s -> %s", url, path)
        return path

    def write_index(self, report: CrawlReport, *, title: str, purpose: str) -> Path:
        path = self.root / INDEX_NAME
        try:
            return render_index(report, path, title=title, purpose=purpose)
        except OSError as exc:
            raise FilesystemError(path, str(exc)) from exc

    def write_metadata(self, report: CrawlReport) -> Path:
        path = self.root / METADATA_NAME
        try:
            return render_json(report, path)
        except OSError as exc:
            raise FilesystemError(path, str(exc)) from exc
