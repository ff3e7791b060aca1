"""docs_loader.report: rendering of the run-level artifacts (index and metadata)."""

from __future__ import annotations

from docs_loader.report.index_report import TEMPLATE_DIR, render_index
from docs_loader.report.json_report import render_json

__all__ = ["TEMPLATE_DIR", "render_index", "render_json"]
