"""docs_loader.report.index_report: the README index artifact, rendered with Jinja2."""

from __future__ import annotations

from pathlib import Path
from typing import Any, Union

from jinja2 import Environment, FileSystemLoader, StrictUndefined

from docs_loader.summary import CrawlReport, utc_now

TEMPLATE_DIR = Path(__file__).resolve().parent.parent / "templates"


def render_index(
    report: CrawlReport,
    output_path: Union[Path, str],
    *,
    title: str,
    purpose: str,
    template_dir: Union[Path, str] = TEMPLATE_DIR,
) -> Path:
    """Render the index artifact from ``index.md.j2`` and save it.

    Args:
        report: summary of the finished (or cancelled) run.
        output_path: path of the markdown file to write.
        title: first heading of the index.
        purpose: one-line description of why the pages were collected.
        template_dir: directory holding ``index.md.j2``.

    Returns:
        Path of the written file.
    """
    output_path = Path(output_path)
    output_path.parent.mkdir(parents=True, exist_ok=True)

    env = Environment(
        loader=FileSystemLoader(str(template_dir)),
        undefined=StrictUndefined,
        keep_trailing_newline=True,
    )
    template = env.get_template("index.md.j2")

    context: dict[str, Any] = {
        "title": title,
        "purpose": purpose,
        "origin": report.origin,
        "seeds": report.seeds,
        "page_count": report.page_count,
        "cancelled": report.cancelled,
        "generated_at": report.finished_at or utc_now(),
    }

    output_path.write_text(template.render(**context), encoding="utf-8")
    return output_path
