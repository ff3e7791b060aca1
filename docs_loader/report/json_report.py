# docs_loader/report/json_report.py

"""
Run metadata artifact: the CrawlReport serialized to JSON.
"""
import json
from pathlib import Path

from docs_loader.summary import CrawlReport, utc_now


def render_json(report: CrawlReport, output_path: Path | str) -> Path:
    """
    Save *report* as JSON at *output_path*.

    :param report: summary of the crawl run
    :param output_path: path of the JSON file
    :return: Path of the saved file
    """
    output = Path(output_path)
    output.parent.mkdir(parents=True, exist_ok=True)

    data = report.to_dict()
    data["generated_at"] = utc_now()

    with output.open("w", encoding="utf-8") as f:
        json.dump(data, f, ensure_ascii=False, indent=2)

    return output
