"""Tests for the CLI using click.testing.CliRunner.
They cover `crawl`, `config`, `--version` and error handling.
"""
import importlib
import json

import pytest
from click.testing import CliRunner

from docs_loader.cli import cli
from docs_loader.errors import FilesystemError
from docs_loader.logger import configure
from docs_loader.summary import CrawlReport

# the package re-exports the click group as `cli`, shadowing the module attribute
cli_module = importlib.import_module("docs_loader.cli")


@pytest.fixture(autouse=True)
def restore_logging():
    """The CLI binds the logger to the runner's stdout; rebind it afterwards."""
    yield
    configure(level="INFO")


@pytest.fixture()
def captured(monkeypatch):
    """Replace start_crawl with a stub recording the effective config."""
    calls = []

    async def fake_crawl(cfg):
        calls.append(cfg)
        report = CrawlReport(origin=cfg.origin, seeds=cfg.seed_urls, max_depth=cfg.max_depth)
        report.add_page(cfg.seed_urls[0], 0, "index.md")
        report.add_failure(f"{cfg.origin}/broken", "HTTP 404")
        report.finish()
        return report

    monkeypatch.setattr(cli_module, "start_crawl", fake_crawl)
    return calls


@pytest.fixture()
def cfg_file(tmp_path):
    path = tmp_path / "config.json"
    path.write_text(
        json.dumps(
            {
                "base_url": "https://docs.example",
                "seeds": ["/"],
                "max_depth": 1,
                "timeout": 1.0,
                "output_dir": str(tmp_path / "out"),
            }
        ),
        encoding="utf-8",
    )
    return path


def test_version_option():
    runner = CliRunner()
    result = runner.invoke(cli, ["--version"])
    assert result.exit_code == 0
    assert "DocsLoader" in result.output


def test_show_config(cfg_file):
    runner = CliRunner()
    result = runner.invoke(cli, ["--config", str(cfg_file), "config"])
    assert result.exit_code == 0
    data = json.loads(result.output)
    assert data["base_url"].rstrip("/") == "https://docs.example"
    assert data["max_depth"] == 1


def test_crawl_prints_summary(cfg_file, captured):
    runner = CliRunner()
    result = runner.invoke(cli, ["--config", str(cfg_file), "crawl"])
    assert result.exit_code == 0, result.output
    assert "Starting crawl of https://docs.example (max depth 1)" in result.output
    assert "Pages written: 1" in result.output
    assert "Failed pages: 1" in result.output
    assert len(captured) == 1


def test_crawl_options_override_config(cfg_file, captured, tmp_path):
    runner = CliRunner()
    result = runner.invoke(
        cli,
        [
            "--config", str(cfg_file), "crawl",
            "--output", str(tmp_path / "elsewhere"),
            "--max-depth", "3",
            "--seed", "/Plugins/Getting+started",
            "--seed", "/Reference",
            "--limit", "10",
            "--concurrency", "2",
            "--traversal", "breadth",
            "--deadline", "30",
        ],
    )
    assert result.exit_code == 0, result.output
    cfg = captured[0]
    assert cfg.output_dir == tmp_path / "elsewhere"
    assert cfg.max_depth == 3
    assert cfg.seed_urls == [
        "https://docs.example/Plugins/Getting+started",
        "https://docs.example/Reference",
    ]
    assert cfg.max_pages == 10
    assert cfg.concurrency == 2
    assert cfg.traversal == "breadth"
    assert cfg.run_timeout == 30.0


def test_crawl_rejects_seed_outside_origin(cfg_file, captured):
    runner = CliRunner()
    result = runner.invoke(cli, ["--config", str(cfg_file), "crawl", "--seed", "https://other.example/"])
    assert result.exit_code == 1
    assert not captured


def test_missing_config_exits_with_error(tmp_path):
    runner = CliRunner()
    result = runner.invoke(cli, ["--config", str(tmp_path / "absent.yaml"), "config"])
    assert result.exit_code == 1
    assert "Failed to load configuration" in result.output


def test_fatal_filesystem_error_exits_with_error(cfg_file, monkeypatch):
    async def failing(cfg):
        raise FilesystemError(cfg.output_dir, "cannot create output root")

    monkeypatch.setattr(cli_module, "start_crawl", failing)
    runner = CliRunner()
    result = runner.invoke(cli, ["--config", str(cfg_file), "crawl"])
    assert result.exit_code == 1
    assert "Crawl aborted" in result.output
