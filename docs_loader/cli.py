#!/usr/bin/env python3
"""
Command line entry point of the DocsLoader crawler.

Commands:
  crawl     Crawl the configured origin and write one artifact per page
  config    Show the effective configuration

Common options:
  --config PATH       Path to the YAML/JSON config (default: configs/default.yaml)
  --log-level LEVEL   Logging level (DEBUG, INFO, ...)
  --log-file PATH     Log file (stdout only when omitted)
  --log-format FORMAT Logging format string

Options of crawl:
  --output DIR        Output root for the artifacts (override output_dir)
  --max-depth N       Maximum link depth (override max_depth)
  --seed URL          Seed path or URL, repeatable (override seeds)
  --limit N           Maximum number of pages (override max_pages)
  --concurrency N     Number of concurrent fetch workers
  --traversal ORDER   depth or breadth
  --deadline SEC      Deadline for the whole run (override run_timeout)

Example:
  docs-loader --config configs/default.yaml crawl --output docs/obsidian-docs --max-depth 2
"""
import asyncio
import sys
from pathlib import Path
from typing import Any, Dict

import click

from docs_loader import __version__
from docs_loader.config import load_config
from docs_loader.engine import start_crawl
from docs_loader.errors import DocsLoaderError
from docs_loader.logger import init_logging

CONTEXT_SETTINGS = dict(help_option_names=["--help", "-h"])


def print_error(message: str):
    click.secho(message, fg='red', err=True)
    sys.exit(1)


@click.group(context_settings=CONTEXT_SETTINGS)
@click.version_option(__version__, '--version', '-v', message='DocsLoader, version %(version)s')
@click.option(
    '--config', '-c', 'config_path',
    default='configs/default.yaml',
    show_default=True,
    type=click.Path(dir_okay=False, path_type=Path),
    help='Path to the YAML/JSON config file.'
)
@click.option(
    '--log-level', 'log_level',
    default='INFO', show_default=True,
    type=click.Choice(['DEBUG', 'INFO', 'WARNING', 'ERROR', 'CRITICAL']),
    help='Logging level'
)
@click.option(
    '--log-file', 'log_file',
    default=None,
    type=click.Path(writable=True, dir_okay=False, path_type=Path),
    help='Log file path (stdout if omitted)'
)
@click.option(
    '--log-format', 'log_format',
    default='%(asctime)s %(levelname)s %(message)s',
    show_default=True,
    help='Format string for log records'
)
@click.pass_context
def cli(ctx, config_path, log_level, log_file, log_format):
    """DocsLoader command group."""
    init_logging(
        level=log_level,
        log_file=str(log_file) if log_file else None,
        log_format=log_format
    )
    try:
        cfg = load_config(config_path)
    except Exception as e:
        print_error(f'Failed to load configuration: {e}')
    ctx.ensure_object(dict)
    ctx.obj['config'] = cfg


@cli.command('crawl', context_settings=CONTEXT_SETTINGS)
@click.option(
    '--output', '-o', 'output_dir',
    default=None,
    type=click.Path(file_okay=False, path_type=Path),
    help='Output root for the artifacts'
)
@click.option('--max-depth', '-d', 'max_depth', type=click.IntRange(min=0), default=None, help='Maximum link depth')
@click.option('--seed', '-s', 'seeds', multiple=True, help='Seed path or URL (repeatable)')
@click.option('--limit', '-l', 'limit', type=click.IntRange(min=1), default=None, help='Maximum number of pages')
@click.option('--concurrency', type=click.IntRange(min=1), default=None, help='Concurrent fetch workers')
@click.option('--traversal', type=click.Choice(['depth', 'breadth']), default=None, help='Traversal order')
@click.option('--deadline', 'deadline', type=float, default=None, help='Deadline for the whole run (seconds)')
@click.pass_context
def crawl(ctx, output_dir, max_depth, seeds, limit, concurrency, traversal, deadline):
    """Crawl the origin and write the artifacts."""
    overrides: Dict[str, Any] = {
        'output_dir': output_dir,
        'max_depth': max_depth,
        'seeds': list(seeds) or None,
        'max_pages': limit,
        'concurrency': concurrency,
        'traversal': traversal,
        'run_timeout': deadline,
    }
    base = ctx.obj['config']
    try:
        cfg = base.model_validate({**base.model_dump(mode="json"), **{k: v for k, v in overrides.items() if v is not None}})
    except ValueError as e:
        print_error(f'Invalid options: {e}')

    click.echo(f'Starting crawl of {cfg.origin} (max depth {cfg.max_depth})')
    try:
        report = asyncio.run(start_crawl(cfg))
    except DocsLoaderError as e:
        print_error(f'Crawl aborted: {e}')

    click.echo(f'Pages written: {report.page_count} -> {cfg.output_dir}')
    if report.failed:
        click.echo(f'Failed pages: {len(report.failed)}')
    if report.cancelled:
        click.secho('Crawl stopped before completion', fg='yellow')


@cli.command('config', context_settings=CONTEXT_SETTINGS)
@click.pass_context
def show_config(ctx):
    """Show the current configuration as JSON."""
    cfg = ctx.obj['config']
    click.echo(cfg.model_dump_json(indent=2))


if __name__ == "__main__":
    cli()
