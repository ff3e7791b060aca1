"""
DocsLoader package initializer.
Defines package version and exposes CLI.
"""
__version__ = "0.1.0"

# Expose CLI entry point
from docs_loader.cli import cli as main_cli
from .cli import cli  # exported for pytest
