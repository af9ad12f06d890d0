"""CLI commands for JustDad.

This package provides the command-line interface for writing,
browsing and summarizing journal entries.
"""

from justdad.cli.main import cli, main

__all__ = ["cli", "main"]
