"""CLI commands for the trade journal.

This package provides the command-line interface for recording,
listing and removing trades.
"""

from tradejournal.cli.main import cli, main

__all__ = ["cli", "main"]
