"""CLI commands for the trade journal.

This package provides the command-line interface for recording trades
and viewing statistics, lot linkage and open positions.
"""

from tradejournal.cli.main import cli, main

__all__ = ["cli", "main"]
