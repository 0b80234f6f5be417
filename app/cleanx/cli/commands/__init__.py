"""CLI commands for cleanx.

This package contains all subcommand implementations.
"""

from cleanx.cli.commands import clean, history, scan, uninstall

__all__ = ["clean", "history", "scan", "uninstall"]
