"""CLI package for cleanx.

This package contains the Typer application and all subcommands.
"""

from cleanx.cli.main import app

__all__ = ["app"]
