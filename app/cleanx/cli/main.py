"""Main CLI application entry point.

Defines the Typer application and global options.
"""

import logging
from typing import Annotated

import typer
from rich.logging import RichHandler

from cleanx import __version__
from cleanx.cli.commands import clean, history, scan, uninstall
from cleanx.utils.formatting import err_console

# Create main Typer app
app = typer.Typer(
    name="cleanx",
    help="Find and safely remove reclaimable disk space.",
    no_args_is_help=True,
    rich_markup_mode="rich",
    context_settings={"help_option_names": ["-h", "--help"]},
)


def version_callback(value: bool) -> None:
    """Print version and exit."""
    if value:
        typer.echo(f"cleanx version {__version__}")
        raise typer.Exit()


def configure_logging(verbose: bool) -> None:
    """Route cleanx log records to stderr through Rich.

    Args:
        verbose: Log at DEBUG instead of WARNING.
    """
    package_logger = logging.getLogger("cleanx")
    for handler in list(package_logger.handlers):
        if isinstance(handler, RichHandler):
            package_logger.removeHandler(handler)

    handler = RichHandler(console=err_console, show_path=False, rich_tracebacks=True)
    handler.setFormatter(logging.Formatter("%(message)s"))
    package_logger.addHandler(handler)
    package_logger.setLevel(logging.DEBUG if verbose else logging.WARNING)


@app.callback()
def main(
    ctx: typer.Context,
    version: Annotated[
        bool | None,
        typer.Option(
            "--version",
            "-V",
            callback=version_callback,
            is_eager=True,
            help="Show version and exit.",
        ),
    ] = None,
    verbose: Annotated[
        bool,
        typer.Option(
            "--verbose",
            "-v",
            help="Enable verbose output.",
        ),
    ] = False,
) -> None:
    """cleanx - Find and safely remove reclaimable disk space.

    Scan caches, logs, trash, browser data and development leftovers,
    review what was found, and delete it with every removal recorded.
    """
    configure_logging(verbose)
    # Store options in context for subcommands
    ctx.ensure_object(dict)
    ctx.obj["verbose"] = verbose


# Register commands
app.add_typer(scan.app, name="scan")
app.add_typer(clean.app, name="clean")
app.command(name="uninstall")(uninstall.uninstall_command)
app.add_typer(history.app, name="history")
