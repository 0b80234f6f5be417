"""Shared helpers for CLI commands.

Loads configuration and builds the engine, turning the core's error
types into user-facing messages and exit codes.
"""

import json
from enum import Enum

import typer
from rich.markup import escape
from rich.table import Table

from cleanx.core.config import CleanxConfig, ConfigError, load_config_or_default
from cleanx.core.engine import CleanEngine
from cleanx.core.paths import HomeDirectoryError, get_config_path
from cleanx.models.execution import ExecutionResult
from cleanx.utils.formatting import (
    console,
    print_error,
    print_info,
    print_success,
    print_warning,
)
from cleanx.utils.fs import format_size


class OutputFormat(str, Enum):
    """Output format options."""

    TABLE = "table"
    JSON = "json"


def load_settings() -> CleanxConfig:
    """Load the user configuration or exit with a helpful message.

    A missing config file is not an error; defaults are used.

    Returns:
        Loaded or default CleanxConfig.

    Raises:
        typer.Exit: If the config file exists but is invalid.
    """
    try:
        return load_config_or_default()
    except ConfigError as e:
        print_error(str(e))
        print_info(f"Fix or remove {get_config_path()} to continue.")
        raise typer.Exit(code=1) from e


def create_engine(config: CleanxConfig) -> CleanEngine:
    """Build the engine for the current user or exit.

    Args:
        config: Loaded configuration.

    Returns:
        Ready-to-use CleanEngine.

    Raises:
        typer.Exit: If no usable home directory exists.
    """
    try:
        return CleanEngine.create(record_history=config.clean.log_history)
    except HomeDirectoryError as e:
        print_error(str(e))
        raise typer.Exit(code=1) from e


def print_json(data: object) -> None:
    """Print data as indented JSON."""
    console.print_json(json.dumps(data))


def create_results_table(result: ExecutionResult, title: str = "Results") -> Table:
    """Create a Rich table listing failed and skipped targets.

    Args:
        result: Batch outcome.
        title: Table title.

    Returns:
        Rich Table with one row per failure or skip.
    """
    table = Table(
        title=title,
        show_header=True,
        header_style="bold_header",
        border_style="border",
    )
    table.add_column("Status", width=8, justify="center")
    table.add_column("Path", overflow="fold")
    table.add_column("Reason")

    rows = [("[error]FAIL[/error]", path, reason) for path, reason in result.failures]
    rows += [("[warning]SKIP[/warning]", path, reason) for path, reason in result.skips]
    for status, path, reason in rows:
        table.add_row(status, escape(path), f"[muted]{escape(reason)}[/muted]")

    return table


def print_result_summary(result: ExecutionResult, label: str = "item(s)") -> None:
    """Print what a batch freed, or would free, and any problems.

    Args:
        result: Batch outcome.
        label: Noun used for the succeeded count.
    """
    if result.failures or result.skips:
        console.print(create_results_table(result))

    freed = format_size(result.bytes_freed)
    if result.simulated:
        print_info(f"Dry run: would remove {result.succeeded} {label}, freeing {freed}.")
    elif result.failed == 0:
        print_success(f"Removed {result.succeeded} {label}, freed {freed}.")
    else:
        console.print(
            f"\n[success]{result.succeeded} removed[/success], "
            f"[error]{result.failed} failed[/error], freed {freed}"
        )

    if result.skipped:
        print_warning(f"{result.skipped} {label} skipped.")
