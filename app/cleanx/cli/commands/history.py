"""History command for viewing past deletions.

This module provides the `cleanx history` command for reading the
deletion journal.
"""

from datetime import datetime
from typing import Annotated

import typer
from rich.markup import escape
from rich.table import Table

from cleanx.cli.common import OutputFormat, create_engine, load_settings, print_json
from cleanx.models.journal import JournalEntry
from cleanx.utils.formatting import console, print_info
from cleanx.utils.fs import format_size

app = typer.Typer(
    name="history",
    help="View history of deleted files.",
    invoke_without_command=True,
)


@app.callback(invoke_without_command=True)
def history(
    ctx: typer.Context,
    limit: Annotated[
        int,
        typer.Option(
            "--limit",
            "-n",
            help="Maximum number of entries to show.",
            min=0,
        ),
    ] = 20,
    output_format: Annotated[
        OutputFormat,
        typer.Option(
            "--format",
            "-f",
            help="Output format: table or json.",
            case_sensitive=False,
        ),
    ] = OutputFormat.TABLE,
) -> None:
    """Show history of deleted files.

    Lists the most recent deletions recorded by cleanx, oldest first.

    Examples:
        cleanx history              # Show last 20 entries
        cleanx history -n 50        # Show last 50 entries
        cleanx history --format json
    """
    if ctx.invoked_subcommand is not None:
        return

    engine = create_engine(load_settings())
    entries = engine.history(limit=limit)

    if output_format == OutputFormat.JSON:
        print_json([entry.to_dict() for entry in entries])
        return

    if not entries:
        print_info("No history entries found.")
        return

    _print_table(entries)


def _print_table(entries: tuple[JournalEntry, ...]) -> None:
    """Print history as Rich table.

    Args:
        entries: Journal entries to display.
    """
    table = Table(title="Deletion History")
    table.add_column("Timestamp", style="cyan")
    table.add_column("Action", style="green")
    table.add_column("Size", justify="right")
    table.add_column("Path", overflow="fold")

    for entry in entries:
        size = format_size(entry.size_bytes) if entry.size_bytes is not None else "-"
        table.add_row(
            _format_timestamp(entry.timestamp),
            entry.action.value,
            size,
            escape(entry.path),
        )

    console.print(table)
    total = sum(e.size_bytes or 0 for e in entries)
    console.print(f"[bold]Total:[/] {len(entries)} entries, {format_size(total)}")


def _format_timestamp(iso_timestamp: str) -> str:
    """Format ISO timestamp for display.

    Args:
        iso_timestamp: ISO format timestamp string.

    Returns:
        Formatted timestamp string (YYYY-MM-DD HH:MM:SS), or the input
        unchanged if it cannot be parsed.
    """
    try:
        dt = datetime.fromisoformat(iso_timestamp.replace("Z", "+00:00"))
    except ValueError:
        return iso_timestamp
    return dt.strftime("%Y-%m-%d %H:%M:%S")
