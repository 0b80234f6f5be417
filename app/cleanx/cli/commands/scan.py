"""Scan command implementation.

Finds reclaimable space without changing anything.
"""

from typing import Annotated

import typer

from cleanx.cli.common import OutputFormat, create_engine, load_settings, print_json
from cleanx.models.entry import ScannerCategory
from cleanx.models.scan_config import ScanConfig
from cleanx.scanners.registry import ScanReport
from cleanx.utils.formatting import (
    console,
    create_entry_table,
    format_entry_row,
    print_info,
    print_warning,
)
from cleanx.utils.fs import format_size

app = typer.Typer(
    help="Scan for reclaimable disk space.",
    invoke_without_command=True,
)


@app.callback(invoke_without_command=True)
def scan_command(
    ctx: typer.Context,
    category: Annotated[
        ScannerCategory | None,
        typer.Option(
            "--category",
            "-c",
            help="Only run scanners of this category.",
            case_sensitive=False,
        ),
    ] = None,
    min_size: Annotated[
        int | None,
        typer.Option(
            "--min-size",
            help="Minimum entry size in bytes (overrides config).",
            min=0,
        ),
    ] = None,
    max_depth: Annotated[
        int | None,
        typer.Option(
            "--max-depth",
            help="Maximum traversal depth (overrides config).",
            min=0,
        ),
    ] = None,
    limit: Annotated[
        int | None,
        typer.Option(
            "--limit",
            "-n",
            help="Limit number of entries to display.",
        ),
    ] = None,
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
    """Scan and display reclaimable entries.

    Nothing is deleted. Use the IDs shown here with 'cleanx clean --id'.

    Examples:
        cleanx scan                         # Run every scanner
        cleanx scan --category browser      # Browser caches and traces only
        cleanx scan --min-size 104857600    # Only entries of 100 MB or more
        cleanx scan --format json           # Output as JSON
    """
    if ctx.invoked_subcommand is not None:
        return

    settings = load_settings()
    config = build_scan_config(settings.scan.to_scan_config(), min_size, max_depth)
    engine = create_engine(settings)

    report = engine.scan_report(config, category=category)

    for failed in report.failed:
        print_warning(f"Scanner '{failed.scanner_id}' failed: {failed.error}")

    if output_format == OutputFormat.JSON:
        print_json(report.to_dict())
        return

    _print_table(report, limit)


def build_scan_config(base: ScanConfig, min_size: int | None, max_depth: int | None) -> ScanConfig:
    """Apply command-line overrides to the configured scan parameters.

    Args:
        base: Scan parameters from the config file.
        min_size: Override for min_size_bytes.
        max_depth: Override for max_depth.

    Returns:
        New ScanConfig.
    """
    return ScanConfig(
        min_size_bytes=base.min_size_bytes if min_size is None else min_size,
        max_depth=base.max_depth if max_depth is None else max_depth,
        excluded_paths=base.excluded_paths,
        follow_symlinks=base.follow_symlinks,
    )


def _print_table(report: ScanReport, limit: int | None) -> None:
    """Print merged entries as a Rich table with a total line."""
    entries = report.entries
    if not entries:
        print_info("Nothing to clean up.")
        return

    shown = entries[:limit] if limit is not None else entries
    table = create_entry_table()
    for entry in shown:
        table.add_row(*format_entry_row(entry))
    console.print(table)

    if len(shown) < len(entries):
        print_info(f"Showing {len(shown)} of {len(entries)} entries.")
    console.print(
        f"[bold]Total:[/] {len(entries)} entries, "
        f"[info]{format_size(report.total_bytes)}[/] reclaimable "
        f"[muted]({report.duration_seconds:.1f}s)[/]"
    )
