"""Clean command implementation.

Removes entries found by the scanners, after a preview and a
confirmation prompt.
"""

from typing import Annotated

import typer

from cleanx.cli.common import (
    OutputFormat,
    create_engine,
    load_settings,
    print_json,
    print_result_summary,
)
from cleanx.models.entry import DiscoveredEntry
from cleanx.models.execution import ExecutionResult
from cleanx.utils.formatting import (
    console,
    create_entry_table,
    format_entry_row,
    print_error,
    print_info,
    print_warning,
)
from cleanx.utils.fs import format_size

app = typer.Typer(
    help="Remove reclaimable entries.",
    invoke_without_command=True,
)


def select_entries(
    entries: list[DiscoveredEntry],
    scanner_ids: list[str],
    entry_ids: list[str],
) -> list[DiscoveredEntry]:
    """Pick the entries named by scanner or entry ID, keeping scan order.

    Args:
        entries: Merged scan results.
        scanner_ids: Select every entry produced by these scanners.
        entry_ids: Select these individual entries.

    Returns:
        Selected entries.
    """
    wanted_scanners = set(scanner_ids)
    wanted_ids = set(entry_ids)
    return [e for e in entries if e.scanner_id in wanted_scanners or e.id in wanted_ids]


def _confirm_clean(count: int, size_bytes: int) -> bool:
    """Prompt user to confirm deletion.

    Args:
        count: Number of entries to delete.
        size_bytes: Bytes that would be freed.

    Returns:
        True if user confirms, False otherwise.
    """
    return typer.confirm(
        f"\nDelete {count} item(s) ({format_size(size_bytes)})?",
        default=False,
    )


@app.callback(invoke_without_command=True)
def clean_command(
    ctx: typer.Context,
    scanner: Annotated[
        list[str] | None,
        typer.Option(
            "--scanner",
            "-s",
            help="Clean everything found by this scanner (repeatable).",
        ),
    ] = None,
    entry_id: Annotated[
        list[str] | None,
        typer.Option(
            "--id",
            help="Clean a single entry by ID from 'cleanx scan' (repeatable).",
        ),
    ] = None,
    dry_run: Annotated[
        bool | None,
        typer.Option(
            "--dry-run/--no-dry-run",
            help="Show what would be removed without deleting (default from config).",
        ),
    ] = None,
    yes: Annotated[
        bool,
        typer.Option(
            "--yes",
            "-y",
            help="Skip confirmation prompt and proceed.",
        ),
    ] = False,
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
    """Delete selected entries.

    Entries are selected by scanner or by ID. Every target is checked
    against the safety rules again right before it is removed, and every
    removal is recorded in the history.

    Examples:
        cleanx clean --scanner trash             # Empty the trash
        cleanx clean --id 3f9a1c0d2b4e5f60       # Remove one entry
        cleanx clean -s browser_cache --dry-run  # Preview only
        cleanx clean -s system_logs --yes        # No confirmation
    """
    if ctx.invoked_subcommand is not None:
        return

    scanner_ids = scanner or []
    entry_ids = entry_id or []
    if not scanner_ids and not entry_ids:
        print_error("Nothing selected. Use --scanner or --id (see 'cleanx scan').")
        raise typer.Exit(code=1)

    settings = load_settings()
    engine = create_engine(settings)

    unknown = [s for s in scanner_ids if s not in engine.registry]
    if unknown:
        print_error(f"Unknown scanner(s): {', '.join(unknown)}")
        raise typer.Exit(code=1)

    selection = select_entries(
        engine.scan(settings.scan.to_scan_config()),
        scanner_ids,
        entry_ids,
    )

    missing = set(entry_ids) - {e.id for e in selection}
    for mid in sorted(missing):
        print_warning(f"Entry '{mid}' not found in current scan results.")

    if not selection:
        print_info("Nothing to clean.")
        return

    json_output = output_format == OutputFormat.JSON
    simulate = settings.clean.dry_run_by_default if dry_run is None else dry_run
    preview = engine.preview(selection)

    if not json_output:
        table = create_entry_table("Selected Entries (Dry Run)" if simulate else "Selected Entries")
        for entry in selection:
            table.add_row(*format_entry_row(entry))
        console.print(table)

    if simulate:
        _report(preview, json_output)
        return

    if preview.succeeded == 0:
        _report(preview, json_output)
        if not json_output:
            print_info("Nothing can be deleted.")
        return

    if settings.clean.confirm_before_clean and not yes:
        if not _confirm_clean(preview.succeeded, preview.bytes_freed):
            print_info("Aborted.")
            raise typer.Exit(code=0)

    result = engine.execute(selection)
    _report(result, json_output)

    if result.failed:
        raise typer.Exit(code=1)


def _report(result: ExecutionResult, json_output: bool) -> None:
    if json_output:
        print_json(result.to_dict())
    else:
        print_result_summary(result)
