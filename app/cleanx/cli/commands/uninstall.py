"""Uninstall command implementation.

Removes an application bundle together with the files it left in the
user's Library.
"""

from typing import Annotated

import typer
from rich.markup import escape
from rich.table import Table

from cleanx.cli.common import create_engine, load_settings, print_result_summary
from cleanx.models.app import AppBundle, RelatedFile
from cleanx.utils.formatting import console, print_error, print_info
from cleanx.utils.fs import format_size


def _create_related_table(bundle: AppBundle, related: list[RelatedFile]) -> Table:
    """Create a Rich table of the files that belong to an application.

    Args:
        bundle: Application being removed.
        related: Its related files.

    Returns:
        Rich Table listing location, size and path of each file.
    """
    table = Table(
        title=f"Files belonging to {bundle.name}",
        show_header=True,
        header_style="bold_header",
        border_style="border",
    )
    table.add_column("Location", style="muted")
    table.add_column("Size", justify="right")
    table.add_column("Path", overflow="fold")

    for item in related:
        location = item.category.display_name
        if item.is_protected:
            location = f"{location} [warning](kept)[/warning]"
        table.add_row(location, format_size(item.size_bytes), escape(item.path))

    return table


def uninstall_command(
    name: Annotated[
        str,
        typer.Argument(help="Application name or path to its .app bundle."),
    ],
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
) -> None:
    """Uninstall an application.

    Removes the application bundle, then its caches, preferences, logs
    and other support files. Files in system-owned locations are listed
    but kept. Applications that ship with the system are refused.

    Examples:
        cleanx uninstall Slack                      # Remove Slack
        cleanx uninstall /Applications/Foo.app -y   # By path, no prompt
        cleanx uninstall Slack --dry-run            # Preview only
    """
    settings = load_settings()
    engine = create_engine(settings)

    bundle = engine.resolve_app(name)
    if bundle is None:
        print_error(f"Application not found: {name}")
        raise typer.Exit(code=1)

    if engine.is_system_app(bundle):
        print_error(f"{bundle.name} is a system application and cannot be uninstalled.")
        raise typer.Exit(code=1)

    related = engine.find_related(bundle)
    version = f" {bundle.version}" if bundle.version else ""
    console.print(f"[bold]{escape(bundle.name)}[/]{version} [muted]{escape(bundle.path)}[/]")
    if related:
        console.print(_create_related_table(bundle, related))
    else:
        print_info("No related files found.")

    simulate = settings.clean.dry_run_by_default if dry_run is None else dry_run
    if simulate:
        preview = engine.uninstall(bundle, related, simulate=True)
        print_result_summary(preview.app, "application")
        print_result_summary(preview.related, "related file(s)")
        return

    if settings.clean.confirm_before_clean and not yes:
        confirmed = typer.confirm(f"\nUninstall {bundle.name}?", default=False)
        if not confirmed:
            print_info("Aborted.")
            raise typer.Exit(code=0)

    result = engine.uninstall(bundle, related)
    print_result_summary(result.app, "application")
    print_result_summary(result.related, "related file(s)")

    if result.app.failed or result.related.failed:
        raise typer.Exit(code=1)
