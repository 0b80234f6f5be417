"""Rich console formatting utilities.

Provides consistent formatting for CLI output using Rich.
"""

from __future__ import annotations

import sys
from typing import TYPE_CHECKING

from rich.console import Console
from rich.markup import escape
from rich.table import Table
from rich.theme import Theme

from cleanx.utils.fs import format_size

if TYPE_CHECKING:
    from cleanx.models.entry import DiscoveredEntry, SafetyTier

CLEANX_THEME = Theme(
    {
        "text": "#ffffff",
        "muted": "#b2bec3",
        "header": "#69B9A1",
        "bold_header": "bold #69B9A1",
        "border": "#29526d",
        "success": "#03b971",
        "warning": "#f5b332",
        "error": "#f53263",
        "info": "#0ec1c8",
        "tier_safe": "#03b971",
        "tier_caution": "#faf870",
        "tier_protected": "#f53263",
    }
)


def _detect_color_system() -> str | None:
    """Detect the best color system for the current terminal.

    Returns "truecolor" for interactive terminals to enable full hex color support,
    None otherwise to let Rich auto-detect.
    """
    if sys.stdout.isatty():
        return "truecolor"
    return None


# Shared console instances
console = Console(theme=CLEANX_THEME, color_system=_detect_color_system())
err_console = Console(theme=CLEANX_THEME, stderr=True, color_system=_detect_color_system())


def create_entry_table(title: str = "Reclaimable Space") -> Table:
    """Create a pre-configured table for displaying discovered entries.

    Args:
        title: Table title.

    Returns:
        Rich Table configured for entry display.
    """
    table = Table(
        title=title,
        show_header=True,
        header_style="bold_header",
        border_style="border",
        row_styles=["", "on grey7"],  # Zebra striping for readability
    )
    table.add_column("ID", style="muted", no_wrap=True)
    table.add_column("Scanner", style="info", no_wrap=True)
    table.add_column("Name", style="text", overflow="ellipsis")
    table.add_column("Size", style="info", justify="right")
    table.add_column("Safety", justify="center")
    table.add_column("Path", style="muted", overflow="fold")
    return table


def format_tier(tier: SafetyTier) -> str:
    """Format a safety tier with color markup."""
    return f"[tier_{tier.value}]{tier.value}[/]"


def format_entry_row(entry: DiscoveredEntry) -> tuple[str, str, str, str, str, str]:
    """Format an entry as a table row with proper styling.

    Args:
        entry: The discovered entry to format.

    Returns:
        Tuple of (id, scanner, name, size, safety, path) with Rich markup.
    """
    return (
        entry.id,
        entry.scanner_id,
        escape(entry.name),
        format_size(entry.size_bytes),
        format_tier(entry.safety),
        escape(entry.path),
    )


def print_info(message: str) -> None:
    """Print an info message."""
    console.print(f"[info]{message}[/]")


def print_warning(message: str) -> None:
    """Print a warning message."""
    err_console.print(f"[warning]Warning:[/] {message}")


def print_error(message: str) -> None:
    """Print an error message."""
    err_console.print(f"[error]Error:[/] {message}")


def print_success(message: str) -> None:
    """Print a success message."""
    console.print(f"[success]{message}[/]")
