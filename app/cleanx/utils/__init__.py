"""Utility modules for cleanx.

This module exports commonly used utility functions.
"""

from cleanx.utils.formatting import (
    console,
    create_entry_table,
    err_console,
    print_error,
    print_info,
    print_success,
    print_warning,
)
from cleanx.utils.fs import PathStats, format_size, measure

__all__ = [
    "PathStats",
    "console",
    "create_entry_table",
    "err_console",
    "format_size",
    "measure",
    "print_error",
    "print_info",
    "print_success",
    "print_warning",
]
