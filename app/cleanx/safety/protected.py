"""Protected filesystem paths that must never be deleted.

This module defines the deny-list of path prefixes and critical path
components that are essential to the operating system, user credentials,
or cleanx itself. Deletion of any path equal to, nested under, or
containing one of these prefixes is refused.
"""

import os
from collections.abc import Iterable
from pathlib import Path

from cleanx.core.paths import get_config_dir, get_state_dir
from cleanx.models.entry import normalize_path

# Protected path prefixes.
# Prefixes starting with ~ are expanded to the user's home directory
# before matching. Prefixes starting with / are matched as-is.
PROTECTED_PREFIXES: list[str] = [
    # Operating system
    "/System",
    "/usr",
    "/bin",
    "/sbin",
    "/etc",
    "/var/db",
    "/private/var/db",
    "/private/etc",
    "/boot",
    "/lib",
    "/lib64",
    "/proc",
    "/sys",
    "/dev",
    # Credentials and keys
    "~/.ssh",
    "~/.gnupg",
    "~/Library/Keychains",
    "~/.local/share/keyrings",
    # Password managers
    "~/.password-store",
    "~/Library/Application Support/1Password",
    "~/Library/Group Containers/2BUA8C4S2C.com.1password",
    "~/.config/1Password",
    "~/Library/Application Support/Bitwarden",
    "~/.config/Bitwarden",
    "~/.config/keepassxc",
]

# Path fragments that mark a location as critical wherever they appear.
CRITICAL_PATTERNS: tuple[str, ...] = (
    ".Spotlight-",
    ".fseventsd",
    ".Trashes",
    "Library/Keychains",
    "Library/Security",
    "Library/CoreServices",
    # Saved browser passwords
    "/Login Data",
    "/logins.json",
    "/key4.db",
)


def expand_prefixes(home: Path, extra: Iterable[str | os.PathLike[str]] = ()) -> tuple[str, ...]:
    """Expand the protected prefix list for a given home directory.

    The cleanx config and state directories are always included so the
    tool can never delete its own journal.

    Args:
        home: Home directory used to expand ~ prefixes.
        extra: Additional absolute prefixes to protect.

    Returns:
        Normalized absolute prefixes, without duplicates, in list order.
    """
    home_str = str(home)
    expanded: list[str] = []
    for prefix in PROTECTED_PREFIXES:
        raw = home_str + prefix[1:] if prefix.startswith("~") else prefix
        expanded.append(normalize_path(raw))

    expanded.append(normalize_path(get_config_dir()))
    expanded.append(normalize_path(get_state_dir()))
    expanded.extend(normalize_path(p) for p in extra)

    return tuple(dict.fromkeys(expanded))


def is_within(path: str, prefix: str) -> bool:
    """Check if a normalized path equals or lies beneath a normalized prefix."""
    if path == prefix:
        return True
    return path.startswith(prefix.rstrip(os.sep) + os.sep)


def matches_prefix(path: str, prefixes: Iterable[str]) -> str | None:
    """Find the protected prefix a path collides with.

    A path collides with a prefix when it is the prefix itself, lies
    beneath it, or is one of its ancestors (deleting an ancestor would
    delete the prefix too).

    Args:
        path: Normalized absolute path.
        prefixes: Normalized absolute prefixes.

    Returns:
        The first colliding prefix, or None.
    """
    for prefix in prefixes:
        if is_within(path, prefix) or is_within(prefix, path):
            return prefix
    return None


def matches_critical_pattern(path: str) -> str | None:
    """Find a critical path fragment contained in the path.

    Args:
        path: Absolute filesystem path.

    Returns:
        The first matching fragment, or None.
    """
    for pattern in CRITICAL_PATTERNS:
        if pattern in path:
            return pattern
    return None
