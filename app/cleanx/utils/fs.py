"""Filesystem measurement helpers shared by the scanners.

All walkers use an explicit stack over os.scandir rather than recursion
so that deep trees cannot exhaust the interpreter stack, and every
per-entry OSError is swallowed so unreadable subtrees simply contribute
nothing.
"""

import os
import stat
from collections.abc import Iterator
from dataclasses import dataclass
from datetime import UTC, datetime


@dataclass(frozen=True, slots=True)
class PathStats:
    """Aggregate measurements of a file or directory tree.

    Attributes:
        size_bytes: Total size of all regular files.
        file_count: Number of regular files (1 for a file).
        dir_count: Number of directories beneath the root.
        last_accessed: Access time of the root (ISO 8601, UTC) if known.
        last_modified: Newest modification time seen (ISO 8601, UTC) if known.
    """

    size_bytes: int = 0
    file_count: int = 0
    dir_count: int = 0
    last_accessed: str | None = None
    last_modified: str | None = None


def to_iso(timestamp: float) -> str:
    """Convert a POSIX timestamp to an ISO 8601 UTC string."""
    return datetime.fromtimestamp(timestamp, tz=UTC).isoformat()


def measure(path: str | os.PathLike[str], follow_symlinks: bool = False) -> PathStats:
    """Measure a file or a whole directory tree.

    Symlinks are counted by their own size and never descended unless
    follow_symlinks is set. Unreadable entries are skipped.

    Args:
        path: File or directory to measure.
        follow_symlinks: Whether to descend into symlinked directories.

    Returns:
        PathStats for the path (all zeros if it cannot be read).
    """
    root = os.fspath(path)
    try:
        root_stat = os.stat(root, follow_symlinks=follow_symlinks)
    except OSError:
        return PathStats()

    accessed = to_iso(root_stat.st_atime)
    newest = root_stat.st_mtime

    if not stat.S_ISDIR(root_stat.st_mode):
        return PathStats(
            size_bytes=root_stat.st_size,
            file_count=1,
            last_accessed=accessed,
            last_modified=to_iso(newest),
        )

    total = 0
    files = 0
    dirs = 0
    stack: list[str] = [root]
    while stack:
        current = stack.pop()
        try:
            with os.scandir(current) as it:
                for entry in it:
                    try:
                        if entry.is_dir(follow_symlinks=follow_symlinks):
                            dirs += 1
                            stack.append(entry.path)
                            continue
                        st = entry.stat(follow_symlinks=follow_symlinks)
                        total += st.st_size
                        files += 1
                        newest = max(newest, st.st_mtime)
                    except OSError:
                        continue
        except OSError:
            continue

    return PathStats(
        size_bytes=total,
        file_count=files,
        dir_count=dirs,
        last_accessed=accessed,
        last_modified=to_iso(newest),
    )


def iter_children(path: str | os.PathLike[str]) -> Iterator[os.DirEntry[str]]:
    """Yield the direct children of a directory, sorted by name.

    Yields nothing if the directory is missing or unreadable.
    """
    try:
        with os.scandir(path) as it:
            entries = sorted(it, key=lambda e: e.name)
    except OSError:
        return
    yield from entries


def walk_files(
    root: str | os.PathLike[str],
    max_depth: int,
    follow_symlinks: bool = False,
    skip_dir_names: frozenset[str] = frozenset(),
) -> Iterator[os.DirEntry[str]]:
    """Yield regular files beneath a root, down to a depth limit.

    Files directly inside root are at depth 1; a max_depth of 0 yields
    nothing.

    Args:
        root: Directory to walk.
        max_depth: Deepest file level to report.
        follow_symlinks: Whether to descend into symlinked directories.
        skip_dir_names: Directory names that are never entered.

    Yields:
        DirEntry objects for regular files.
    """
    stack: list[tuple[str, int]] = [(os.fspath(root), 1)]
    while stack:
        current, depth = stack.pop()
        if depth > max_depth:
            continue
        try:
            with os.scandir(current) as it:
                entries = list(it)
        except OSError:
            continue
        for entry in entries:
            try:
                if entry.is_dir(follow_symlinks=follow_symlinks):
                    if entry.name not in skip_dir_names:
                        stack.append((entry.path, depth + 1))
                elif entry.is_file(follow_symlinks=follow_symlinks):
                    yield entry
            except OSError:
                continue


def format_size(size_bytes: int) -> str:
    """Convert a byte count to a human-readable string.

    Args:
        size_bytes: Size in bytes.

    Returns:
        Formatted size (e.g., '1.5 MB', '512 B').
    """
    if size_bytes < 0:
        return f"-{format_size(-size_bytes)}"
    units = ("B", "KB", "MB", "GB", "TB")
    value = float(size_bytes)
    for unit in units[:-1]:
        if value < 1024:
            return f"{int(value)} B" if unit == "B" else f"{value:.1f} {unit}"
        value /= 1024
    return f"{value:.1f} {units[-1]}"
