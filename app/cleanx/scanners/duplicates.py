"""Scanner for duplicate files in user folders.

Files are grouped by size first and only same-size candidates are
hashed, so most files are never read.
"""

import hashlib
import logging
import os
from collections import defaultdict
from pathlib import Path

from cleanx.models.entry import DiscoveredEntry, SafetyTier, ScannerCategory
from cleanx.models.scan_config import ScanConfig
from cleanx.scanners.base import Scanner, largest_first
from cleanx.utils.fs import measure, walk_files

logger = logging.getLogger(__name__)

_SEARCH_DIRS: tuple[str, ...] = (
    "Documents",
    "Downloads",
    "Desktop",
    "Pictures",
    "Movies",
    "Music",
)

# Files smaller than this are never considered duplicates
MIN_DUPLICATE_SIZE: int = 1024

_CHUNK_SIZE = 1024 * 1024


def file_digest(path: str) -> str | None:
    """Compute the SHA-256 of a file's contents.

    Returns:
        Hex digest, or None if the file cannot be read.
    """
    hasher = hashlib.sha256()
    try:
        with open(path, "rb") as f:
            for chunk in iter(lambda: f.read(_CHUNK_SIZE), b""):
                hasher.update(chunk)
    except OSError as e:
        logger.debug("Cannot hash %s: %s", path, e)
        return None
    return hasher.hexdigest()


class DuplicatesScanner(Scanner):
    """Finds files with identical contents.

    Within each group of identical files the oldest copy (by
    modification time) is treated as the original and kept; every other
    copy is reported as a CAUTION entry.
    """

    @property
    def id(self) -> str:
        return "duplicates"

    @property
    def name(self) -> str:
        return "Duplicates"

    @property
    def category(self) -> ScannerCategory:
        return ScannerCategory.SYSTEM

    @property
    def description(self) -> str:
        return "Identical copies of files in Documents, Downloads and media folders"

    @property
    def estimated_duration(self) -> float:
        return 30.0

    def roots(self) -> list[Path]:
        """Return the search folders that exist on this system."""
        return self._existing(self._home / d for d in _SEARCH_DIRS)

    def is_available(self) -> bool:
        return bool(self.roots())

    def scan(self, config: ScanConfig) -> list[DiscoveredEntry]:
        floor = max(MIN_DUPLICATE_SIZE, config.min_size_bytes)

        by_size: dict[int, list[tuple[str, float]]] = defaultdict(list)
        for root in self.roots():
            for file_entry in walk_files(root, config.max_depth, config.follow_symlinks):
                if file_entry.name.startswith(".") or config.is_excluded(file_entry.path):
                    continue
                try:
                    st = file_entry.stat(follow_symlinks=config.follow_symlinks)
                except OSError:
                    continue
                if st.st_size >= floor:
                    by_size[st.st_size].append((file_entry.path, st.st_mtime))

        by_content: dict[tuple[int, str], list[tuple[str, float]]] = defaultdict(list)
        for size, files in by_size.items():
            if len(files) < 2:
                continue
            for path, mtime in files:
                digest = file_digest(path)
                if digest is not None:
                    by_content[(size, digest)].append((path, mtime))

        entries: list[DiscoveredEntry] = []
        for (_size, digest), files in by_content.items():
            if len(files) < 2:
                continue
            files.sort(key=lambda f: (f[1], f[0]))
            original = files[0][0]
            for path, _mtime in files[1:]:
                entries.append(
                    self._entry(
                        path,
                        measure(path, follow_symlinks=config.follow_symlinks),
                        hint=SafetyTier.CAUTION,
                        metadata={
                            "original_path": original,
                            "sha256": digest,
                            "copies": str(len(files)),
                        },
                    )
                )

        logger.debug("Found %d duplicate files", len(entries))
        return largest_first(entries)
