"""Scanner for large files that have not been used in a long time."""

import logging
import os
import time
from pathlib import Path

from cleanx.models.entry import DiscoveredEntry, SafetyTier, ScannerCategory
from cleanx.models.scan_config import ScanConfig
from cleanx.safety.policy import SafetyPolicy
from cleanx.scanners.base import Scanner, largest_first
from cleanx.utils.fs import measure

logger = logging.getLogger(__name__)

# Size floor used when the scan config sets none
DEFAULT_MIN_SIZE_BYTES: int = 100 * 1024 * 1024
DEFAULT_MIN_AGE_DAYS: int = 30

# Folders that are managed elsewhere or hold media libraries (relative to home)
_EXCLUDED_DIRS: tuple[str, ...] = (
    "Library",
    ".Trash",
    "Applications",
    "Music",
    "Movies",
    "Pictures",
    ".config",
    ".cache",
    ".local",
)

MAX_RESULTS: int = 100

_SECONDS_PER_DAY = 86400


class LargeOldFilesScanner(Scanner):
    """Finds big files not accessed or modified for a month.

    These are user documents, so every entry is CAUTION. Hidden folders
    are not descended into.

    Args:
        home: Home directory to search.
        policy: Shared safety policy.
        min_age_days: Minimum days since last use.
    """

    def __init__(
        self,
        home: Path,
        policy: SafetyPolicy,
        min_age_days: int = DEFAULT_MIN_AGE_DAYS,
    ) -> None:
        super().__init__(home, policy)
        self._min_age_days = min_age_days
        self._excluded = tuple(str(home / d) for d in _EXCLUDED_DIRS)

    @property
    def id(self) -> str:
        return "large_old_files"

    @property
    def name(self) -> str:
        return "Large & Old Files"

    @property
    def category(self) -> ScannerCategory:
        return ScannerCategory.SYSTEM

    @property
    def description(self) -> str:
        return f"Files over the size floor unused for {self._min_age_days} days"

    @property
    def estimated_duration(self) -> float:
        return 15.0

    def is_available(self) -> bool:
        return self._home.is_dir()

    def scan(self, config: ScanConfig) -> list[DiscoveredEntry]:
        min_size = config.min_size_bytes or DEFAULT_MIN_SIZE_BYTES
        cutoff = time.time() - self._min_age_days * _SECONDS_PER_DAY
        entries: list[DiscoveredEntry] = []

        stack: list[tuple[str, int]] = [(str(self._home), 1)]
        while stack:
            current, depth = stack.pop()
            if depth > config.max_depth:
                continue
            try:
                with os.scandir(current) as it:
                    children = list(it)
            except OSError:
                continue
            for child in children:
                if child.path in self._excluded or config.is_excluded(child.path):
                    continue
                try:
                    if child.is_dir(follow_symlinks=config.follow_symlinks):
                        if not child.name.startswith("."):
                            stack.append((child.path, depth + 1))
                        continue
                    if not child.is_file(follow_symlinks=config.follow_symlinks):
                        continue
                    st = child.stat(follow_symlinks=config.follow_symlinks)
                except OSError:
                    continue
                if st.st_size < min_size:
                    continue
                # last use is the older of access and modification time
                if min(st.st_atime, st.st_mtime) > cutoff:
                    continue
                entries.append(
                    self._entry(
                        child.path,
                        measure(child.path, follow_symlinks=config.follow_symlinks),
                        hint=SafetyTier.CAUTION,
                    )
                )

        logger.debug("Found %d large old files", len(entries))
        return largest_first(entries, MAX_RESULTS)
