"""Scanner for application log files."""

import logging
from pathlib import Path

from cleanx.models.entry import DiscoveredEntry, ScannerCategory
from cleanx.models.scan_config import ScanConfig
from cleanx.scanners.base import Scanner, largest_first
from cleanx.utils.fs import walk_files

logger = logging.getLogger(__name__)

_LOG_ROOTS: tuple[str, ...] = ("Library/Logs",)

MAX_RESULTS: int = 100


class SystemLogsScanner(Scanner):
    """Finds individual log files below the user's log folders.

    Traversal stops at the configured max_depth.
    """

    @property
    def id(self) -> str:
        return "system_logs"

    @property
    def name(self) -> str:
        return "System Logs"

    @property
    def category(self) -> ScannerCategory:
        return ScannerCategory.SYSTEM

    @property
    def description(self) -> str:
        return "Log files written by applications and crash reporters"

    def roots(self) -> list[Path]:
        """Return the log roots that exist on this system."""
        return self._existing(self._home / r for r in _LOG_ROOTS)

    def is_available(self) -> bool:
        return bool(self.roots())

    def scan(self, config: ScanConfig) -> list[DiscoveredEntry]:
        entries: list[DiscoveredEntry] = []
        for root in self.roots():
            for file_entry in walk_files(root, config.max_depth, config.follow_symlinks):
                stats = self._measure_candidate(file_entry.path, config)
                if stats is None:
                    continue
                entries.append(self._entry(file_entry.path, stats))
        logger.debug("Found %d log files", len(entries))
        return largest_first(entries, MAX_RESULTS)
