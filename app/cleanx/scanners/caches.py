"""Scanner for application and system caches.

Each direct child of a cache root (one folder per application, by
convention) is reported as a single entry.
"""

import logging
from pathlib import Path

from cleanx.models.entry import DiscoveredEntry, ScannerCategory
from cleanx.models.scan_config import ScanConfig
from cleanx.scanners.base import Scanner, largest_first
from cleanx.utils.fs import iter_children

logger = logging.getLogger(__name__)

# Cache roots (relative to user home)
_CACHE_ROOTS: tuple[str, ...] = (
    "Library/Caches",
    "Library/Developer/Xcode/DerivedData",
    ".cache",
)

MAX_RESULTS: int = 100


class SystemCachesScanner(Scanner):
    """Finds per-application cache folders.

    Cache contents are regenerated on demand by their owners, so entries
    are SAFE unless the policy says otherwise.
    """

    @property
    def id(self) -> str:
        return "system_caches"

    @property
    def name(self) -> str:
        return "System Caches"

    @property
    def category(self) -> ScannerCategory:
        return ScannerCategory.SYSTEM

    @property
    def description(self) -> str:
        return "Application caches, Xcode DerivedData and XDG cache folders"

    def roots(self) -> list[Path]:
        """Return the cache roots that exist on this system."""
        return self._existing(self._home / r for r in _CACHE_ROOTS)

    def is_available(self) -> bool:
        return bool(self.roots())

    def scan(self, config: ScanConfig) -> list[DiscoveredEntry]:
        entries: list[DiscoveredEntry] = []
        for root in self.roots():
            logger.debug("Scanning cache root %s", root)
            for child in iter_children(root):
                stats = self._measure_candidate(child.path, config)
                if stats is None:
                    continue
                entries.append(self._entry(child.path, stats))
        return largest_first(entries, MAX_RESULTS)
