"""Scanner for the user's trash folders."""

from pathlib import Path

from cleanx.models.entry import DiscoveredEntry, ScannerCategory
from cleanx.models.scan_config import ScanConfig
from cleanx.scanners.base import Scanner

_TRASH_DIRS: tuple[str, ...] = (
    ".Trash",
    ".local/share/Trash",
)


class TrashScanner(Scanner):
    """Reports each trash folder as one entry.

    Empty trash folders are not reported.
    """

    @property
    def id(self) -> str:
        return "trash"

    @property
    def name(self) -> str:
        return "Trash"

    @property
    def category(self) -> ScannerCategory:
        return ScannerCategory.TRASH

    @property
    def description(self) -> str:
        return "Files already moved to the trash"

    @property
    def estimated_duration(self) -> float:
        return 1.0

    def roots(self) -> list[Path]:
        """Return the trash folders that exist on this system."""
        return self._existing(self._home / d for d in _TRASH_DIRS)

    def is_available(self) -> bool:
        return bool(self.roots())

    def scan(self, config: ScanConfig) -> list[DiscoveredEntry]:
        entries: list[DiscoveredEntry] = []
        for root in self.roots():
            stats = self._measure_candidate(root, config)
            if stats is None or stats.size_bytes == 0:
                continue
            entries.append(self._entry(root, stats, name="Trash"))
        return entries
