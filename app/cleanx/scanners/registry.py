"""Central scanner registry and parallel scan orchestration."""

import logging
import time
from collections.abc import Callable, Iterable, Iterator
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass, field
from enum import Enum
from typing import Any

from cleanx.models.entry import DiscoveredEntry, ScannerCategory
from cleanx.models.scan_config import ScanConfig
from cleanx.scanners.base import Scanner

logger = logging.getLogger(__name__)

# Upper bound on concurrently running scanners
DEFAULT_MAX_WORKERS: int = 8


class ScanStatus(str, Enum):
    """Lifecycle state of one scanner during a scan."""

    STARTED = "started"
    COMPLETED = "completed"
    FAILED = "failed"


@dataclass(frozen=True, slots=True)
class ScanProgress:
    """Progress notification for one scanner.

    Attributes:
        scanner_id: Scanner the notification is about.
        status: What just happened.
        count: Number of entries found (for COMPLETED).
    """

    scanner_id: str
    status: ScanStatus
    count: int = 0


ProgressCallback = Callable[[ScanProgress], None]


@dataclass(frozen=True, slots=True)
class ScannerReport:
    """Outcome of running a single scanner.

    Attributes:
        scanner_id: Scanner identifier.
        name: Scanner display name.
        category: Scanner category.
        entries: Entries the scanner returned (empty on failure).
        error: Failure message if the scanner raised, None otherwise.
        duration_seconds: Time spent in the scanner.
    """

    scanner_id: str
    name: str
    category: ScannerCategory
    entries: tuple[DiscoveredEntry, ...] = ()
    error: str | None = None
    duration_seconds: float = 0.0

    @property
    def total_bytes(self) -> int:
        """Sum of entry sizes."""
        return sum(e.size_bytes for e in self.entries)

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        return {
            "scanner_id": self.scanner_id,
            "name": self.name,
            "category": self.category.value,
            "entries": [e.to_dict() for e in self.entries],
            "error": self.error,
            "duration_seconds": self.duration_seconds,
            "total_bytes": self.total_bytes,
        }


@dataclass(frozen=True, slots=True)
class ScanReport:
    """Per-scanner results of a full scan.

    Attributes:
        reports: One report per scanner that ran, in registration order.
        duration_seconds: Wall-clock time of the whole scan.
        entries: Merged entries, de-duplicated by id (first scanner wins).
    """

    reports: tuple[ScannerReport, ...]
    duration_seconds: float = 0.0
    entries: list[DiscoveredEntry] = field(default_factory=list)

    @property
    def total_bytes(self) -> int:
        """Sum of sizes of the merged entries."""
        return sum(e.size_bytes for e in self.entries)

    @property
    def failed(self) -> list[ScannerReport]:
        """Reports of scanners that raised."""
        return [r for r in self.reports if r.error is not None]

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        return {
            "reports": [r.to_dict() for r in self.reports],
            "duration_seconds": self.duration_seconds,
            "total_bytes": self.total_bytes,
        }


def merge_entries(groups: Iterable[Iterable[DiscoveredEntry]]) -> list[DiscoveredEntry]:
    """Concatenate entry groups, keeping the first entry seen for each id.

    Args:
        groups: Entry lists in priority order.

    Returns:
        Merged list preserving group order and in-group order.
    """
    seen: set[str] = set()
    merged: list[DiscoveredEntry] = []
    for group in groups:
        for entry in group:
            if entry.id in seen:
                continue
            seen.add(entry.id)
            merged.append(entry)
    return merged


class ScannerRegistry:
    """Stores scanners and runs them concurrently.

    Scanners run on a thread pool, one task per scanner. They share only
    the read-only ScanConfig, and results are merged after every task
    has finished. A scanner that raises contributes no entries and never
    aborts the scan.

    Args:
        max_workers: Thread pool size limit.
    """

    def __init__(self, max_workers: int = DEFAULT_MAX_WORKERS) -> None:
        self._scanners: dict[str, Scanner] = {}
        self._max_workers = max_workers

    def register(self, scanner: Scanner) -> bool:
        """Register a scanner instance.

        Args:
            scanner: Scanner to add.

        Returns:
            True if registered, False if the id was already taken.
        """
        if scanner.id in self._scanners:
            logger.warning("Scanner '%s' already registered, skipping duplicate", scanner.id)
            return False
        self._scanners[scanner.id] = scanner
        logger.debug("Registered scanner: %s (%s)", scanner.id, scanner.name)
        return True

    def get(self, scanner_id: str) -> Scanner | None:
        """Get a scanner by its id."""
        return self._scanners.get(scanner_id)

    def all(self) -> list[Scanner]:
        """Get all registered scanners in registration order."""
        return list(self._scanners.values())

    def scanners_by_category(self, category: ScannerCategory) -> list[Scanner]:
        """Get all scanners in a given category."""
        return [s for s in self._scanners.values() if s.category == category]

    def available(self, category: ScannerCategory | None = None) -> list[Scanner]:
        """Get scanners that report themselves available.

        An availability check that raises counts as unavailable.
        """
        candidates = (
            self.scanners_by_category(category) if category is not None else self.all()
        )
        result: list[Scanner] = []
        for scanner in candidates:
            try:
                if scanner.is_available():
                    result.append(scanner)
            except Exception:
                logger.exception("Error checking availability for scanner '%s'", scanner.id)
        return result

    def __len__(self) -> int:
        return len(self._scanners)

    def __iter__(self) -> Iterator[Scanner]:
        return iter(self._scanners.values())

    def __contains__(self, scanner_id: object) -> bool:
        return scanner_id in self._scanners

    def scan_all(
        self,
        config: ScanConfig,
        on_progress: ProgressCallback | None = None,
        category: ScannerCategory | None = None,
    ) -> list[DiscoveredEntry]:
        """Run every available scanner and merge the results.

        Args:
            config: Shared scan parameters.
            on_progress: Optional observer of per-scanner progress.
            category: Restrict the scan to one category.

        Returns:
            Entries in registration order, de-duplicated by id.
        """
        return self.run(config, on_progress, category).entries

    def run(
        self,
        config: ScanConfig,
        on_progress: ProgressCallback | None = None,
        category: ScannerCategory | None = None,
    ) -> ScanReport:
        """Run every available scanner and keep per-scanner results.

        Args:
            config: Shared scan parameters.
            on_progress: Optional observer of per-scanner progress.
            category: Restrict the scan to one category.

        Returns:
            ScanReport with one ScannerReport per scanner that ran.
        """
        start = time.monotonic()
        scanners = self.available(category)
        if not scanners:
            return ScanReport(reports=(), duration_seconds=time.monotonic() - start)

        workers = max(1, min(self._max_workers, len(scanners)))
        with ThreadPoolExecutor(max_workers=workers, thread_name_prefix="cleanx-scan") as pool:
            futures = [pool.submit(self._run_one, s, config, on_progress) for s in scanners]
            reports = tuple(f.result() for f in futures)

        duration = time.monotonic() - start
        logger.debug("Scan finished in %.2fs with %d scanners", duration, len(reports))
        return ScanReport(
            reports=reports,
            duration_seconds=duration,
            entries=merge_entries(r.entries for r in reports),
        )

    def _run_one(
        self,
        scanner: Scanner,
        config: ScanConfig,
        on_progress: ProgressCallback | None,
    ) -> ScannerReport:
        """Run one scanner, converting any exception into an error report."""
        _notify(on_progress, ScanProgress(scanner.id, ScanStatus.STARTED))
        start = time.monotonic()
        try:
            entries = tuple(scanner.scan(config))
        except Exception as e:
            logger.exception("Scanner '%s' failed during scan", scanner.id)
            _notify(on_progress, ScanProgress(scanner.id, ScanStatus.FAILED))
            return ScannerReport(
                scanner_id=scanner.id,
                name=scanner.name,
                category=scanner.category,
                error=str(e) or type(e).__name__,
                duration_seconds=time.monotonic() - start,
            )

        _notify(on_progress, ScanProgress(scanner.id, ScanStatus.COMPLETED, len(entries)))
        return ScannerReport(
            scanner_id=scanner.id,
            name=scanner.name,
            category=scanner.category,
            entries=entries,
            duration_seconds=time.monotonic() - start,
        )


def _notify(on_progress: ProgressCallback | None, progress: ScanProgress) -> None:
    """Deliver a progress notification; observer errors are only logged."""
    if on_progress is None:
        return
    try:
        on_progress(progress)
    except Exception:
        logger.exception("Progress callback failed for scanner '%s'", progress.scanner_id)
