"""Abstract base class for cleanup scanners.

This module defines the Scanner interface that every discovery plugin
implements, plus the shared helpers for turning a filesystem path into
a classified DiscoveredEntry.
"""

import os
from abc import ABC, abstractmethod
from collections.abc import Iterable, Mapping
from pathlib import Path

from cleanx.models.entry import (
    DiscoveredEntry,
    SafetyTier,
    ScannerCategory,
    entry_id,
    normalize_path,
)
from cleanx.models.scan_config import ScanConfig
from cleanx.safety.policy import SafetyPolicy
from cleanx.utils.fs import PathStats, measure

DEFAULT_ESTIMATED_DURATION: float = 5.0


class Scanner(ABC):
    """Abstract base class for all cleanup scanners.

    Scanners are responsible for finding reclaimable paths in one kind of
    location and reporting them as classified entries. A scanner never
    deletes anything, holds no state between scans, and may run on a
    worker thread concurrently with other scanners.

    Args:
        home: Home directory that scan locations are resolved against.
        policy: Shared safety policy used to classify every entry.

    Example:
        >>> scanner = SystemCachesScanner(Path.home(), policy)
        >>> if scanner.is_available():
        ...     for entry in scanner.scan(ScanConfig()):
        ...         print(f"{entry.name}: {entry.size_bytes}")
    """

    def __init__(self, home: Path, policy: SafetyPolicy) -> None:
        self._home = home
        self._policy = policy

    @property
    @abstractmethod
    def id(self) -> str:
        """Return the unique, stable scanner identifier."""

    @property
    @abstractmethod
    def name(self) -> str:
        """Return the human-readable scanner name."""

    @property
    @abstractmethod
    def category(self) -> ScannerCategory:
        """Return the display category of this scanner's entries."""

    @property
    def description(self) -> str:
        """Return a one-line description of what this scanner finds."""
        return ""

    @property
    def estimated_duration(self) -> float:
        """Return the advisory scan duration in seconds."""
        return DEFAULT_ESTIMATED_DURATION

    @abstractmethod
    def scan(self, config: ScanConfig) -> list[DiscoveredEntry]:
        """Discover reclaimable entries.

        Args:
            config: Shared, read-only scan parameters.

        Returns:
            Entries found; possibly empty. Unreadable locations reduce
            the result instead of raising.
        """

    @abstractmethod
    def is_available(self) -> bool:
        """Check if this scanner has anything to look at on this system.

        Returns:
            True if at least one scan location exists.
        """

    @property
    def home(self) -> Path:
        """Home directory this scanner resolves locations against."""
        return self._home

    def _entry(
        self,
        path: str | os.PathLike[str],
        stats: PathStats,
        *,
        name: str | None = None,
        hint: SafetyTier = SafetyTier.SAFE,
        metadata: Mapping[str, str] | None = None,
    ) -> DiscoveredEntry:
        """Build a classified entry for a measured path.

        The policy tier and the scanner hint are combined so that a
        scanner can only ever raise the tier the policy assigns.

        Args:
            path: Path of the entry.
            stats: Measurements of the path.
            name: Display name (defaults to the final path component).
            hint: Minimum tier this scanner wants for the entry.
            metadata: Scanner-specific facts.

        Returns:
            New DiscoveredEntry.
        """
        normalized = normalize_path(path)
        return DiscoveredEntry(
            id=entry_id(normalized),
            name=name if name is not None else os.path.basename(normalized),
            path=normalized,
            scanner_id=self.id,
            category=self.category,
            size_bytes=stats.size_bytes,
            file_count=stats.file_count,
            dir_count=stats.dir_count,
            last_accessed=stats.last_accessed,
            last_modified=stats.last_modified,
            safety=SafetyTier.strictest(self._policy.classify(normalized), hint),
            metadata=dict(metadata or {}),
        )

    def _measure_candidate(
        self,
        path: str | os.PathLike[str],
        config: ScanConfig,
    ) -> PathStats | None:
        """Measure a path if it passes the exclusion and size filters.

        Returns:
            PathStats, or None if the path is excluded, unreadable, or
            smaller than the configured floor.
        """
        if config.is_excluded(path):
            return None
        if not config.follow_symlinks and os.path.islink(path):
            return None
        stats = measure(path, follow_symlinks=config.follow_symlinks)
        # measure() leaves timestamps unset when the root cannot be stat'ed
        if stats.last_accessed is None:
            return None
        if not config.meets_size_floor(stats.size_bytes):
            return None
        return stats

    def _existing(self, paths: Iterable[Path]) -> list[Path]:
        """Filter scan locations down to existing directories."""
        return [p for p in paths if p.is_dir()]


def largest_first(
    entries: Iterable[DiscoveredEntry],
    limit: int | None = None,
) -> list[DiscoveredEntry]:
    """Order entries by descending size and keep the largest ones.

    Ties are broken by path so the order is deterministic.

    Args:
        entries: Entries to order.
        limit: Maximum number of entries to keep.

    Returns:
        Sorted (and possibly truncated) list.
    """
    ordered = sorted(entries, key=lambda e: (-e.size_bytes, e.path))
    if limit is not None:
        return ordered[:limit]
    return ordered
