"""Discovery models for scanning and classification.

This module defines the core data structures for representing
reclaimable filesystem entries discovered during scanning, including
the safety tiers that gate their deletion and the scanner categories
used for grouping.
"""

import hashlib
import os
from dataclasses import dataclass, field
from enum import Enum
from typing import Any


class SafetyTier(str, Enum):
    """Deletion risk classification of a filesystem path.

    Tiers are ordered from least to most restrictive.

    Attributes:
        SAFE: Regenerable data, deletable with user consent.
        CAUTION: Deletable with user consent, but may hold user state.
        PROTECTED: Never deletable, regardless of caller intent.
    """

    SAFE = "safe"
    CAUTION = "caution"
    PROTECTED = "protected"

    @property
    def rank(self) -> int:
        """Position in the restrictiveness order (higher is stricter)."""
        return _TIER_ORDER.index(self)

    @property
    def is_deletable(self) -> bool:
        """Check if entries of this tier may be deleted at all."""
        return self is not SafetyTier.PROTECTED

    @classmethod
    def strictest(cls, *tiers: "SafetyTier") -> "SafetyTier":
        """Return the most restrictive of the given tiers.

        Args:
            tiers: One or more tiers to compare.

        Returns:
            The tier with the highest rank.
        """
        if not tiers:
            msg = "strictest() requires at least one tier"
            raise ValueError(msg)
        return max(tiers, key=lambda t: t.rank)


_TIER_ORDER: tuple[SafetyTier, ...] = (
    SafetyTier.SAFE,
    SafetyTier.CAUTION,
    SafetyTier.PROTECTED,
)


class ScannerCategory(str, Enum):
    """Display grouping for scanners and their entries."""

    SYSTEM = "system"
    BROWSER = "browser"
    DEVELOPMENT = "development"
    APPS = "apps"
    TRASH = "trash"

    @property
    def display_name(self) -> str:
        """Human-readable category name."""
        return self.value.capitalize()


def normalize_path(path: str | os.PathLike[str]) -> str:
    """Return the absolute, lexically normalized form of a path.

    Does not touch the filesystem (no symlink resolution), so the result
    is stable for paths that no longer exist.
    """
    return os.path.normpath(os.path.abspath(os.fspath(path)))


def entry_id(path: str | os.PathLike[str]) -> str:
    """Derive the stable identifier for a discovered path.

    The identifier depends only on the normalized path, so re-scanning
    an unchanged filesystem yields identical identifiers.

    Args:
        path: Filesystem path of the entry.

    Returns:
        16-character hex digest.
    """
    digest = hashlib.sha256(normalize_path(path).encode("utf-8", "surrogateescape"))
    return digest.hexdigest()[:16]


@dataclass(frozen=True, slots=True)
class DiscoveredEntry:
    """A single reclaimable unit found by a scanner.

    Entries are transient views of filesystem state: they are recomputed
    on every scan and never persisted by the core. The path existed at
    discovery time but may vanish before execution.

    Attributes:
        id: Stable identifier derived from the path.
        name: Short human-readable label.
        path: Absolute filesystem path.
        scanner_id: Identifier of the scanner that produced this entry.
        category: Category of the producing scanner.
        size_bytes: Total size in bytes (recursive for directories).
        file_count: Number of files beneath the path (1 for a file).
        dir_count: Number of directories beneath the path.
        last_accessed: Last access time (ISO 8601, UTC) if known.
        last_modified: Last modification time (ISO 8601, UTC) if known.
        safety: Safety tier assigned at discovery time.
        metadata: Scanner-specific facts (e.g., bundle_id).
    """

    id: str
    name: str
    path: str
    scanner_id: str
    category: ScannerCategory
    size_bytes: int
    file_count: int = 0
    dir_count: int = 0
    last_accessed: str | None = None
    last_modified: str | None = None
    safety: SafetyTier = SafetyTier.SAFE
    metadata: dict[str, str] = field(default_factory=lambda: {})

    def __post_init__(self) -> None:
        """Validate entry data after initialization."""
        if not self.path:
            msg = "Path cannot be empty"
            raise ValueError(msg)
        if not self.id:
            msg = "Entry ID cannot be empty"
            raise ValueError(msg)
        if self.size_bytes < 0:
            msg = f"Size cannot be negative, got {self.size_bytes}"
            raise ValueError(msg)
        if self.file_count < 0 or self.dir_count < 0:
            msg = "File and directory counts cannot be negative"
            raise ValueError(msg)

    def to_dict(self) -> dict[str, Any]:
        """Serialize to dictionary for JSON storage.

        Returns:
            Dictionary representation of the entry.
        """
        return {
            "id": self.id,
            "name": self.name,
            "path": self.path,
            "scanner_id": self.scanner_id,
            "category": self.category.value,
            "size_bytes": self.size_bytes,
            "file_count": self.file_count,
            "dir_count": self.dir_count,
            "last_accessed": self.last_accessed,
            "last_modified": self.last_modified,
            "safety": self.safety.value,
            "metadata": dict(self.metadata),
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "DiscoveredEntry":
        """Deserialize from dictionary.

        Args:
            data: Dictionary containing entry data.

        Returns:
            DiscoveredEntry instance.

        Raises:
            KeyError: If required fields are missing.
            ValueError: If category, safety or sizes are invalid.
        """
        return cls(
            id=data["id"],
            name=data.get("name", ""),
            path=data["path"],
            scanner_id=data["scanner_id"],
            category=ScannerCategory(data["category"]),
            size_bytes=int(data["size_bytes"]),
            file_count=int(data.get("file_count", 0)),
            dir_count=int(data.get("dir_count", 0)),
            last_accessed=data.get("last_accessed"),
            last_modified=data.get("last_modified"),
            safety=SafetyTier(data.get("safety", SafetyTier.SAFE.value)),
            metadata={str(k): str(v) for k, v in data.get("metadata", {}).items()},
        )
