"""Scan parameters shared by every scanner."""

import os
from collections.abc import Iterable
from dataclasses import dataclass, field
from typing import Any

from cleanx.models.entry import normalize_path

DEFAULT_MIN_SIZE_BYTES: int = 1024 * 1024
DEFAULT_MAX_DEPTH: int = 3


@dataclass(frozen=True, slots=True)
class ScanConfig:
    """Immutable parameters passed to every scanner.

    A single instance is shared by reference across all concurrently
    running scanners; it carries no behavior beyond simple predicates.

    Attributes:
        min_size_bytes: Entries smaller than this are not reported.
        max_depth: Maximum traversal depth below each scan root.
        excluded_paths: Absolute path prefixes that are never reported.
        follow_symlinks: Whether traversal follows symbolic links.
    """

    min_size_bytes: int = DEFAULT_MIN_SIZE_BYTES
    max_depth: int = DEFAULT_MAX_DEPTH
    excluded_paths: tuple[str, ...] = field(default=())
    follow_symlinks: bool = False

    def __post_init__(self) -> None:
        """Validate and normalize configuration values."""
        if self.min_size_bytes < 0:
            msg = f"min_size_bytes cannot be negative, got {self.min_size_bytes}"
            raise ValueError(msg)
        if self.max_depth < 0:
            msg = f"max_depth cannot be negative, got {self.max_depth}"
            raise ValueError(msg)
        # frozen: normalize through object.__setattr__
        object.__setattr__(
            self,
            "excluded_paths",
            tuple(normalize_path(p) for p in self.excluded_paths),
        )

    @classmethod
    def create(
        cls,
        *,
        min_size_bytes: int = DEFAULT_MIN_SIZE_BYTES,
        max_depth: int = DEFAULT_MAX_DEPTH,
        excluded_paths: Iterable[str | os.PathLike[str]] = (),
        follow_symlinks: bool = False,
    ) -> "ScanConfig":
        """Build a ScanConfig from any iterable of paths.

        Args:
            min_size_bytes: Size floor in bytes.
            max_depth: Traversal depth limit.
            excluded_paths: Path prefixes to exclude (str or Path).
            follow_symlinks: Whether to follow symbolic links.

        Returns:
            New ScanConfig instance.
        """
        return cls(
            min_size_bytes=min_size_bytes,
            max_depth=max_depth,
            excluded_paths=tuple(os.fspath(p) for p in excluded_paths),
            follow_symlinks=follow_symlinks,
        )

    def is_excluded(self, path: str | os.PathLike[str]) -> bool:
        """Check if a path equals or lies beneath an excluded prefix.

        Args:
            path: Path to check.

        Returns:
            True if the path is excluded from scanning.
        """
        normalized = normalize_path(path)
        for prefix in self.excluded_paths:
            if normalized == prefix or normalized.startswith(prefix.rstrip(os.sep) + os.sep):
                return True
        return False

    def meets_size_floor(self, size_bytes: int) -> bool:
        """Check if a size is at or above the configured floor."""
        return size_bytes >= self.min_size_bytes

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        return {
            "min_size_bytes": self.min_size_bytes,
            "max_depth": self.max_depth,
            "excluded_paths": list(self.excluded_paths),
            "follow_symlinks": self.follow_symlinks,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "ScanConfig":
        """Deserialize from dictionary, using defaults for missing keys."""
        return cls.create(
            min_size_bytes=int(data.get("min_size_bytes", DEFAULT_MIN_SIZE_BYTES)),
            max_depth=int(data.get("max_depth", DEFAULT_MAX_DEPTH)),
            excluded_paths=data.get("excluded_paths", ()),
            follow_symlinks=bool(data.get("follow_symlinks", False)),
        )
