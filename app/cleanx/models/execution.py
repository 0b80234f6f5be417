"""Execution outcome models.

An ExecutionResult summarizes one batch of deletions (or a simulated
batch); an UninstallResult pairs the outcome for an application bundle
with the outcome for its related files.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any


class ExecutionStatus(str, Enum):
    """Overall outcome of a batch.

    Attributes:
        SUCCESS: Every attempted target succeeded.
        PARTIAL: Some targets succeeded and some failed.
        FAILED: Targets were attempted and none succeeded.
        EMPTY: Nothing was attempted (empty selection or everything skipped).
    """

    SUCCESS = "success"
    PARTIAL = "partial"
    FAILED = "failed"
    EMPTY = "empty"


@dataclass(frozen=True, slots=True)
class ExecutionResult:
    """Immutable summary of a deletion batch.

    Attributes:
        succeeded: Number of targets removed (or that would be removed).
        failed: Number of targets whose removal raised an error.
        skipped: Number of targets refused or no longer present.
        bytes_freed: Sum of sizes of succeeded targets.
        failures: (path, reason) for each failed target.
        skips: (path, reason) for each skipped target.
        deleted_paths: Paths removed (or that would be removed), in order.
        duration_seconds: Wall-clock time spent on the batch.
        simulated: True if no filesystem changes were made.
    """

    succeeded: int = 0
    failed: int = 0
    skipped: int = 0
    bytes_freed: int = 0
    failures: tuple[tuple[str, str], ...] = field(default=())
    skips: tuple[tuple[str, str], ...] = field(default=())
    deleted_paths: tuple[str, ...] = field(default=())
    duration_seconds: float = 0.0
    simulated: bool = False

    def __post_init__(self) -> None:
        """Validate counters after initialization."""
        if min(self.succeeded, self.failed, self.skipped, self.bytes_freed) < 0:
            msg = "Counters cannot be negative"
            raise ValueError(msg)
        if self.failed != len(self.failures):
            msg = f"failed={self.failed} does not match {len(self.failures)} failure records"
            raise ValueError(msg)
        if self.skipped != len(self.skips):
            msg = f"skipped={self.skipped} does not match {len(self.skips)} skip records"
            raise ValueError(msg)

    @property
    def total(self) -> int:
        """Number of targets in the batch."""
        return self.succeeded + self.failed + self.skipped

    @property
    def status(self) -> ExecutionStatus:
        """Overall outcome derived from the counters."""
        attempted = self.succeeded + self.failed
        if attempted == 0:
            return ExecutionStatus.EMPTY
        if self.failed == 0:
            return ExecutionStatus.SUCCESS
        if self.succeeded == 0:
            return ExecutionStatus.FAILED
        return ExecutionStatus.PARTIAL

    def to_dict(self) -> dict[str, Any]:
        """Serialize to dictionary for JSON output."""
        return {
            "succeeded": self.succeeded,
            "failed": self.failed,
            "skipped": self.skipped,
            "bytes_freed": self.bytes_freed,
            "failures": [{"path": p, "reason": r} for p, r in self.failures],
            "skips": [{"path": p, "reason": r} for p, r in self.skips],
            "deleted_paths": list(self.deleted_paths),
            "duration_seconds": self.duration_seconds,
            "simulated": self.simulated,
            "status": self.status.value,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "ExecutionResult":
        """Deserialize from dictionary.

        The derived 'status' key is ignored.

        Args:
            data: Dictionary produced by to_dict.

        Returns:
            ExecutionResult instance.

        Raises:
            ValueError: If counters are negative or disagree with the records.
        """
        failures = tuple((f["path"], f["reason"]) for f in data.get("failures", []))
        skips = tuple((s["path"], s["reason"]) for s in data.get("skips", []))
        return cls(
            succeeded=int(data.get("succeeded", 0)),
            failed=int(data.get("failed", len(failures))),
            skipped=int(data.get("skipped", len(skips))),
            bytes_freed=int(data.get("bytes_freed", 0)),
            failures=failures,
            skips=skips,
            deleted_paths=tuple(data.get("deleted_paths", [])),
            duration_seconds=float(data.get("duration_seconds", 0.0)),
            simulated=bool(data.get("simulated", False)),
        )


@dataclass(frozen=True, slots=True)
class UninstallResult:
    """Outcome of removing an application and its related files.

    The bundle and the related files are reported independently: a
    failed bundle removal does not prevent related-file cleanup.

    Attributes:
        bundle_path: Path of the application bundle.
        app: Result for the bundle itself.
        related: Result for the related files.
    """

    bundle_path: str
    app: ExecutionResult
    related: ExecutionResult

    @property
    def bytes_freed(self) -> int:
        """Combined bytes freed by the bundle and related files."""
        return self.app.bytes_freed + self.related.bytes_freed

    def to_dict(self) -> dict[str, Any]:
        """Serialize to dictionary for JSON output."""
        return {
            "bundle_path": self.bundle_path,
            "app": self.app.to_dict(),
            "related": self.related.to_dict(),
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "UninstallResult":
        """Deserialize from dictionary."""
        return cls(
            bundle_path=data["bundle_path"],
            app=ExecutionResult.from_dict(data["app"]),
            related=ExecutionResult.from_dict(data["related"]),
        )
