"""Deletion execution with safety re-checks and journaling.

The Executor is the only component that removes anything from disk.
Targets are processed strictly one after another, in selection order,
and each one is re-validated against the safety policy immediately
before removal.
"""

import logging
import os
import shutil
import time
from collections.abc import Iterable, Sequence
from dataclasses import dataclass

from cleanx.apps.resolver import AppResolver
from cleanx.core.journal import HistoryJournal
from cleanx.models.app import AppBundle, RelatedFile
from cleanx.models.entry import DiscoveredEntry, SafetyTier
from cleanx.models.execution import ExecutionResult, UninstallResult
from cleanx.models.journal import create_delete_entry
from cleanx.safety.policy import SafetyPolicy
from cleanx.utils.fs import measure

logger = logging.getLogger(__name__)

SKIP_PROTECTED = "protected"
SKIP_NOT_FOUND = "not found"
SKIP_SYSTEM_APP = "system application"
SKIP_SYSTEM_OWNED = "system-owned location"


@dataclass(frozen=True, slots=True)
class DeletionTarget:
    """A single path queued for removal.

    Attributes:
        path: Absolute filesystem path.
        size_bytes: Size credited when the path is removed.
        safety: Tier assigned when the path was discovered.
        skip_reason: If set, the target is skipped with this reason.
    """

    path: str
    size_bytes: int
    safety: SafetyTier = SafetyTier.SAFE
    skip_reason: str | None = None

    @classmethod
    def from_entry(cls, entry: DiscoveredEntry) -> "DeletionTarget":
        """Create a target from a discovered entry."""
        return cls(path=entry.path, size_bytes=entry.size_bytes, safety=entry.safety)

    @classmethod
    def from_related(cls, related: RelatedFile) -> "DeletionTarget":
        """Create a target from an application's related file."""
        return cls(
            path=related.path,
            size_bytes=related.size_bytes,
            skip_reason=SKIP_SYSTEM_OWNED if related.is_protected else None,
        )


class _BatchRecorder:
    """Accumulates per-target outcomes into an ExecutionResult."""

    def __init__(self, simulate: bool) -> None:
        self.simulate = simulate
        self.start = time.monotonic()
        self.bytes_freed = 0
        self.deleted: list[str] = []
        self.failures: list[tuple[str, str]] = []
        self.skips: list[tuple[str, str]] = []

    def success(self, target: DeletionTarget) -> None:
        self.deleted.append(target.path)
        self.bytes_freed += target.size_bytes

    def failure(self, target: DeletionTarget, reason: str) -> None:
        self.failures.append((target.path, reason))

    def skip(self, target: DeletionTarget, reason: str) -> None:
        self.skips.append((target.path, reason))

    def result(self) -> ExecutionResult:
        return ExecutionResult(
            succeeded=len(self.deleted),
            failed=len(self.failures),
            skipped=len(self.skips),
            bytes_freed=self.bytes_freed,
            failures=tuple(self.failures),
            skips=tuple(self.skips),
            deleted_paths=tuple(self.deleted),
            duration_seconds=time.monotonic() - self.start,
            simulated=self.simulate,
        )


def remove_path(path: str) -> None:
    """Remove a file, symlink, or directory tree.

    Directories (but not symlinks to directories) are removed
    recursively; everything else is unlinked.

    Raises:
        OSError: If removal fails.
    """
    if os.path.isdir(path) and not os.path.islink(path):
        shutil.rmtree(path)
    else:
        os.unlink(path)


class Executor:
    """Performs or simulates deletions and journals every success.

    Args:
        policy: Safety policy consulted before every removal.
        journal: Journal receiving one entry per removed path, or None
            to skip journaling.
        resolver: Resolver used to recognize system applications.
    """

    def __init__(
        self,
        policy: SafetyPolicy,
        journal: HistoryJournal | None,
        resolver: AppResolver,
    ) -> None:
        self._policy = policy
        self._journal = journal
        self._resolver = resolver

    def execute(
        self,
        selection: Sequence[DiscoveredEntry | RelatedFile],
        simulate: bool = False,
    ) -> ExecutionResult:
        """Delete (or simulate deleting) the selected entries.

        Discovered entries and related files may be mixed in one batch.
        Related files in system-owned locations are skipped.

        Args:
            selection: Entries to remove, processed in order.
            simulate: If True, report what would happen without touching
                the filesystem or the journal.

        Returns:
            ExecutionResult for the batch.
        """
        return self._run((_target_for(item) for item in selection), simulate)

    def uninstall(
        self,
        bundle: AppBundle,
        related: Sequence[RelatedFile],
        simulate: bool = False,
    ) -> UninstallResult:
        """Remove an application bundle, then its related files.

        System applications and applications the policy refuses (for
        example because they are running) are refused outright: every
        target is skipped. Otherwise the bundle and the related files are
        reported independently, and related files in system-owned
        locations are skipped.

        Args:
            bundle: Application bundle to remove.
            related: Related files to remove after the bundle.
            simulate: If True, make no changes.

        Returns:
            UninstallResult with separate bundle and related outcomes.
        """
        bundle_target = DeletionTarget(
            path=bundle.path,
            size_bytes=measure(bundle.path).size_bytes,
        )
        related_targets = [DeletionTarget.from_related(r) for r in related]

        if self._resolver.is_system_app(bundle):
            logger.warning("Refusing to uninstall system application %s", bundle.name)
            bundle_target = _with_skip(bundle_target, SKIP_SYSTEM_APP)
            related_targets = [_with_skip(t, SKIP_SYSTEM_APP) for t in related_targets]
        else:
            refusal = self._policy.refusal_reason(bundle.path)
            if refusal is not None:
                logger.warning("Refusing to uninstall %s: %s", bundle.name, refusal)
                bundle_target = _with_skip(bundle_target, refusal)
                related_targets = [_with_skip(t, refusal) for t in related_targets]

        app_result = self._run([bundle_target], simulate)
        related_result = self._run(related_targets, simulate)
        return UninstallResult(bundle_path=bundle.path, app=app_result, related=related_result)

    def _run(self, targets: Iterable[DeletionTarget], simulate: bool) -> ExecutionResult:
        """Process targets sequentially and summarize the outcome."""
        recorder = _BatchRecorder(simulate)

        for target in targets:
            reason = self._skip_reason(target)
            if reason is not None:
                logger.info("Skipping %s: %s", target.path, reason)
                recorder.skip(target, reason)
                continue

            if simulate:
                logger.info("Dry-run: would delete %s", target.path)
                recorder.success(target)
                continue

            try:
                remove_path(target.path)
            except OSError as e:
                logger.warning("Failed to delete %s: %s", target.path, e)
                recorder.failure(target, str(e))
                continue

            logger.info("Deleted %s", target.path)
            recorder.success(target)
            self._record(target)

        return recorder.result()

    def _skip_reason(self, target: DeletionTarget) -> str | None:
        """Decide whether a target must be skipped, checking state afresh."""
        if target.skip_reason is not None:
            return target.skip_reason
        if target.safety is SafetyTier.PROTECTED:
            return SKIP_PROTECTED
        refusal = self._policy.refusal_reason(target.path)
        if refusal is not None:
            return refusal
        if not os.path.lexists(target.path):
            return SKIP_NOT_FOUND
        return None

    def _record(self, target: DeletionTarget) -> None:
        """Journal a completed deletion; failures here never undo it."""
        if self._journal is None:
            return
        try:
            self._journal.append(create_delete_entry(target.path, target.size_bytes))
        except (OSError, RuntimeError) as e:
            logger.error("Failed to record deletion of %s in journal: %s", target.path, e)


def _target_for(item: DiscoveredEntry | RelatedFile) -> DeletionTarget:
    if isinstance(item, RelatedFile):
        return DeletionTarget.from_related(item)
    return DeletionTarget.from_entry(item)


def _with_skip(target: DeletionTarget, reason: str) -> DeletionTarget:
    return DeletionTarget(
        path=target.path,
        size_bytes=target.size_bytes,
        safety=target.safety,
        skip_reason=reason,
    )
