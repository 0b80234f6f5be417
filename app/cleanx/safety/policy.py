"""Safety policy for deletion decisions.

The SafetyPolicy is consulted twice: at discovery time to assign a tier
to every entry, and again immediately before each deletion to catch
conditions that changed in between (such as a process starting).
"""

import logging
import os
from collections.abc import Iterable
from pathlib import Path

from cleanx.models.entry import SafetyTier, normalize_path
from cleanx.safety.processes import ProcessProbe, PsutilProcessProbe
from cleanx.safety.protected import (
    expand_prefixes,
    is_within,
    matches_critical_pattern,
    matches_prefix,
)

logger = logging.getLogger(__name__)


class SafetyPolicy:
    """Classifies paths by deletion risk and vetoes unsafe deletions.

    Classification is a pure function of the path and the deny-list
    fixed at construction; it never touches the filesystem. Refusal
    checks additionally consult the process probe on every call.

    Args:
        home: Home directory used to expand home-relative prefixes.
        probe: Source of running executables. Defaults to psutil.
        extra_protected: Additional absolute prefixes to protect.
    """

    def __init__(
        self,
        home: Path,
        *,
        probe: ProcessProbe | None = None,
        extra_protected: Iterable[str | os.PathLike[str]] = (),
    ) -> None:
        self._home = home
        self._probe = probe if probe is not None else PsutilProcessProbe()
        self._prefixes = expand_prefixes(home, extra_protected)

    @property
    def home(self) -> Path:
        """Home directory this policy was built for."""
        return self._home

    @property
    def protected_prefixes(self) -> tuple[str, ...]:
        """Normalized protected prefixes in evaluation order."""
        return self._prefixes

    def classify(self, path: str | os.PathLike[str]) -> SafetyTier:
        """Assign a safety tier to a path.

        Args:
            path: Filesystem path to classify.

        Returns:
            PROTECTED for deny-listed or critical paths, CAUTION for
            hidden entries, SAFE otherwise.
        """
        return self._classify(normalize_path(path))[0]

    def refusal_reason(self, path: str | os.PathLike[str]) -> str | None:
        """Explain why deleting a path must be refused right now.

        Evaluated fresh on every call; the result is never cached.

        Args:
            path: Filesystem path about to be deleted.

        Returns:
            Human-readable reason, or None if deletion is allowed.
        """
        normalized = normalize_path(path)
        tier, reason = self._classify(normalized)
        if tier is SafetyTier.PROTECTED:
            return reason

        running = self._running_under(normalized)
        if running is not None:
            return f"in use by running process {running}"
        return None

    def is_safe_to_delete(self, path: str | os.PathLike[str]) -> bool:
        """Check if a path may be deleted right now.

        Args:
            path: Filesystem path about to be deleted.

        Returns:
            True if no refusal reason applies.
        """
        return self.refusal_reason(path) is None

    def _classify(self, path: str) -> tuple[SafetyTier, str | None]:
        """Classify a normalized path and report which rule decided it."""
        prefix = matches_prefix(path, self._prefixes)
        if prefix is not None:
            return SafetyTier.PROTECTED, f"protected path ({prefix})"

        pattern = matches_critical_pattern(path)
        if pattern is not None:
            return SafetyTier.PROTECTED, f"critical system location ({pattern})"

        if os.path.basename(path).startswith("."):
            return SafetyTier.CAUTION, None

        return SafetyTier.SAFE, None

    def _running_under(self, path: str) -> str | None:
        """Find a running executable located at or beneath a path."""
        try:
            executables = self._probe.running_executables()
        except Exception as e:
            logger.warning("Process probe failed, assuming nothing is running: %s", e)
            return None

        for exe in executables:
            if is_within(normalize_path(exe), path):
                return exe
        return None
