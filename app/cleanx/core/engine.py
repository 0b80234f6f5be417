"""Cleanup engine facade.

CleanEngine wires the scanners, the application resolver, the executor
and the journal together and is the single entry point used by the CLI
and by anything embedding cleanx. It holds no global state; every
dependency is passed in or built by create().
"""

import logging
from collections.abc import Sequence
from pathlib import Path

from cleanx.apps.resolver import AppResolver
from cleanx.core.executor import Executor
from cleanx.core.journal import HistoryJournal
from cleanx.core.paths import HomeDirectoryError, get_home_dir
from cleanx.models.app import AppBundle, RelatedFile
from cleanx.models.entry import DiscoveredEntry, ScannerCategory
from cleanx.models.execution import ExecutionResult, UninstallResult
from cleanx.models.journal import JournalEntry
from cleanx.models.scan_config import ScanConfig
from cleanx.safety.policy import SafetyPolicy
from cleanx.safety.processes import ProcessProbe
from cleanx.scanners import default_registry
from cleanx.scanners.registry import ProgressCallback, ScannerRegistry, ScanReport

logger = logging.getLogger(__name__)


class CleanEngine:
    """Discovers, previews and removes reclaimable files.

    Args:
        home: Home directory everything is resolved against.
        policy: Safety policy shared by scanners and the executor.
        registry: Scanners to run.
        resolver: Application resolver.
        journal: Deletion journal.
        record_history: Whether deletions are written to the journal.
    """

    def __init__(
        self,
        home: Path,
        policy: SafetyPolicy,
        registry: ScannerRegistry,
        resolver: AppResolver,
        journal: HistoryJournal,
        record_history: bool = True,
    ) -> None:
        self._home = home
        self._policy = policy
        self._registry = registry
        self._resolver = resolver
        self._journal = journal
        self._executor = Executor(policy, journal if record_history else None, resolver)

    @classmethod
    def create(
        cls,
        home: Path | None = None,
        state_dir: Path | None = None,
        probe: ProcessProbe | None = None,
        *,
        record_history: bool = True,
        app_dirs: Sequence[Path] | None = None,
        system_library: Path | None = None,
    ) -> "CleanEngine":
        """Build an engine with the default scanners and collaborators.

        Args:
            home: Home directory. Defaults to the current user's.
            state_dir: Directory holding history.jsonl. Defaults to the
                XDG state directory.
            probe: Running-process probe. Defaults to psutil.
            record_history: Whether deletions are journaled.
            app_dirs: Application folders (defaults to /Applications
                and ~/Applications).
            system_library: System Library folder (defaults to /Library).

        Returns:
            Ready-to-use CleanEngine.

        Raises:
            HomeDirectoryError: If no usable home directory exists.
        """
        if home is None:
            home = get_home_dir()
        elif not home.is_dir():
            msg = f"Home directory does not exist: {home}"
            raise HomeDirectoryError(msg)

        journal = HistoryJournal(state_dir / "history.jsonl" if state_dir is not None else None)
        policy = SafetyPolicy(home, probe=probe, extra_protected=[journal.path.parent])
        resolver = AppResolver(
            home,
            app_dirs=app_dirs,
            system_library=system_library if system_library is not None else Path("/Library"),
        )
        registry = default_registry(home, policy, resolver)
        logger.debug("Engine created for %s with %d scanners", home, len(registry))
        return cls(home, policy, registry, resolver, journal, record_history=record_history)

    @property
    def home(self) -> Path:
        """Home directory this engine operates on."""
        return self._home

    @property
    def policy(self) -> SafetyPolicy:
        """Shared safety policy."""
        return self._policy

    @property
    def registry(self) -> ScannerRegistry:
        """Registered scanners."""
        return self._registry

    @property
    def journal(self) -> HistoryJournal:
        """Deletion journal."""
        return self._journal

    def scan(self, config: ScanConfig | None = None) -> list[DiscoveredEntry]:
        """Run every available scanner and merge the results."""
        return self._registry.scan_all(config or ScanConfig())

    def scan_category(
        self,
        category: ScannerCategory,
        config: ScanConfig | None = None,
    ) -> list[DiscoveredEntry]:
        """Run only the scanners of one category."""
        return self._registry.scan_all(config or ScanConfig(), category=category)

    def scan_report(
        self,
        config: ScanConfig | None = None,
        on_progress: ProgressCallback | None = None,
        category: ScannerCategory | None = None,
    ) -> ScanReport:
        """Run the scanners and keep per-scanner results and errors."""
        return self._registry.run(config or ScanConfig(), on_progress, category)

    def resolve_app(self, name_or_path: str) -> AppBundle | None:
        """Find an installed application by path or name."""
        return self._resolver.resolve_app(name_or_path)

    def list_apps(self) -> list[AppBundle]:
        """List installed applications sorted by name."""
        return self._resolver.list_all()

    def is_system_app(self, bundle: AppBundle) -> bool:
        """Whether the application ships with the operating system."""
        return self._resolver.is_system_app(bundle)

    def find_related(self, bundle: AppBundle) -> list[RelatedFile]:
        """Find the Library files belonging to an application."""
        return self._resolver.find_related(bundle)

    def find_related_many(self, bundles: Sequence[AppBundle]) -> dict[str, list[RelatedFile]]:
        """Find related files for several applications at once."""
        return self._resolver.find_related_many(bundles)

    def preview(self, selection: Sequence[DiscoveredEntry | RelatedFile]) -> ExecutionResult:
        """Report what executing the selection would do, without changing anything."""
        return self._executor.execute(selection, simulate=True)

    def execute(self, selection: Sequence[DiscoveredEntry | RelatedFile]) -> ExecutionResult:
        """Delete the selected entries and related files."""
        return self._executor.execute(selection, simulate=False)

    def uninstall(
        self,
        bundle: AppBundle,
        related: Sequence[RelatedFile] | None = None,
        simulate: bool = False,
    ) -> UninstallResult:
        """Remove an application and its related files.

        Args:
            bundle: Application to remove.
            related: Related files to remove. Discovered if None.
            simulate: If True, make no changes.

        Returns:
            UninstallResult with separate bundle and related outcomes.
        """
        if related is None:
            related = self._resolver.find_related(bundle)
        return self._executor.uninstall(bundle, related, simulate=simulate)

    def history(self, limit: int | None = None) -> tuple[JournalEntry, ...]:
        """Read the deletion journal, oldest first."""
        return self._journal.read_all(limit)
