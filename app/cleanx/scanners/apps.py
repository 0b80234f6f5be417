"""Scanner for installed application bundles."""

from pathlib import Path

from cleanx.apps.resolver import AppResolver
from cleanx.models.entry import DiscoveredEntry, SafetyTier, ScannerCategory
from cleanx.models.scan_config import ScanConfig
from cleanx.safety.policy import SafetyPolicy
from cleanx.scanners.base import Scanner, largest_first


class InstalledAppsScanner(Scanner):
    """Reports every installed application bundle with its size.

    Applications are user choices rather than junk, so entries are
    CAUTION; bundles that ship with the OS are PROTECTED.

    Args:
        home: Home directory.
        policy: Shared safety policy.
        resolver: Application resolver (defaults to one built for home).
    """

    def __init__(
        self,
        home: Path,
        policy: SafetyPolicy,
        resolver: AppResolver | None = None,
    ) -> None:
        super().__init__(home, policy)
        self._resolver = resolver if resolver is not None else AppResolver(home)

    @property
    def id(self) -> str:
        return "installed_apps"

    @property
    def name(self) -> str:
        return "Applications"

    @property
    def category(self) -> ScannerCategory:
        return ScannerCategory.APPS

    @property
    def description(self) -> str:
        return "Installed application bundles"

    @property
    def estimated_duration(self) -> float:
        return 10.0

    def is_available(self) -> bool:
        return any(d.is_dir() for d in self._resolver.app_dirs)

    def scan(self, config: ScanConfig) -> list[DiscoveredEntry]:
        entries: list[DiscoveredEntry] = []
        for bundle in self._resolver.list_all():
            stats = self._measure_candidate(bundle.path, config)
            if stats is None:
                continue
            metadata: dict[str, str] = {}
            if bundle.bundle_id:
                metadata["bundle_id"] = bundle.bundle_id
            if bundle.version:
                metadata["version"] = bundle.version
            hint = (
                SafetyTier.PROTECTED
                if self._resolver.is_system_app(bundle)
                else SafetyTier.CAUTION
            )
            entries.append(
                self._entry(bundle.path, stats, name=bundle.name, hint=hint, metadata=metadata)
            )
        return largest_first(entries)
