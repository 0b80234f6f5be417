"""Unit tests for InstalledAppsScanner."""

from collections.abc import Callable
from pathlib import Path

from cleanx.apps.resolver import AppResolver
from cleanx.models.entry import SafetyTier, ScannerCategory
from cleanx.models.scan_config import ScanConfig
from cleanx.safety.policy import SafetyPolicy
from cleanx.scanners.apps import InstalledAppsScanner


class TestInstalledAppsScanner:
    """Tests for InstalledAppsScanner."""

    def test_reports_bundles(
        self,
        home: Path,
        policy: SafetyPolicy,
        app_dir: Path,
        make_app: Callable[..., Path],
    ) -> None:
        """Each bundle is an entry carrying its manifest metadata."""
        make_app(app_dir, "Editor", "com.example.Editor", "2.1", payload_size=4096)
        make_app(app_dir, "Safari", "com.apple.Safari", payload_size=1024)
        scanner = InstalledAppsScanner(home, policy, AppResolver(home, app_dirs=[app_dir]))

        entries = scanner.scan(ScanConfig(min_size_bytes=0))

        assert scanner.category is ScannerCategory.APPS
        assert [e.name for e in entries] == ["Editor", "Safari"]
        editor, safari = entries
        assert editor.metadata == {"bundle_id": "com.example.Editor", "version": "2.1"}
        assert editor.safety is SafetyTier.CAUTION
        assert safari.safety is SafetyTier.PROTECTED

    def test_bundle_without_manifest(
        self, home: Path, policy: SafetyPolicy, app_dir: Path
    ) -> None:
        """A bundle without Info.plist is named after its folder."""
        (app_dir / "Bare.app").mkdir()
        scanner = InstalledAppsScanner(home, policy, AppResolver(home, app_dirs=[app_dir]))

        entries = scanner.scan(ScanConfig(min_size_bytes=0))

        assert [(e.name, e.metadata) for e in entries] == [("Bare", {})]

    def test_availability(self, home: Path, policy: SafetyPolicy, tmp_path: Path) -> None:
        """Available only when an application folder exists."""
        resolver = AppResolver(home, app_dirs=[tmp_path / "nowhere"])
        assert not InstalledAppsScanner(home, policy, resolver).is_available()
