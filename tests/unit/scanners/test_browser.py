"""Unit tests for BrowserCacheScanner and PrivacyScanner."""

from collections.abc import Callable
from pathlib import Path

from cleanx.models.entry import SafetyTier, ScannerCategory
from cleanx.models.scan_config import ScanConfig
from cleanx.safety.policy import SafetyPolicy
from cleanx.scanners.browser import BrowserCacheScanner
from cleanx.scanners.privacy import PrivacyScanner


class TestBrowserCacheScanner:
    """Tests for BrowserCacheScanner."""

    def test_reports_known_browser_caches(
        self, home: Path, policy: SafetyPolicy, make_file: Callable[..., Path]
    ) -> None:
        """Known cache folders are reported with the browser name."""
        make_file(home / "Library" / "Caches" / "Google" / "Chrome" / "data", 800)
        make_file(home / ".cache" / "mozilla" / "firefox" / "cache2", 400)

        scanner = BrowserCacheScanner(home, policy)
        entries = scanner.scan(ScanConfig(min_size_bytes=0))

        assert scanner.category is ScannerCategory.BROWSER
        assert [e.name for e in entries] == ["Chrome Cache", "Firefox Cache"]
        assert entries[0].metadata == {"browser": "Chrome"}

    def test_unavailable_without_browsers(self, home: Path, policy: SafetyPolicy) -> None:
        """No browser cache folders means unavailable."""
        assert not BrowserCacheScanner(home, policy).is_available()


class TestPrivacyScanner:
    """Tests for PrivacyScanner."""

    def test_traces_are_caution(
        self, home: Path, policy: SafetyPolicy, make_file: Callable[..., Path]
    ) -> None:
        """Cookie and history files are at least CAUTION."""
        make_file(home / "Library" / "Cookies" / "Cookies.binarycookies", 100)
        make_file(home / "Library" / "Safari" / "History.db", 200)

        entries = PrivacyScanner(home, policy).scan(ScanConfig(min_size_bytes=0))

        assert {e.name for e in entries} == {"Safari Cookies", "Safari History"}
        assert all(e.safety is SafetyTier.CAUTION for e in entries)

    def test_login_data_is_protected(
        self, home: Path, policy: SafetyPolicy, make_file: Callable[..., Path]
    ) -> None:
        """Saved credentials are reported as PROTECTED."""
        make_file(home / ".config" / "google-chrome" / "Default" / "Login Data", 100)

        entries = PrivacyScanner(home, policy).scan(ScanConfig(min_size_bytes=0))

        assert len(entries) == 1
        assert entries[0].safety is SafetyTier.PROTECTED

    def test_firefox_profiles(
        self, home: Path, policy: SafetyPolicy, make_file: Callable[..., Path]
    ) -> None:
        """Files inside every Firefox profile are found."""
        profiles = home / ".mozilla" / "firefox"
        make_file(profiles / "abc.default" / "cookies.sqlite", 100)
        make_file(profiles / "xyz.work" / "places.sqlite", 100)

        entries = PrivacyScanner(home, policy).scan(ScanConfig(min_size_bytes=0))

        assert sorted(e.name for e in entries) == [
            "Firefox Cookies (abc.default)",
            "Firefox History (xyz.work)",
        ]
