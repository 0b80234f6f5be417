"""Scanner for web browser caches.

Known cache folders of common browsers, in both the macOS Library
layout and the XDG layout used on Linux.
"""

from pathlib import Path

from cleanx.models.entry import DiscoveredEntry, ScannerCategory
from cleanx.models.scan_config import ScanConfig
from cleanx.scanners.base import Scanner, largest_first

# (browser name, cache path relative to user home)
BROWSER_CACHE_PATHS: list[tuple[str, str]] = [
    ("Safari", "Library/Caches/com.apple.Safari"),
    ("Chrome", "Library/Caches/Google/Chrome"),
    ("Firefox", "Library/Caches/Firefox"),
    ("Edge", "Library/Caches/Microsoft Edge"),
    ("Arc", "Library/Caches/Arc"),
    ("Brave", "Library/Caches/BraveSoftware"),
    ("Vivaldi", "Library/Caches/Vivaldi"),
    ("Opera", "Library/Caches/com.operasoftware.Opera"),
    ("Opera GX", "Library/Caches/com.operasoftware.OperaGX"),
    ("Whale", "Library/Caches/Naver/Whale"),
    ("Chromium", "Library/Caches/Chromium"),
    ("Orion", "Library/Caches/com.kagi.kagimac"),
    # XDG layout
    ("Chrome", ".cache/google-chrome"),
    ("Chromium", ".cache/chromium"),
    ("Firefox", ".cache/mozilla"),
    ("Brave", ".cache/BraveSoftware"),
    ("Vivaldi", ".cache/vivaldi"),
    ("Edge", ".cache/microsoft-edge"),
    ("Opera", ".cache/opera"),
]


class BrowserCacheScanner(Scanner):
    """Reports each browser's cache folder as one entry."""

    @property
    def id(self) -> str:
        return "browser_cache"

    @property
    def name(self) -> str:
        return "Browser Caches"

    @property
    def category(self) -> ScannerCategory:
        return ScannerCategory.BROWSER

    @property
    def description(self) -> str:
        return "Cached web content of installed browsers"

    def locations(self) -> list[tuple[str, Path]]:
        """Return (browser, path) pairs whose cache folder exists."""
        return [
            (browser, self._home / rel)
            for browser, rel in BROWSER_CACHE_PATHS
            if (self._home / rel).is_dir()
        ]

    def is_available(self) -> bool:
        return bool(self.locations())

    def scan(self, config: ScanConfig) -> list[DiscoveredEntry]:
        entries: list[DiscoveredEntry] = []
        for browser, path in self.locations():
            stats = self._measure_candidate(path, config)
            if stats is None:
                continue
            entries.append(
                self._entry(
                    path,
                    stats,
                    name=f"{browser} Cache",
                    metadata={"browser": browser},
                )
            )
        return largest_first(entries)
