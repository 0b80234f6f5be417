"""Scanner for privacy-sensitive browsing traces.

Cookies, history databases and recent-item lists. Deleting these logs
the user out of sites and clears history, so every entry is at least
CAUTION; saved credentials are PROTECTED and only ever reported.
"""

import logging
from pathlib import Path

from cleanx.models.entry import DiscoveredEntry, SafetyTier, ScannerCategory
from cleanx.models.scan_config import ScanConfig
from cleanx.scanners.base import Scanner, largest_first
from cleanx.utils.fs import iter_children

logger = logging.getLogger(__name__)

_CHROME = "Library/Application Support/Google/Chrome/Default"
_EDGE = "Library/Application Support/Microsoft Edge/Default"
_BRAVE = "Library/Application Support/BraveSoftware/Brave-Browser/Default"
_ARC = "Library/Application Support/Arc/User Data/Default"
_VIVALDI = "Library/Application Support/Vivaldi/Default"
_OPERA = "Library/Application Support/com.operasoftware.Opera"
_SHARED_FILE_LIST = "Library/Application Support/com.apple.sharedfilelist"

# (label, path relative to user home, tier hint)
PRIVACY_PATHS: list[tuple[str, str, SafetyTier]] = [
    ("Safari Cookies", "Library/Cookies/Cookies.binarycookies", SafetyTier.CAUTION),
    ("Safari History", "Library/Safari/History.db", SafetyTier.CAUTION),
    ("Safari Downloads", "Library/Safari/Downloads.plist", SafetyTier.CAUTION),
    ("Chrome Cookies", f"{_CHROME}/Cookies", SafetyTier.CAUTION),
    ("Chrome History", f"{_CHROME}/History", SafetyTier.CAUTION),
    ("Chrome Login Data", f"{_CHROME}/Login Data", SafetyTier.PROTECTED),
    ("Edge Cookies", f"{_EDGE}/Cookies", SafetyTier.CAUTION),
    ("Edge History", f"{_EDGE}/History", SafetyTier.CAUTION),
    ("Brave Cookies", f"{_BRAVE}/Cookies", SafetyTier.CAUTION),
    ("Brave History", f"{_BRAVE}/History", SafetyTier.CAUTION),
    ("Arc Cookies", f"{_ARC}/Cookies", SafetyTier.CAUTION),
    ("Arc History", f"{_ARC}/History", SafetyTier.CAUTION),
    ("Vivaldi Cookies", f"{_VIVALDI}/Cookies", SafetyTier.CAUTION),
    ("Vivaldi History", f"{_VIVALDI}/History", SafetyTier.CAUTION),
    ("Opera Cookies", f"{_OPERA}/Cookies", SafetyTier.CAUTION),
    ("Opera History", f"{_OPERA}/History", SafetyTier.CAUTION),
    (
        "Recent Items",
        f"{_SHARED_FILE_LIST}/com.apple.LSSharedFileList.ApplicationRecentDocuments",
        SafetyTier.CAUTION,
    ),
    (
        "Recent Servers",
        f"{_SHARED_FILE_LIST}/com.apple.LSSharedFileList.RecentServers.sfl",
        SafetyTier.CAUTION,
    ),
    ("Quick Look Cache", "Library/Caches/com.apple.QuickLookDaemon/Cache.db", SafetyTier.SAFE),
    # XDG layout
    ("Chrome Cookies", ".config/google-chrome/Default/Cookies", SafetyTier.CAUTION),
    ("Chrome History", ".config/google-chrome/Default/History", SafetyTier.CAUTION),
    ("Chrome Login Data", ".config/google-chrome/Default/Login Data", SafetyTier.PROTECTED),
    ("Chromium Cookies", ".config/chromium/Default/Cookies", SafetyTier.CAUTION),
    ("Chromium History", ".config/chromium/Default/History", SafetyTier.CAUTION),
    ("Recently Used", ".local/share/recently-used.xbel", SafetyTier.CAUTION),
]

# Firefox keeps one folder per profile; these files live inside each.
_FIREFOX_PROFILE_ROOTS: tuple[str, ...] = (
    "Library/Application Support/Firefox/Profiles",
    ".mozilla/firefox",
)
_FIREFOX_FILES: list[tuple[str, str]] = [
    ("Firefox Cookies", "cookies.sqlite"),
    ("Firefox History", "places.sqlite"),
]


class PrivacyScanner(Scanner):
    """Finds cookie stores, browsing history and recent-item lists."""

    @property
    def id(self) -> str:
        return "privacy"

    @property
    def name(self) -> str:
        return "Privacy"

    @property
    def category(self) -> ScannerCategory:
        return ScannerCategory.BROWSER

    @property
    def description(self) -> str:
        return "Cookies, browsing history and recently used item lists"

    @property
    def estimated_duration(self) -> float:
        return 2.0

    def candidates(self) -> list[tuple[str, Path, SafetyTier]]:
        """Return (label, path, tier hint) for every trace that exists."""
        found = [
            (label, self._home / rel, hint)
            for label, rel, hint in PRIVACY_PATHS
            if (self._home / rel).exists()
        ]
        for root in _FIREFOX_PROFILE_ROOTS:
            for profile in iter_children(self._home / root):
                try:
                    if not profile.is_dir():
                        continue
                except OSError:
                    continue
                for label, file_name in _FIREFOX_FILES:
                    path = Path(profile.path) / file_name
                    if path.exists():
                        found.append((f"{label} ({profile.name})", path, SafetyTier.CAUTION))
        return found

    def is_available(self) -> bool:
        return bool(self.candidates())

    def scan(self, config: ScanConfig) -> list[DiscoveredEntry]:
        entries: list[DiscoveredEntry] = []
        for label, path, hint in self.candidates():
            stats = self._measure_candidate(path, config)
            if stats is None:
                continue
            entries.append(self._entry(path, stats, name=label, hint=hint))
        logger.debug("Found %d privacy traces", len(entries))
        return largest_first(entries)
