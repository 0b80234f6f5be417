"""Cleanup scanners and the registry that runs them.

This module exports the scanner classes and default_registry(), which
wires up the built-in scanners in their canonical order.
"""

from pathlib import Path

from cleanx.apps.resolver import AppResolver
from cleanx.safety.policy import SafetyPolicy
from cleanx.scanners.apps import InstalledAppsScanner
from cleanx.scanners.base import Scanner
from cleanx.scanners.browser import BrowserCacheScanner
from cleanx.scanners.caches import SystemCachesScanner
from cleanx.scanners.dev_junk import DevJunkScanner
from cleanx.scanners.duplicates import DuplicatesScanner
from cleanx.scanners.large_files import LargeOldFilesScanner
from cleanx.scanners.logs import SystemLogsScanner
from cleanx.scanners.privacy import PrivacyScanner
from cleanx.scanners.registry import (
    ScannerRegistry,
    ScannerReport,
    ScanProgress,
    ScanReport,
    ScanStatus,
)
from cleanx.scanners.trash import TrashScanner


def default_registry(
    home: Path,
    policy: SafetyPolicy,
    resolver: AppResolver | None = None,
) -> ScannerRegistry:
    """Build a registry holding every built-in scanner.

    Registration order is the merge priority when two scanners report
    the same path.

    Args:
        home: Home directory scan locations are resolved against.
        policy: Shared safety policy.
        resolver: Application resolver for the installed apps scanner.

    Returns:
        Populated ScannerRegistry.
    """
    registry = ScannerRegistry()
    for scanner in (
        SystemCachesScanner(home, policy),
        SystemLogsScanner(home, policy),
        TrashScanner(home, policy),
        BrowserCacheScanner(home, policy),
        PrivacyScanner(home, policy),
        DevJunkScanner(home, policy),
        LargeOldFilesScanner(home, policy),
        DuplicatesScanner(home, policy),
        InstalledAppsScanner(home, policy, resolver),
    ):
        registry.register(scanner)
    return registry


__all__ = [
    "BrowserCacheScanner",
    "DevJunkScanner",
    "DuplicatesScanner",
    "InstalledAppsScanner",
    "LargeOldFilesScanner",
    "PrivacyScanner",
    "ScanProgress",
    "ScanReport",
    "ScanStatus",
    "Scanner",
    "ScannerRegistry",
    "ScannerReport",
    "SystemCachesScanner",
    "SystemLogsScanner",
    "TrashScanner",
    "default_registry",
]
