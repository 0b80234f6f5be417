"""Data models for cleanx.

This module exports the core data structures used throughout the application.
"""

from cleanx.models.app import (
    AppBundle,
    AppDescriptor,
    MatchRule,
    RelatedCategory,
    RelatedFile,
)
from cleanx.models.entry import (
    DiscoveredEntry,
    SafetyTier,
    ScannerCategory,
    entry_id,
    normalize_path,
)
from cleanx.models.execution import ExecutionResult, ExecutionStatus, UninstallResult
from cleanx.models.journal import JournalAction, JournalEntry, create_delete_entry
from cleanx.models.scan_config import ScanConfig

__all__ = [
    "AppBundle",
    "AppDescriptor",
    "DiscoveredEntry",
    "ExecutionResult",
    "ExecutionStatus",
    "JournalAction",
    "JournalEntry",
    "MatchRule",
    "RelatedCategory",
    "RelatedFile",
    "SafetyTier",
    "ScanConfig",
    "ScannerCategory",
    "UninstallResult",
    "create_delete_entry",
    "entry_id",
    "normalize_path",
]
