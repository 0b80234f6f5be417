"""Application bundle discovery and footprint matching.

This module exports the AppResolver and the matching entry point.
"""

from cleanx.apps.matching import is_identifier_shaped, match_candidate
from cleanx.apps.resolver import SYSTEM_APPS, AppResolver

__all__ = [
    "SYSTEM_APPS",
    "AppResolver",
    "is_identifier_shaped",
    "match_candidate",
]
