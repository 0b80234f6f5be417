"""Deletion safety: protected paths, process checks, and the policy.

This module exports the safety policy and its process probes.
"""

from cleanx.safety.policy import SafetyPolicy
from cleanx.safety.processes import ProcessProbe, PsutilProcessProbe, StaticProcessProbe
from cleanx.safety.protected import CRITICAL_PATTERNS, PROTECTED_PREFIXES

__all__ = [
    "CRITICAL_PATTERNS",
    "PROTECTED_PREFIXES",
    "ProcessProbe",
    "PsutilProcessProbe",
    "SafetyPolicy",
    "StaticProcessProbe",
]
