"""Scanner for development build artifacts and dependency folders."""

import logging
import os
from pathlib import Path

from cleanx.models.entry import DiscoveredEntry, ScannerCategory
from cleanx.models.scan_config import ScanConfig
from cleanx.scanners.base import Scanner, largest_first

logger = logging.getLogger(__name__)

# Folder names that hold regenerable build output or dependencies
JUNK_DIR_NAMES: dict[str, str] = {
    "node_modules": "npm dependencies",
    "target": "build output",
    ".gradle": "Gradle cache",
    "build": "build output",
    "dist": "build output",
    ".cache": "tool cache",
    "__pycache__": "Python bytecode",
    ".venv": "Python virtualenv",
}

# Project roots (relative to user home)
_PROJECT_ROOTS: tuple[str, ...] = (
    "Documents",
    "Projects",
    "Developer",
    "Workspace",
    "src",
    "code",
)

# Never descend into these while looking for junk
_SKIP_DIR_NAMES: frozenset[str] = frozenset({".git", ".hg", ".svn"})

MAX_RESULTS: int = 50


class DevJunkScanner(Scanner):
    """Finds dependency and build folders inside project trees.

    A matched folder is reported whole and never descended into, so
    nested matches (e.g., node_modules inside node_modules) are not
    reported twice.
    """

    @property
    def id(self) -> str:
        return "dev_junk"

    @property
    def name(self) -> str:
        return "Development Junk"

    @property
    def category(self) -> ScannerCategory:
        return ScannerCategory.DEVELOPMENT

    @property
    def description(self) -> str:
        return "node_modules, build output and virtualenvs in project folders"

    @property
    def estimated_duration(self) -> float:
        return 10.0

    def roots(self) -> list[Path]:
        """Return the project roots that exist on this system."""
        return self._existing(self._home / r for r in _PROJECT_ROOTS)

    def is_available(self) -> bool:
        return bool(self.roots())

    def scan(self, config: ScanConfig) -> list[DiscoveredEntry]:
        entries: list[DiscoveredEntry] = []
        for root in self.roots():
            for path in self._find_junk_dirs(root, config):
                stats = self._measure_candidate(path, config)
                if stats is None:
                    continue
                kind = JUNK_DIR_NAMES[os.path.basename(path)]
                entries.append(
                    self._entry(
                        path,
                        stats,
                        name=f"{os.path.basename(os.path.dirname(path))}/{os.path.basename(path)}",
                        metadata={"kind": kind},
                    )
                )
        logger.debug("Found %d development junk folders", len(entries))
        return largest_first(entries, MAX_RESULTS)

    def _find_junk_dirs(self, root: Path, config: ScanConfig) -> list[str]:
        """Collect matching folders no deeper than max_depth below root."""
        found: list[str] = []
        stack: list[tuple[str, int]] = [(str(root), 1)]
        while stack:
            current, depth = stack.pop()
            if depth > config.max_depth:
                continue
            try:
                with os.scandir(current) as it:
                    children = list(it)
            except OSError:
                continue
            for child in children:
                try:
                    if not child.is_dir(follow_symlinks=config.follow_symlinks):
                        continue
                except OSError:
                    continue
                if child.name in JUNK_DIR_NAMES:
                    found.append(child.path)
                elif child.name not in _SKIP_DIR_NAMES and not config.is_excluded(child.path):
                    stack.append((child.path, depth + 1))
        return sorted(found)
