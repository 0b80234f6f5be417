"""Application bundle models.

Describes installed application bundles, the metadata read from their
manifests, and the related files they leave scattered across the user's
Library.
"""

from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from typing import Any


@dataclass(frozen=True, slots=True)
class AppDescriptor:
    """Metadata parsed from an application bundle manifest.

    Attributes:
        bundle_id: Reverse-DNS bundle identifier (e.g., 'com.example.App').
        name: Display name declared by the bundle.
        version: Short version string declared by the bundle.
    """

    bundle_id: str | None = None
    name: str | None = None
    version: str | None = None

    def to_dict(self) -> dict[str, Any]:
        """Serialize to dictionary, omitting unknown fields."""
        result: dict[str, Any] = {}
        if self.bundle_id is not None:
            result["bundle_id"] = self.bundle_id
        if self.name is not None:
            result["name"] = self.name
        if self.version is not None:
            result["version"] = self.version
        return result

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "AppDescriptor":
        """Deserialize from dictionary."""
        return cls(
            bundle_id=data.get("bundle_id"),
            name=data.get("name"),
            version=data.get("version"),
        )


@dataclass(frozen=True, slots=True)
class AppBundle:
    """An installed application bundle on disk.

    Attributes:
        path: Absolute path to the '.app' bundle directory.
        descriptor: Parsed manifest metadata, or None when the manifest
            is missing or unreadable.
    """

    path: str
    descriptor: AppDescriptor | None = None

    def __post_init__(self) -> None:
        """Validate bundle data after initialization."""
        if not self.path:
            msg = "Bundle path cannot be empty"
            raise ValueError(msg)

    @property
    def file_name(self) -> str:
        """Bundle directory name without the '.app' suffix."""
        return Path(self.path).stem

    @property
    def name(self) -> str:
        """Display name, falling back to the bundle file name."""
        if self.descriptor is not None and self.descriptor.name:
            return self.descriptor.name
        return self.file_name

    @property
    def bundle_id(self) -> str | None:
        """Bundle identifier if the manifest declared one."""
        return self.descriptor.bundle_id if self.descriptor is not None else None

    @property
    def version(self) -> str | None:
        """Version string if the manifest declared one."""
        return self.descriptor.version if self.descriptor is not None else None

    def to_dict(self) -> dict[str, Any]:
        """Serialize to dictionary for JSON output."""
        return {
            "path": self.path,
            "name": self.name,
            "descriptor": self.descriptor.to_dict() if self.descriptor is not None else None,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "AppBundle":
        """Deserialize from dictionary.

        The derived 'name' key written by to_dict is ignored; the name is
        recomputed from the descriptor and path.

        Raises:
            KeyError: If the path is missing.
            ValueError: If the path is empty.
        """
        descriptor = data.get("descriptor")
        return cls(
            path=data["path"],
            descriptor=AppDescriptor.from_dict(descriptor) if descriptor is not None else None,
        )


class RelatedCategory(str, Enum):
    """Where a related file lives, by Library location.

    Attributes:
        APP_SUPPORT: ~/Library/Application Support
        PREFERENCES: ~/Library/Preferences
        CACHES: ~/Library/Caches
        LOGS: ~/Library/Logs
        LAUNCH_AGENTS: ~/Library/LaunchAgents
        LAUNCH_DAEMONS: /Library/LaunchDaemons (system-owned)
        CONTAINERS: ~/Library/Containers (system-owned)
        GROUP_CONTAINERS: ~/Library/Group Containers
        COOKIES: ~/Library/Cookies
        WEBKIT: ~/Library/WebKit
        SAVED_STATE: ~/Library/Saved Application State
        FONTS: ~/Library/Fonts
        SYSTEM_APP_SUPPORT: /Library/Application Support (system-owned)
    """

    APP_SUPPORT = "app_support"
    PREFERENCES = "preferences"
    CACHES = "caches"
    LOGS = "logs"
    LAUNCH_AGENTS = "launch_agents"
    LAUNCH_DAEMONS = "launch_daemons"
    CONTAINERS = "containers"
    GROUP_CONTAINERS = "group_containers"
    COOKIES = "cookies"
    WEBKIT = "webkit"
    SAVED_STATE = "saved_state"
    FONTS = "fonts"
    SYSTEM_APP_SUPPORT = "system_app_support"

    @property
    def display_name(self) -> str:
        """Human-readable location name."""
        return _DISPLAY_NAMES[self]

    @property
    def system_owned(self) -> bool:
        """Whether files here need elevated rights or are sandbox-managed.

        Related files in system-owned locations are reported but never
        removed by an uninstall.
        """
        return self in _SYSTEM_OWNED


_DISPLAY_NAMES: dict[RelatedCategory, str] = {
    RelatedCategory.APP_SUPPORT: "Application Support",
    RelatedCategory.PREFERENCES: "Preferences",
    RelatedCategory.CACHES: "Caches",
    RelatedCategory.LOGS: "Logs",
    RelatedCategory.LAUNCH_AGENTS: "Launch Agents",
    RelatedCategory.LAUNCH_DAEMONS: "Launch Daemons",
    RelatedCategory.CONTAINERS: "Containers",
    RelatedCategory.GROUP_CONTAINERS: "Group Containers",
    RelatedCategory.COOKIES: "Cookies",
    RelatedCategory.WEBKIT: "WebKit Data",
    RelatedCategory.SAVED_STATE: "Saved State",
    RelatedCategory.FONTS: "Fonts",
    RelatedCategory.SYSTEM_APP_SUPPORT: "System Application Support",
}

_SYSTEM_OWNED: frozenset[RelatedCategory] = frozenset(
    {
        RelatedCategory.LAUNCH_DAEMONS,
        RelatedCategory.CONTAINERS,
        RelatedCategory.SYSTEM_APP_SUPPORT,
    }
)


class MatchRule(str, Enum):
    """Which matching rule associated a related file with an application."""

    BUNDLE_ID = "bundle_id"
    NAME = "name"
    PREFERENCE_FILE = "preference_file"


@dataclass(frozen=True, slots=True)
class RelatedFile:
    """A file or directory associated with an installed application.

    Attributes:
        path: Absolute filesystem path.
        category: Library location the file was found in.
        size_bytes: Total size in bytes (recursive for directories).
        match_rule: Rule that linked this path to its application.
    """

    path: str
    category: RelatedCategory
    size_bytes: int
    match_rule: MatchRule

    def __post_init__(self) -> None:
        """Validate related file data after initialization."""
        if not self.path:
            msg = "Related file path cannot be empty"
            raise ValueError(msg)
        if self.size_bytes < 0:
            msg = f"Size cannot be negative, got {self.size_bytes}"
            raise ValueError(msg)

    @property
    def is_protected(self) -> bool:
        """Whether this file is left in place by an uninstall."""
        return self.category.system_owned

    def to_dict(self) -> dict[str, Any]:
        """Serialize to dictionary for JSON output."""
        return {
            "path": self.path,
            "category": self.category.value,
            "size_bytes": self.size_bytes,
            "match_rule": self.match_rule.value,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "RelatedFile":
        """Deserialize from dictionary.

        Raises:
            KeyError: If required fields are missing.
            ValueError: If category or match rule is invalid.
        """
        return cls(
            path=data["path"],
            category=RelatedCategory(data["category"]),
            size_bytes=int(data["size_bytes"]),
            match_rule=MatchRule(data["match_rule"]),
        )
