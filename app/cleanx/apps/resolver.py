"""Installed application lookup and footprint discovery.

The AppResolver finds '.app' bundles, reads their Info.plist manifests,
and locates the support files, caches, preferences and other leftovers
each application keeps in the Library folders.
"""

import logging
import os
import plistlib
from collections.abc import Sequence
from pathlib import Path
from xml.parsers.expat import ExpatError

from cleanx.apps.matching import match_candidate
from cleanx.models.app import AppBundle, AppDescriptor, RelatedCategory, RelatedFile
from cleanx.models.entry import normalize_path
from cleanx.utils.fs import iter_children, measure

logger = logging.getLogger(__name__)

APP_SUFFIX = ".app"

# Bundle identifiers of applications that ship with the operating system
SYSTEM_APPS: frozenset[str] = frozenset(
    {
        "com.apple.Safari",
        "com.apple.Mail",
        "com.apple.iCal",
        "com.apple.AddressBook",
        "com.apple.finder",
        "com.apple.Terminal",
        "com.apple.Preview",
        "com.apple.TextEdit",
        "com.apple.Notes",
        "com.apple.reminders",
        "com.apple.Maps",
        "com.apple.Photos",
        "com.apple.Music",
        "com.apple.podcasts",
        "com.apple.news",
        "com.apple.stocks",
        "com.apple.FaceTime",
        "com.apple.MobileSMS",
        "com.apple.AppStore",
        "com.apple.systempreferences",
        "com.apple.ActivityMonitor",
    }
)

_SYSTEM_APPS_FOLDED: frozenset[str] = frozenset(b.casefold() for b in SYSTEM_APPS)

# Related file locations (relative to the user Library), in search order
_USER_LOCATIONS: tuple[tuple[RelatedCategory, str], ...] = (
    (RelatedCategory.APP_SUPPORT, "Application Support"),
    (RelatedCategory.PREFERENCES, "Preferences"),
    (RelatedCategory.CACHES, "Caches"),
    (RelatedCategory.LOGS, "Logs"),
    (RelatedCategory.LAUNCH_AGENTS, "LaunchAgents"),
    (RelatedCategory.CONTAINERS, "Containers"),
    (RelatedCategory.GROUP_CONTAINERS, "Group Containers"),
    (RelatedCategory.COOKIES, "Cookies"),
    (RelatedCategory.WEBKIT, "WebKit"),
    (RelatedCategory.SAVED_STATE, "Saved Application State"),
    (RelatedCategory.FONTS, "Fonts"),
)

# Related file locations (relative to the system Library)
_SYSTEM_LOCATIONS: tuple[tuple[RelatedCategory, str], ...] = (
    (RelatedCategory.LAUNCH_DAEMONS, "LaunchDaemons"),
    (RelatedCategory.SYSTEM_APP_SUPPORT, "Application Support"),
)


def _plist_string(manifest: dict, *keys: str) -> str | None:
    """Return the first non-empty string value among the given keys."""
    for key in keys:
        value = manifest.get(key)
        if isinstance(value, str) and value.strip():
            return value.strip()
    return None


class AppResolver:
    """Finds application bundles and the files they leave behind.

    Args:
        home: Home directory (for ~/Applications and ~/Library).
        app_dirs: Folders holding '.app' bundles. Defaults to
            /Applications and ~/Applications.
        system_library: System Library folder. Defaults to /Library.
    """

    def __init__(
        self,
        home: Path,
        app_dirs: Sequence[Path] | None = None,
        system_library: Path = Path("/Library"),
    ) -> None:
        self._home = home
        if app_dirs is not None:
            self._app_dirs = tuple(app_dirs)
        else:
            self._app_dirs = (Path("/Applications"), home / "Applications")
        self._system_library = system_library

    @property
    def app_dirs(self) -> tuple[Path, ...]:
        """Folders searched for application bundles."""
        return self._app_dirs

    def search_locations(self) -> list[tuple[RelatedCategory, Path]]:
        """Return (category, folder) pairs searched for related files, in order."""
        user_library = self._home / "Library"
        locations = [(category, user_library / rel) for category, rel in _USER_LOCATIONS]
        locations.extend(
            (category, self._system_library / rel) for category, rel in _SYSTEM_LOCATIONS
        )
        return locations

    def resolve_bundle(self, path: str | os.PathLike[str]) -> AppBundle:
        """Read an application bundle's manifest.

        A missing or unreadable Info.plist is not an error: the bundle
        is returned without a descriptor.

        Args:
            path: Path to the '.app' bundle.

        Returns:
            AppBundle for the path.
        """
        bundle_path = normalize_path(path)
        manifest_path = Path(bundle_path) / "Contents" / "Info.plist"
        try:
            with manifest_path.open("rb") as f:
                manifest = plistlib.load(f)
        except FileNotFoundError:
            logger.debug("No Info.plist in %s", bundle_path)
            return AppBundle(path=bundle_path)
        except (OSError, ValueError, ExpatError) as e:
            logger.warning("Cannot read manifest of %s: %s", bundle_path, e)
            return AppBundle(path=bundle_path)

        if not isinstance(manifest, dict):
            logger.warning("Manifest of %s is not a dictionary", bundle_path)
            return AppBundle(path=bundle_path)

        descriptor = AppDescriptor(
            bundle_id=_plist_string(manifest, "CFBundleIdentifier"),
            name=_plist_string(manifest, "CFBundleDisplayName", "CFBundleName"),
            version=_plist_string(manifest, "CFBundleShortVersionString", "CFBundleVersion"),
        )
        return AppBundle(path=bundle_path, descriptor=descriptor)

    def list_all(self) -> list[AppBundle]:
        """List every application bundle in the application folders.

        Returns:
            Bundles sorted case-insensitively by name.
        """
        bundles: list[AppBundle] = []
        for app_dir in self._app_dirs:
            for child in iter_children(app_dir):
                if not child.name.endswith(APP_SUFFIX):
                    continue
                try:
                    if not child.is_dir():
                        continue
                except OSError:
                    continue
                bundles.append(self.resolve_bundle(child.path))
        bundles.sort(key=lambda b: (b.name.lower(), b.path))
        return bundles

    def resolve_app(self, name_or_path: str) -> AppBundle | None:
        """Find an application by bundle path or by name.

        An existing directory path resolves directly. Otherwise bundles
        whose file name equals the query (case-insensitive, '.app'
        optional) win over bundles whose name merely contains it.

        Args:
            name_or_path: Bundle path, or application name to search for.

        Returns:
            Matching AppBundle, or None if nothing matches.
        """
        if os.sep in name_or_path and Path(name_or_path).expanduser().is_dir():
            return self.resolve_bundle(Path(name_or_path).expanduser())

        query = name_or_path.strip().lower()
        if query.endswith(APP_SUFFIX):
            query = query[: -len(APP_SUFFIX)]
        if not query:
            return None

        bundles = self.list_all()
        for bundle in bundles:
            if query in (bundle.file_name.lower(), bundle.name.lower()):
                return bundle
        for bundle in bundles:
            if query in bundle.file_name.lower() or query in bundle.name.lower():
                return bundle
        return None

    def is_system_app(self, bundle: AppBundle) -> bool:
        """Check if a bundle ships with the operating system.

        Args:
            bundle: Application bundle to check.

        Returns:
            True for known system bundle ids and bundles under /System.
        """
        if bundle.path == "/System" or bundle.path.startswith("/System/"):
            return True
        bundle_id = bundle.bundle_id
        return bundle_id is not None and bundle_id.casefold() in _SYSTEM_APPS_FOLDED

    def find_related(self, bundle: AppBundle) -> list[RelatedFile]:
        """Find the Library files belonging to one application.

        Args:
            bundle: Application bundle.

        Returns:
            Related files in search-location order.
        """
        return self.find_related_many([bundle])[bundle.path]

    def find_related_many(self, bundles: Sequence[AppBundle]) -> dict[str, list[RelatedFile]]:
        """Find related files for several applications in one pass.

        Every Library entry is assigned to at most one application; see
        cleanx.apps.matching for the precedence rules.

        Args:
            bundles: Application bundles.

        Returns:
            Mapping of bundle path to its related files.
        """
        related: dict[str, list[RelatedFile]] = {b.path: [] for b in bundles}
        if not bundles:
            return related

        for category, location in self.search_locations():
            if not location.is_dir():
                continue
            for child in iter_children(location):
                matched = match_candidate(child.name, bundles)
                if matched is None:
                    continue
                index, rule = matched
                stats = measure(child.path)
                related[bundles[index].path].append(
                    RelatedFile(
                        path=normalize_path(child.path),
                        category=category,
                        size_bytes=stats.size_bytes,
                        match_rule=rule,
                    )
                )

        for bundle in bundles:
            logger.debug("Found %d related files for %s", len(related[bundle.path]), bundle.name)
        return related
