"""Rules that associate Library files with installed applications.

A candidate is a single directory entry name (e.g., 'com.example.App.plist'
or 'App Helper'). Three rules are tried in order of precedence:

1. bundle identifier: the name contains the bundle id.
2. name: the name is the application name, or starts with it followed
   by a separator.
3. preference file: a '.plist' whose punctuation-stripped name starts
   with the punctuation-stripped bundle id.

Reverse-DNS style names ('com.vendor.Product.plist') identify their
owner explicitly, so when an application's bundle id is known such names
are decided by rule 1 alone. When the id is unknown, rule 2 may still
claim them if the application name is one of their dotted components.
"""

import re
from collections.abc import Callable, Sequence

from cleanx.models.app import AppBundle, MatchRule

# Application names shorter than this are too ambiguous to match on
MIN_NAME_LENGTH: int = 3

_NAME_SEPARATORS: frozenset[str] = frozenset(" .-_()[]")

# 'com.example.App', 'org.mozilla.firefox.plist', 'group.com.example.shared'
_IDENTIFIER_RE = re.compile(r"^[a-z][a-z0-9-]*(\.[A-Za-z0-9_-]+){2,}$")

_NON_ALNUM_RE = re.compile(r"[^a-z0-9]")


def is_identifier_shaped(name: str) -> bool:
    """Check if a file name looks like a reverse-DNS identifier.

    Args:
        name: Directory entry name.

    Returns:
        True for names like 'com.example.App' or 'com.example.App.plist'.
    """
    return bool(_IDENTIFIER_RE.match(name))


def _strip_punctuation(value: str) -> str:
    return _NON_ALNUM_RE.sub("", value.lower())


def _app_names(bundle: AppBundle) -> list[str]:
    """Lower-cased display and file names long enough to match on."""
    names: list[str] = []
    for raw in (bundle.name, bundle.file_name):
        candidate = raw.strip().lower()
        if len(candidate) >= MIN_NAME_LENGTH and candidate not in names:
            names.append(candidate)
    return names


def match_bundle_id(name: str, bundle: AppBundle) -> bool:
    """Rule 1: the candidate name contains the bundle identifier."""
    bundle_id = bundle.bundle_id
    if not bundle_id:
        return False
    return bundle_id.lower() in name.lower()


def match_name(name: str, bundle: AppBundle) -> bool:
    """Rule 2: the candidate is named after the application.

    'App', 'App.log' and 'App Helper' match an application named 'App';
    'random-app-notes.txt' and 'Application Support' do not.
    """
    lowered = name.lower()
    app_names = _app_names(bundle)

    if is_identifier_shaped(name):
        if bundle.bundle_id:
            return False
        components = lowered.split(".")
        return any(app.replace(" ", "") in components for app in app_names)

    for app in app_names:
        if lowered == app:
            return True
        if lowered.startswith(app) and lowered[len(app)] in _NAME_SEPARATORS:
            return True
    return False


def match_preference_file(name: str, bundle: AppBundle) -> bool:
    """Rule 3: a property list named after the bundle identifier."""
    bundle_id = bundle.bundle_id
    if not bundle_id or not name.lower().endswith(".plist"):
        return False
    if is_identifier_shaped(name):
        return False
    stripped_id = _strip_punctuation(bundle_id)
    return bool(stripped_id) and _strip_punctuation(name).startswith(stripped_id)


RULES: tuple[tuple[MatchRule, Callable[[str, AppBundle], bool]], ...] = (
    (MatchRule.BUNDLE_ID, match_bundle_id),
    (MatchRule.NAME, match_name),
    (MatchRule.PREFERENCE_FILE, match_preference_file),
)


def match_candidate(name: str, bundles: Sequence[AppBundle]) -> tuple[int, MatchRule] | None:
    """Assign a candidate name to at most one application.

    Each rule is tried against every bundle before the next rule is
    considered, so a bundle-id match for one application beats a name
    match for another regardless of bundle order.

    Args:
        name: Directory entry name to classify.
        bundles: Applications competing for the candidate.

    Returns:
        (index into bundles, rule that matched), or None.
    """
    for rule, predicate in RULES:
        for index, bundle in enumerate(bundles):
            if predicate(name, bundle):
                return index, rule
    return None
