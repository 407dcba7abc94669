"""Version parsing utilities.

Cargo versions are semver, so semver.Version does the heavy lifting. The
result is only used to annotate the report; classification of changes
never depends on it.
"""

from __future__ import annotations

import semver


def parse_version(version_str: str) -> semver.Version | None:
    """Parse a version string into a semver.Version object.

    Full semver strings (including prerelease and build metadata) are
    parsed as-is. Incomplete versions are padded with zeros:
    - "1" → "1.0.0"
    - "1.2" → "1.2.0"

    Returns None if the string is not a version at all.
    """
    try:
        return semver.Version.parse(version_str)
    except ValueError:
        pass
    parts = version_str.split(".")
    # Pad with zeros to ensure we have at least 3 parts
    while len(parts) < 3:
        parts.append("0")
    try:
        return semver.Version.parse(".".join(parts))
    except ValueError:
        return None


def is_downgrade(old: str, new: str) -> bool:
    """Return True when ``new`` is a strictly lower version than ``old``.

    Examples:
        is_downgrade("0.2.13", "0.2.12") → True
        is_downgrade("0.2.12", "0.2.13") → False
        is_downgrade("1.0", "not-a-version") → False
    """
    old_v = parse_version(old)
    new_v = parse_version(new)
    if old_v is None or new_v is None:
        return False
    return new_v < old_v
