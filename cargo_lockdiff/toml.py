"""TOML reading utilities.

Uses tomlkit for both lockfiles and crate manifests (Cargo.toml). Documents
are unwrapped into plain dicts and lists right after parsing, so the rest
of the code never deals with tomlkit's container types.
"""

from __future__ import annotations

from pathlib import Path
from typing import Any

import tomlkit


def parse_toml(text: str) -> dict[str, Any]:
    """Parse TOML text into plain Python values.

    Raises:
        tomlkit.exceptions.TOMLKitError: If the text is not valid TOML.
    """
    return tomlkit.parse(text).unwrap()


def load_toml(path: Path) -> dict[str, Any]:
    """Load and parse a TOML file from disk."""
    return parse_toml(path.read_text())


def get_table(doc: dict[str, Any], key: str) -> dict[str, Any]:
    """Return ``doc[key]`` if it is a table, else an empty dict."""
    value = doc.get(key)
    return value if isinstance(value, dict) else {}


def get_str(table: dict[str, Any], key: str) -> str | None:
    """Return a string field, or None when missing or not a string."""
    value = table.get(key)
    return value if isinstance(value, str) else None


def get_str_list(table: dict[str, Any], key: str) -> list[str]:
    """Return a list of strings, skipping non-string items."""
    value = table.get(key)
    if not isinstance(value, list):
        return []
    return [item for item in value if isinstance(item, str)]


def get_manifest_package(doc: dict[str, Any]) -> dict[str, Any]:
    """Extract the [package] table from a Cargo.toml.

    Very old manifests use [project] instead, which is accepted as well.
    """
    return get_table(doc, "package") or get_table(doc, "project")
