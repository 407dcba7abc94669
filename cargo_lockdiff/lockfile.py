"""Cargo.lock parsing.

Turns the text of one lockfile snapshot into a PackageSet. Both the
current ``[[package]]`` layout and legacy lockfiles that keep checksums in
a ``[metadata]`` table are understood. Parsing is strict: anything that
does not look like a lockfile is an error, never a silently skipped entry.
"""

from __future__ import annotations

from typing import Any

from pydantic import ValidationError
from tomlkit.exceptions import TOMLKitError

from .models import PackageRecord, PackageSet
from .toml import get_str, get_table, parse_toml

# Legacy lockfiles use this value for packages without a checksum.
NO_CHECKSUM = "<none>"


class ParseError(Exception):
    """A lockfile snapshot could not be turned into a PackageSet.

    Attributes:
        snapshot: Which snapshot failed ("before" or "after"), filled in by
                  the caller once known.
    """

    def __init__(self, message: str, snapshot: str | None = None) -> None:
        super().__init__(message)
        self.message = message
        self.snapshot = snapshot

    def __str__(self) -> str:
        if self.snapshot:
            return f"{self.snapshot} snapshot: {self.message}"
        return self.message


class MalformedSyntax(ParseError):
    """The text is not valid TOML or not shaped like a lockfile."""


class MissingVersion(ParseError):
    def __init__(self, name: str, snapshot: str | None = None) -> None:
        super().__init__(f"package {name!r} has no version", snapshot)
        self.name = name


class DuplicateName(ParseError):
    def __init__(self, name: str, snapshot: str | None = None) -> None:
        super().__init__(f"package {name!r} is listed more than once", snapshot)
        self.name = name


def parse(text: str) -> PackageSet:
    """Parse lockfile text into a mapping of package name → PackageRecord.

    Extra fields on a package entry (dependencies, replace, ...) are
    ignored. A lockfile without any ``[[package]]`` entries yields an
    empty set.

    Raises:
        MalformedSyntax: Invalid TOML, or entries of the wrong shape.
        MissingVersion: An entry has no usable version.
        DuplicateName: The same name appears twice.
    """
    try:
        doc = parse_toml(text)
    except TOMLKitError as exc:
        raise MalformedSyntax(f"invalid TOML: {exc}") from exc

    entries = doc.get("package", [])
    if not isinstance(entries, list):
        raise MalformedSyntax("'package' must be an array of tables")

    legacy_checksums = get_table(doc, "metadata")
    packages: PackageSet = {}
    for index, entry in enumerate(entries):
        record = _parse_entry(index, entry, legacy_checksums)
        if record.name in packages:
            raise DuplicateName(record.name)
        packages[record.name] = record
    return packages


def _parse_entry(
    index: int, entry: Any, legacy_checksums: dict[str, Any]
) -> PackageRecord:
    """Validate a single ``[[package]]`` table and build its record."""
    if not isinstance(entry, dict):
        raise MalformedSyntax(f"package entry #{index + 1} is not a table")

    name = get_str(entry, "name")
    if not name:
        raise MalformedSyntax(f"package entry #{index + 1} has no name")

    version = get_str(entry, "version")
    if not version:
        raise MissingVersion(name)

    source = get_str(entry, "source")
    checksum = get_str(entry, "checksum")
    if checksum is None:
        checksum = _legacy_checksum(legacy_checksums, name, version, source)

    try:
        return PackageRecord(
            name=name, version=version, source=source, checksum=checksum
        )
    except ValidationError as exc:
        raise MalformedSyntax(f"package {name!r} is invalid: {exc}") from exc


def _legacy_checksum(
    metadata: dict[str, Any], name: str, version: str, source: str | None
) -> str | None:
    """Look up a checksum in a v1 lockfile's [metadata] table.

    Keys look like ``checksum serde 1.0.104 (registry+https://...)``.
    """
    if source is None:
        return None
    value = get_str(metadata, f"checksum {name} {version} ({source})")
    if value is None or value == NO_CHECKSUM:
        return None
    return value
