"""Classify package changes between two lockfile snapshots."""

from __future__ import annotations

from .models import (
    ChangeKind,
    ChangeRecord,
    ChecksumPolicy,
    DiffResult,
    PackageRecord,
    PackageSet,
)


def diff(
    before: PackageSet,
    after: PackageSet,
    checksum_policy: ChecksumPolicy = ChecksumPolicy.IGNORE,
) -> DiffResult:
    """Compare two package sets name by name.

    Every name from either snapshot gets exactly one ChangeRecord:
    - only in ``after`` → added
    - only in ``before`` → removed
    - in both → version_changed if the version strings differ, else
      source_changed if the sources differ, else decided by
      ``checksum_policy``.

    Versions are compared as plain strings. Results are sorted by name
    (case-sensitive) so the output does not depend on input order.

    Args:
        before: Packages from the older snapshot.
        after: Packages from the newer snapshot.
        checksum_policy: How a checksum-only difference is classified.
    """
    changes: list[ChangeRecord] = []
    for name in sorted(before.keys() | after.keys()):
        old = before.get(name)
        new = after.get(name)
        if old is None:
            kind = ChangeKind.ADDED
        elif new is None:
            kind = ChangeKind.REMOVED
        else:
            kind = _classify(old, new, checksum_policy)
        changes.append(ChangeRecord(name=name, kind=kind, from_=old, to=new))
    return DiffResult(changes=changes)


def _classify(
    old: PackageRecord, new: PackageRecord, checksum_policy: ChecksumPolicy
) -> ChangeKind:
    if old.version != new.version:
        return ChangeKind.VERSION_CHANGED
    if old.source != new.source:
        return ChangeKind.SOURCE_CHANGED
    if old.checksum == new.checksum or checksum_policy is ChecksumPolicy.IGNORE:
        return ChangeKind.UNCHANGED
    if checksum_policy is ChecksumPolicy.SOURCE:
        return ChangeKind.SOURCE_CHANGED
    return ChangeKind.CHECKSUM_CHANGED
