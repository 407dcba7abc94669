"""Render a DiffResult as report lines.

Rendering never re-orders or re-classifies anything: lines come out in
the differ's order, one per entry.

Line formats:
    +++ name version                        added
    --- name version                        removed
        name old -> new                     version changed
    ~~~ name version (old-src -> new-src)   source changed
    !!! name version (checksum changed)     checksum changed
    === name version                        unchanged (only on request)
"""

from __future__ import annotations

from collections.abc import Mapping

from .models import ChangeKind, ChangeRecord, DiffResult, Enrichment
from .versions import is_downgrade

NO_SOURCE = "<none>"
ANNOTATION_PREFIX = "--> "


def present(
    result: DiffResult,
    *,
    include_unchanged: bool = False,
    annotations: Mapping[str, Enrichment] | None = None,
) -> list[str]:
    """Format each change as one line, skipping unchanged entries by default.

    Annotation lines for an entry, if any, follow that entry's line.
    """
    annotations = annotations or {}
    changes = result.changes if include_unchanged else result.reportable()
    lines: list[str] = []
    for change in changes:
        lines.append(render_change(change))
        if change.name in annotations:
            lines.extend(render_enrichment(annotations[change.name]))
    return lines


def render_change(change: ChangeRecord) -> str:
    """Render a single ChangeRecord as a report line."""
    old, new = change.from_, change.to
    if change.kind is ChangeKind.ADDED:
        return f"+++ {change.name} {new.version}"
    if change.kind is ChangeKind.REMOVED:
        return f"--- {change.name} {old.version}"
    if change.kind is ChangeKind.VERSION_CHANGED:
        line = f"    {change.name} {old.version} -> {new.version}"
        if is_downgrade(old.version, new.version):
            line += " (downgrade)"
        return line
    if change.kind is ChangeKind.SOURCE_CHANGED:
        if old.source == new.source:
            # Only reachable under the "source" checksum policy
            detail = "checksum changed"
        else:
            detail = f"{old.source or NO_SOURCE} -> {new.source or NO_SOURCE}"
        return f"~~~ {change.name} {new.version} ({detail})"
    if change.kind is ChangeKind.CHECKSUM_CHANGED:
        return f"!!! {change.name} {new.version} (checksum changed)"
    return f"=== {change.name} {new.version}"


def render_enrichment(enrichment: Enrichment) -> list[str]:
    """Render annotation lines for one entry.

    Order: notes, license change, added authors, changelog additions.
    """
    lines = [f"{ANNOTATION_PREFIX}{note}" for note in enrichment.notes]
    if enrichment.license_change:
        old, new = enrichment.license_change
        lines.append(
            f"{ANNOTATION_PREFIX}License changed from "
            f"{old or NO_SOURCE} to {new or NO_SOURCE}"
        )
    if enrichment.authors_added:
        authors = ", ".join(enrichment.authors_added)
        lines.append(f"{ANNOTATION_PREFIX}Additional authors ({authors})")
    if enrichment.changelog_excerpt:
        lines.append(f"{ANNOTATION_PREFIX}Additions to CHANGELOG")
        lines.extend(enrichment.changelog_excerpt.splitlines())
    return lines
