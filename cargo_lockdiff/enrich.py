"""Optional enrichment of rendered diff entries.

An EnrichmentAdapter looks up extra facts about a package change (new
authors, license changes, changelog additions). Lookups are best-effort:
a failing lookup costs that entry its annotation, never the report.

State shared between lookups lives in a LookupCache that the caller
creates for one run and hands to the adapter.
"""

from __future__ import annotations

from collections.abc import Callable, Hashable
from typing import Any, Protocol, TypeVar

from .models import DiffResult, Enrichment
from .shell import warn

T = TypeVar("T")


class EnrichmentAdapter(Protocol):
    def lookup(
        self, name: str, from_version: str | None, to_version: str | None
    ) -> Enrichment | None: ...


class LookupCache:
    """Memoizes lookups for the duration of one run.

    Misses are cached too: a loader returning None is not called again
    for the same key.
    """

    def __init__(self) -> None:
        self._entries: dict[Hashable, Any] = {}

    def get_or_load(self, key: Hashable, loader: Callable[[], T]) -> T:
        if key not in self._entries:
            self._entries[key] = loader()
        return self._entries[key]

    def clear(self) -> None:
        self._entries.clear()

    def __contains__(self, key: object) -> bool:
        return key in self._entries

    def __len__(self) -> int:
        return len(self._entries)


def enrich(result: DiffResult, adapter: EnrichmentAdapter) -> dict[str, Enrichment]:
    """Look up annotations for every entry the default report renders.

    The adapter is called exactly once per reportable entry. Exceptions
    from the adapter are reported as warnings and the entry is skipped.

    Returns:
        Map of package name → Enrichment, for entries with something to show.
    """
    annotations: dict[str, Enrichment] = {}
    for change in result.reportable():
        from_version = change.from_.version if change.from_ else None
        to_version = change.to.version if change.to else None
        try:
            enrichment = adapter.lookup(change.name, from_version, to_version)
        except Exception as exc:
            warn(f"lookup failed for {change.name}: {exc}")
            continue
        if enrichment is not None and not enrichment.is_empty():
            annotations[change.name] = enrichment
    return annotations
