"""Diff pipeline: read → parse → diff → present → annotate.

This module wires the stages together:
1. Read the before/after lockfile texts from git (or the working tree)
2. Parse both snapshots, labelling any failure with the snapshot it hit
3. Classify changes between the two package sets
4. Render the report lines
5. Optionally annotate each rendered entry from the local crate registry

Stages 2-4 are pure; all I/O happens in run_diff().
"""

from __future__ import annotations

from .differ import diff
from .enrich import EnrichmentAdapter, LookupCache, enrich
from .lockfile import ParseError, parse
from .models import DiffResult, PackageSet, ReportOptions
from .presenter import present
from .registry import CargoRegistrySource
from .snapshots import read_snapshot, resolve_revspec


def parse_snapshots(before_text: str, after_text: str) -> tuple[PackageSet, PackageSet]:
    """Parse both snapshots, naming the one that failed.

    Raises:
        ParseError: With ``snapshot`` set to "before" or "after".
    """
    parsed: list[PackageSet] = []
    for label, text in (("before", before_text), ("after", after_text)):
        try:
            parsed.append(parse(text))
        except ParseError as exc:
            exc.snapshot = label
            raise
    before, after = parsed
    return before, after


def compute_diff(
    before_text: str, after_text: str, options: ReportOptions | None = None
) -> DiffResult:
    """Parse and classify two lockfile texts."""
    options = options or ReportOptions()
    before, after = parse_snapshots(before_text, after_text)
    return diff(before, after, options.checksum_policy)


def build_report(
    before_text: str,
    after_text: str,
    options: ReportOptions | None = None,
    adapter: EnrichmentAdapter | None = None,
) -> list[str]:
    """Produce the full report for two lockfile texts.

    When an adapter is given, each entry's annotation lines follow its
    report line.
    """
    options = options or ReportOptions()
    result = compute_diff(before_text, after_text, options)
    annotations = enrich(result, adapter) if adapter is not None else {}

    return present(
        result,
        include_unchanged=options.include_unchanged,
        annotations=annotations,
    )


def run_diff(
    revspec: str | None,
    options: ReportOptions | None = None,
    *,
    path: str = "Cargo.lock",
    repo: str = ".",
    metadata: bool = False,
    changelog: bool = False,
) -> None:
    """Execute the full pipeline and print the report to stdout.

    Args:
        revspec: Git range ("a..b"), single commit, or None for HEAD
                 against the working tree.
        options: Classification and rendering options.
        path: Lockfile path inside the repository.
        repo: Repository directory.
        metadata: Annotate entries with crate manifest changes.
        changelog: Annotate updated crates with CHANGELOG.md additions.
    """
    pair = resolve_revspec(revspec, repo)
    before_text = read_snapshot(pair.before, path, repo)
    after_text = read_snapshot(pair.after, path, repo)

    adapter = None
    if metadata or changelog:
        adapter = CargoRegistrySource(
            LookupCache(), metadata=metadata, changelog=changelog
        )

    for line in build_report(before_text, after_text, options, adapter):
        print(line)
