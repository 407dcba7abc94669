"""Data models for cargo-lockdiff.

These Pydantic models represent the core data structures passed between
the parser, the differ, the presenter and the enrichment stage.
"""

from __future__ import annotations

from enum import Enum

from pydantic import BaseModel, ConfigDict, Field, model_validator


class PackageRecord(BaseModel):
    """A single resolved package from one lockfile snapshot.

    Attributes:
        name: Package name, unique within a snapshot.
        version: Resolved version string, compared by string equality.
        source: Where the package comes from (registry, git URL), or None
                for path/workspace members.
        checksum: Content checksum if the lockfile records one.
    """

    model_config = ConfigDict(frozen=True)

    name: str = Field(min_length=1)
    version: str = Field(min_length=1)
    source: str | None = None
    checksum: str | None = None


PackageSet = dict[str, PackageRecord]


class ChangeKind(str, Enum):
    ADDED = "added"
    REMOVED = "removed"
    VERSION_CHANGED = "version_changed"
    SOURCE_CHANGED = "source_changed"
    CHECKSUM_CHANGED = "checksum_changed"
    UNCHANGED = "unchanged"


class ChecksumPolicy(str, Enum):
    """How a difference in checksum alone is classified.

    - ignore: the package is unchanged.
    - source: treated like a source change.
    - distinct: reported with its own ``checksum_changed`` kind.
    """

    IGNORE = "ignore"
    SOURCE = "source"
    DISTINCT = "distinct"


class ChangeRecord(BaseModel):
    """Classification of one package name across the two snapshots.

    ``from_`` is the record in the ``before`` snapshot and ``to`` the one in
    ``after``. Which side may be missing depends on ``kind``.
    """

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    name: str
    kind: ChangeKind
    from_: PackageRecord | None = Field(default=None, alias="from")
    to: PackageRecord | None = None

    @model_validator(mode="after")
    def _check_sides(self) -> ChangeRecord:
        if self.kind is ChangeKind.ADDED:
            ok = self.from_ is None and self.to is not None
        elif self.kind is ChangeKind.REMOVED:
            ok = self.from_ is not None and self.to is None
        else:
            ok = self.from_ is not None and self.to is not None
        if not ok:
            raise ValueError(
                f"{self.kind.value} change for {self.name!r} has wrong sides"
            )
        return self


class DiffResult(BaseModel):
    """Every name from both snapshots, classified and sorted by name.

    Unchanged entries are kept so callers can check completeness; the
    default report only shows ``reportable()`` entries.
    """

    model_config = ConfigDict(frozen=True)

    changes: list[ChangeRecord] = Field(default_factory=list)

    def __len__(self) -> int:
        return len(self.changes)

    def reportable(self) -> list[ChangeRecord]:
        return [c for c in self.changes if c.kind is not ChangeKind.UNCHANGED]


class ReportOptions(BaseModel):
    """Per-run knobs for classifying and rendering a diff."""

    checksum_policy: ChecksumPolicy = ChecksumPolicy.IGNORE
    include_unchanged: bool = False


class Enrichment(BaseModel):
    """Extra annotations for one rendered entry.

    Attributes:
        authors_added: Authors present in the new version only.
        license_change: (old, new) license when it changed.
        notes: Short remarks such as "Has a build script".
        changelog_excerpt: Lines added to the crate's CHANGELOG.md.
    """

    authors_added: list[str] = Field(default_factory=list)
    license_change: tuple[str | None, str | None] | None = None
    notes: list[str] = Field(default_factory=list)
    changelog_excerpt: str | None = None

    def is_empty(self) -> bool:
        return not (
            self.authors_added
            or self.license_change
            or self.notes
            or self.changelog_excerpt
        )


class CrateMetadata(BaseModel):
    """Manifest facts about one unpacked crate version.

    Attributes:
        root: Directory holding the unpacked crate sources.
    """

    name: str
    version: str
    root: str
    authors: list[str] = Field(default_factory=list)
    license: str | None = None
    license_file: str | None = None
    has_build_script: bool = False
    proc_macro: bool = False
