"""Tests for cargo_lockdiff.models."""

from __future__ import annotations

import pytest
from pydantic import ValidationError

from cargo_lockdiff.models import (
    ChangeKind,
    ChangeRecord,
    ChecksumPolicy,
    Enrichment,
    PackageRecord,
    ReportOptions,
)


class TestPackageRecord:
    def test_create_with_required_fields(self) -> None:
        rec = PackageRecord(name="adler", version="0.2.3")
        assert rec.source is None
        assert rec.checksum is None

    def test_frozen(self) -> None:
        rec = PackageRecord(name="adler", version="0.2.3")
        with pytest.raises(ValidationError):
            rec.version = "1.0.0"  # type: ignore[misc]

    def test_empty_name_rejected(self) -> None:
        with pytest.raises(ValidationError):
            PackageRecord(name="", version="1.0.0")

    def test_empty_version_rejected(self) -> None:
        with pytest.raises(ValidationError):
            PackageRecord(name="foo", version="")

    def test_hashable(self) -> None:
        rec = PackageRecord(name="adler", version="0.2.3")
        assert {rec: 1}[PackageRecord(name="adler", version="0.2.3")] == 1


class TestChangeRecord:
    rec = PackageRecord(name="foo", version="1.0.0")

    def test_added_requires_to_only(self) -> None:
        ChangeRecord(name="foo", kind=ChangeKind.ADDED, to=self.rec)
        with pytest.raises(ValidationError):
            ChangeRecord(name="foo", kind=ChangeKind.ADDED, from_=self.rec, to=self.rec)

    def test_removed_requires_from_only(self) -> None:
        ChangeRecord(name="foo", kind=ChangeKind.REMOVED, from_=self.rec)
        with pytest.raises(ValidationError):
            ChangeRecord(name="foo", kind=ChangeKind.REMOVED, to=self.rec)

    @pytest.mark.parametrize(
        "kind",
        [
            ChangeKind.VERSION_CHANGED,
            ChangeKind.SOURCE_CHANGED,
            ChangeKind.CHECKSUM_CHANGED,
            ChangeKind.UNCHANGED,
        ],
    )
    def test_other_kinds_require_both(self, kind: ChangeKind) -> None:
        ChangeRecord(name="foo", kind=kind, from_=self.rec, to=self.rec)
        with pytest.raises(ValidationError):
            ChangeRecord(name="foo", kind=kind, to=self.rec)

    def test_from_alias(self) -> None:
        change = ChangeRecord.model_validate(
            {"name": "foo", "kind": "removed", "from": {"name": "foo", "version": "1"}}
        )
        assert change.from_ is not None
        assert change.from_.version == "1"


class TestReportOptions:
    def test_defaults(self) -> None:
        options = ReportOptions()
        assert options.checksum_policy is ChecksumPolicy.IGNORE
        assert options.include_unchanged is False

    def test_policy_from_string(self) -> None:
        assert ReportOptions(checksum_policy="distinct").checksum_policy is (
            ChecksumPolicy.DISTINCT
        )


class TestEnrichment:
    def test_empty(self) -> None:
        assert Enrichment().is_empty()

    def test_not_empty(self) -> None:
        assert not Enrichment(notes=["Is a proc macro"]).is_empty()
        assert not Enrichment(license_change=("MIT", None)).is_empty()
