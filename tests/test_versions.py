"""Tests for cargo_lockdiff.versions."""

from __future__ import annotations

from cargo_lockdiff.versions import is_downgrade, parse_version


class TestParseVersion:
    def test_full_semver(self) -> None:
        v = parse_version("1.2.3")
        assert v is not None
        assert v.major == 1
        assert v.minor == 2
        assert v.patch == 3

    def test_prerelease(self) -> None:
        v = parse_version("0.3.0-alpha.2")
        assert v is not None
        assert v.prerelease == "alpha.2"

    def test_build_metadata(self) -> None:
        v = parse_version("0.1.0+wasi-snapshot-preview1")
        assert v is not None
        assert v.build == "wasi-snapshot-preview1"

    def test_two_part_version(self) -> None:
        v = parse_version("1.2")
        assert v is not None
        assert (v.major, v.minor, v.patch) == (1, 2, 0)

    def test_single_part_version(self) -> None:
        v = parse_version("5")
        assert v is not None
        assert (v.major, v.minor, v.patch) == (5, 0, 0)

    def test_garbage(self) -> None:
        assert parse_version("not-a-version") is None


class TestIsDowngrade:
    def test_upgrade(self) -> None:
        assert not is_downgrade("0.2.12", "0.2.13")

    def test_downgrade(self) -> None:
        assert is_downgrade("0.2.13", "0.2.12")

    def test_numeric_not_lexical(self) -> None:
        assert not is_downgrade("0.9.0", "0.10.0")

    def test_prerelease_is_lower(self) -> None:
        assert is_downgrade("1.0.0", "1.0.0-rc.1")

    def test_unparseable(self) -> None:
        assert not is_downgrade("1.0.0", "garbage")
        assert not is_downgrade("garbage", "1.0.0")
