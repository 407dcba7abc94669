"""Shared test fixtures."""

from __future__ import annotations

from collections.abc import Callable
from pathlib import Path

import pytest

CRATES_IO = "registry+https://github.com/rust-lang/crates.io-index"


def _render_package(pkg: tuple) -> str:
    name, version, *rest = pkg
    lines = ["[[package]]", f'name = "{name}"', f'version = "{version}"']
    source = rest[0] if len(rest) > 0 else CRATES_IO
    checksum = rest[1] if len(rest) > 1 else None
    if source is not None:
        lines.append(f'source = "{source}"')
    if checksum is not None:
        lines.append(f'checksum = "{checksum}"')
    return "\n".join(lines)


@pytest.fixture
def make_lock() -> Callable[..., str]:
    """Build Cargo.lock text from (name, version[, source[, checksum]]) tuples.

    Source defaults to crates.io; pass None for a path dependency.
    """

    def _make(*packages: tuple) -> str:
        header = (
            "# This file is automatically @generated by Cargo.\n"
            "# It is not intended for manual editing.\n"
            "version = 3\n"
        )
        body = "\n\n".join(_render_package(p) for p in packages)
        return f"{header}\n{body}\n" if body else header

    return _make


@pytest.fixture
def sample_lock() -> str:
    """A realistic lockfile with dependencies, a path member and checksums."""
    return f"""\
# This file is automatically @generated by Cargo.
# It is not intended for manual editing.
version = 3

[[package]]
name = "adler"
version = "0.2.3"
source = "{CRATES_IO}"
checksum = "ee2a4ec343196209d6594e19543ae87a39f96d5534d7174822a3ad825dd6ed7e"

[[package]]
name = "aho-corasick"
version = "0.7.13"
source = "{CRATES_IO}"
checksum = "043164d8ba5c4c3035fec9bbee8647c0261d788f3474306f93bb65901cae0e86"
dependencies = [
 "memchr",
]

[[package]]
name = "memchr"
version = "2.3.3"
source = "{CRATES_IO}"
checksum = "3728d817d99e5ac407411fa471ff9800a778d88a24685968b36824eaf4bee400"

[[package]]
name = "my-app"
version = "0.1.0"
dependencies = [
 "adler",
 "aho-corasick",
]
"""


@pytest.fixture
def cargo_home(tmp_path: Path) -> Path:
    """An empty cargo home with a registry source directory."""
    home = tmp_path / "cargo-home"
    (home / "registry" / "src" / "github.com-1ecc6299db9ec823").mkdir(parents=True)
    return home


@pytest.fixture
def unpack_crate(cargo_home: Path) -> Callable[..., Path]:
    """Write an unpacked crate into the cargo home registry."""

    def _unpack(
        name: str,
        version: str,
        manifest_extra: str = "",
        *,
        build_rs: bool = False,
        changelog: str | None = None,
    ) -> Path:
        root = (
            cargo_home
            / "registry"
            / "src"
            / "github.com-1ecc6299db9ec823"
            / f"{name}-{version}"
        )
        root.mkdir(parents=True)
        (root / "Cargo.toml").write_text(
            f'[package]\nname = "{name}"\nversion = "{version}"\n{manifest_extra}'
        )
        if build_rs:
            (root / "build.rs").write_text("fn main() {}\n")
        if changelog is not None:
            (root / "CHANGELOG.md").write_text(changelog)
        return root

    return _unpack
