"""Enrichment backed by cargo's unpacked registry sources.

cargo unpacks every crate it downloads under
``$CARGO_HOME/registry/src/<index>/<name>-<version>/``. This adapter reads
the manifest (and optionally CHANGELOG.md) of both versions of a changed
crate from there. Nothing is downloaded: crates that are not unpacked
locally simply get no annotation.
"""

from __future__ import annotations

import difflib
import os
from pathlib import Path

from .enrich import LookupCache
from .models import CrateMetadata, Enrichment
from .toml import get_manifest_package, get_str, get_str_list, get_table, load_toml

CHANGELOG_FILE = "CHANGELOG.md"


def default_cargo_home() -> Path:
    """Return $CARGO_HOME, falling back to ~/.cargo like cargo does."""
    env = os.environ.get("CARGO_HOME")
    return Path(env) if env else Path.home() / ".cargo"


class CargoRegistrySource:
    """EnrichmentAdapter reading crate metadata from the local registry.

    Args:
        cache: Per-run cache for crate lookups. Owned by the caller.
        cargo_home: Cargo home directory; defaults to default_cargo_home().
        metadata: Report build scripts, proc macros, licenses and authors.
        changelog: Report lines added to CHANGELOG.md between versions.
    """

    def __init__(
        self,
        cache: LookupCache,
        *,
        cargo_home: Path | None = None,
        metadata: bool = True,
        changelog: bool = False,
    ) -> None:
        self.cache = cache
        self.cargo_home = cargo_home or default_cargo_home()
        self.metadata = metadata
        self.changelog = changelog

    def find_crate_dir(self, name: str, version: str) -> Path | None:
        """Locate the unpacked sources of ``name`` at ``version``."""
        src = self.cargo_home / "registry" / "src"
        if not src.is_dir():
            return None
        for index_dir in sorted(src.iterdir()):
            candidate = index_dir / f"{name}-{version}"
            if (candidate / "Cargo.toml").is_file():
                return candidate
        return None

    def load_metadata(self, name: str, version: str) -> CrateMetadata | None:
        """Read manifest facts for one crate version, memoized in the cache."""
        return self.cache.get_or_load(
            ("crate", name, version), lambda: self._read_metadata(name, version)
        )

    def _read_metadata(self, name: str, version: str) -> CrateMetadata | None:
        root = self.find_crate_dir(name, version)
        if root is None:
            return None
        doc = load_toml(root / "Cargo.toml")
        package = get_manifest_package(doc)
        lib = get_table(doc, "lib")

        build = package.get("build")
        if isinstance(build, str):
            has_build_script = True
        elif isinstance(build, bool):
            has_build_script = build
        else:
            has_build_script = (root / "build.rs").is_file()

        proc_macro = lib.get("proc-macro", lib.get("proc_macro", False)) is True

        return CrateMetadata(
            name=name,
            version=version,
            root=str(root),
            authors=get_str_list(package, "authors"),
            license=get_str(package, "license"),
            license_file=get_str(package, "license-file"),
            has_build_script=has_build_script,
            proc_macro=proc_macro,
        )

    def lookup(
        self, name: str, from_version: str | None, to_version: str | None
    ) -> Enrichment | None:
        """Annotate one change. Removals never get annotations."""
        if to_version is None:
            return None
        new = self.load_metadata(name, to_version)
        if new is None:
            return None

        if from_version is None:
            if not self.metadata:
                return None
            notes: list[str] = []
            if new.has_build_script:
                notes.append("Has a build script")
            if new.proc_macro:
                notes.append("Is a proc macro")
            return Enrichment(notes=notes)

        old = self.load_metadata(name, from_version)
        if old is None:
            return None

        enrichment = Enrichment()
        if self.metadata:
            enrichment = compare_metadata(old, new)
        if self.changelog:
            try:
                old_text = read_changelog(Path(old.root))
                new_text = read_changelog(Path(new.root))
            except OSError:
                enrichment.notes.append("Error while reading CHANGELOG")
            else:
                excerpt = changelog_additions(old_text, new_text)
                enrichment.changelog_excerpt = excerpt or None
        return enrichment


def compare_metadata(old: CrateMetadata, new: CrateMetadata) -> Enrichment:
    """Describe manifest changes between two versions of the same crate."""
    notes: list[str] = []
    if not old.has_build_script and new.has_build_script:
        notes.append("Adds a build script")
    if not old.proc_macro and new.proc_macro:
        notes.append("Turns into a proc macro")
    if old.license_file != new.license_file:
        notes.append(
            f"License file changed from {old.license_file or '<none>'} "
            f"to {new.license_file or '<none>'}"
        )

    license_change = None
    if old.license != new.license:
        license_change = (old.license, new.license)

    return Enrichment(
        notes=notes,
        license_change=license_change,
        authors_added=sorted(set(new.authors) - set(old.authors)),
    )


def read_changelog(root: Path) -> str:
    """Read a crate's CHANGELOG.md; a missing file reads as empty."""
    path = root / CHANGELOG_FILE
    if not path.is_file():
        return ""
    return path.read_text(encoding="utf-8", errors="replace")


def changelog_additions(old: str, new: str) -> str:
    """Return the lines present in ``new`` but not in ``old``, in order."""
    old_lines = old.splitlines()
    new_lines = new.splitlines()
    matcher = difflib.SequenceMatcher(None, old_lines, new_lines, autojunk=False)
    added: list[str] = []
    for tag, _i1, _i2, j1, j2 in matcher.get_opcodes():
        if tag in ("insert", "replace"):
            added.extend(new_lines[j1:j2])
    return "\n".join(added)
