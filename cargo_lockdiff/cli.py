"""CLI entry point for cargo-lockdiff."""

from __future__ import annotations

import click

from cargo_lockdiff.lockfile import ParseError
from cargo_lockdiff.models import ChecksumPolicy, ReportOptions
from cargo_lockdiff.pipeline import run_diff
from cargo_lockdiff.shell import fatal
from cargo_lockdiff.snapshots import SnapshotError


@click.command()
@click.version_option(package_name="cargo-lockdiff")
@click.argument("revspec", required=False)
@click.option(
    "-p",
    "--path",
    default="Cargo.lock",
    show_default=True,
    help="Path to the lock file inside the repository.",
)
@click.option(
    "-g",
    "--git-repo",
    "repo",
    type=click.Path(exists=True, file_okay=False),
    default=".",
    show_default=True,
    help="Path to the git repository.",
)
@click.option(
    "-m",
    "--metadata",
    is_flag=True,
    help=(
        "Print license, author, build script and proc macro changes. "
        "Only crates already unpacked in $CARGO_HOME are read."
    ),
)
@click.option(
    "-c", "--changelog", is_flag=True, help="Print additions to CHANGELOG.md."
)
@click.option(
    "--checksum-policy",
    type=click.Choice([p.value for p in ChecksumPolicy]),
    default=ChecksumPolicy.IGNORE.value,
    show_default=True,
    help="How to report packages whose checksum alone changed.",
)
@click.option(
    "-a",
    "--all",
    "include_unchanged",
    is_flag=True,
    help="Also list unchanged packages.",
)
def cli(
    revspec: str | None,
    path: str,
    repo: str,
    metadata: bool,
    changelog: bool,
    checksum_policy: str,
    include_unchanged: bool,
) -> None:
    """Show what changed in Cargo.lock between two revisions.

    REVSPEC is a git range (a..b) or a single commit, compared with its
    first parent. Without it, HEAD is compared with the working tree.
    """
    options = ReportOptions(
        checksum_policy=ChecksumPolicy(checksum_policy),
        include_unchanged=include_unchanged,
    )
    try:
        run_diff(
            revspec,
            options,
            path=path,
            repo=repo,
            metadata=metadata,
            changelog=changelog,
        )
    except (ParseError, SnapshotError) as exc:
        fatal(str(exc))
