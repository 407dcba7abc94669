"""Retrieve lockfile snapshots from git.

Turns a revspec into a pair of revisions and reads the lockfile text at
each of them with ``git show``. The diff engine itself never touches git;
it only sees the two texts returned from here.
"""

from __future__ import annotations

import subprocess
from pathlib import Path

from pydantic import BaseModel

from .shell import git


class SnapshotError(Exception):
    """A lockfile snapshot could not be retrieved."""


class SnapshotPair(BaseModel):
    """The two revisions to compare.

    Attributes:
        before: Revision of the older snapshot.
        after: Revision of the newer snapshot, or None for the working tree.
    """

    before: str
    after: str | None


def resolve_revspec(revspec: str | None, repo: str = ".") -> SnapshotPair:
    """Work out which revisions to compare.

    - None: HEAD against the working tree.
    - "a..b": a against b; an empty side means HEAD.
    - "c": c's first parent against c.

    Raises:
        SnapshotError: If a single commit does not exist or has no parent.
    """
    if revspec is None:
        return SnapshotPair(before="HEAD", after=None)

    if ".." in revspec:
        # "a...b" (symmetric difference) is read as a plain range too
        left, _, right = revspec.partition("..")
        right = right.lstrip(".")
        return SnapshotPair(before=left or "HEAD", after=right or "HEAD")

    commit = git(
        "rev-parse",
        "--verify",
        "--quiet",
        f"{revspec}^{{commit}}",
        cwd=repo,
        check=False,
    )
    if not commit:
        raise SnapshotError(f"Unknown revision {revspec}")

    parent = git(
        "rev-parse", "--verify", "--quiet", f"{revspec}^", cwd=repo, check=False
    )
    if not parent:
        raise SnapshotError(f"No parent to compare to for {revspec}")
    return SnapshotPair(before=parent, after=revspec)


def read_snapshot(rev: str | None, path: str, repo: str = ".") -> str:
    """Read the lockfile at ``path`` as of ``rev``.

    Lockfiles are read as UTF-8.

    Args:
        rev: Revision to read from, or None for the working-tree file.
        path: Lockfile path relative to the repository root.
        repo: Repository directory.

    Raises:
        SnapshotError: If the file does not exist at that revision or is
            not valid UTF-8.
    """
    if rev is None:
        file_path = Path(repo) / path
        try:
            return file_path.read_text(encoding="utf-8")
        except UnicodeDecodeError as exc:
            raise SnapshotError(
                f"{path} in the working tree is not valid UTF-8"
            ) from exc
        except OSError as exc:
            raise SnapshotError(
                f"Failed to read current lock file at {file_path}: {exc}"
            ) from exc

    try:
        return git("show", f"{rev}:{path}", cwd=repo)
    except UnicodeDecodeError as exc:
        raise SnapshotError(f"{path} in {rev} is not valid UTF-8") from exc
    except subprocess.CalledProcessError as exc:
        message = f"Couldn't find lock file {path} in {rev}"
        detail = (exc.stderr or "").strip()
        if detail:
            message += f": {detail}"
        raise SnapshotError(message) from exc
