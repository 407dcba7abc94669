"""Shell and git utilities.

Provides a thin wrapper around subprocess for git, plus helpers for
writing diagnostics to stderr so they never mix with the report on stdout.
"""

from __future__ import annotations

import subprocess
import sys


def git(
    *args: str, cwd: str | None = None, check: bool = True, encoding: str = "utf-8"
) -> str:
    """Run a git command and return stdout.

    Args:
        *args: Arguments to pass to git (e.g., "show", "HEAD:Cargo.lock").
        cwd: Repository directory to run in. Defaults to the current one.
        check: If True (default), raise on non-zero exit. Set to False
               for commands that may legitimately fail (e.g., parent lookup).
        encoding: Encoding used to decode stdout and stderr.

    Returns:
        Stdout from the git command with the trailing newline removed.

    Raises:
        UnicodeDecodeError: If the output is not valid in ``encoding``.
    """
    result = subprocess.run(
        ["git", *args],
        cwd=cwd,
        capture_output=True,
        encoding=encoding,
        check=check,
    )
    return result.stdout.rstrip("\n")


def warn(msg: str) -> None:
    """Print a non-fatal warning to stderr."""
    print(f"WARNING: {msg}", file=sys.stderr)


def fatal(msg: str) -> None:
    """Print an error message and exit with code 1.

    Use for unrecoverable errors that should halt the run.
    """
    print(f"ERROR: {msg}", file=sys.stderr)
    sys.exit(1)
