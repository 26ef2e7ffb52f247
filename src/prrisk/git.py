"""Diff sources: git ranges, the working tree, files and stdin."""

from __future__ import annotations

import subprocess
import sys
from pathlib import Path
from typing import TextIO

from prrisk.errors import InputError


def _run_git(*args: str, cwd: Path | None = None) -> str:
    """Execute a git command and return stdout."""
    result = subprocess.run(
        ["git", *args],
        capture_output=True,
        text=True,
        cwd=cwd,
        check=False,
    )
    if result.returncode != 0:
        msg = result.stderr.strip() or f"git {' '.join(args)} failed"
        raise RuntimeError(f"Failed to get git diff: {msg}")
    return result.stdout


def get_diff(base: str, head: str, cwd: Path | None = None) -> str:
    """Return the diff between two branches or commits."""
    return _run_git("diff", base, head, cwd=cwd)


def get_uncommitted_diff(cwd: Path | None = None) -> str:
    """Return the diff of uncommitted changes in the working tree."""
    return _run_git("diff", cwd=cwd)


def read_diff_file(path: Path) -> str:
    """Read a diff from a file."""
    try:
        return path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as e:
        raise InputError(f"Failed to read diff file: {e}") from e


def read_diff_stdin(stream: TextIO | None = None) -> str:
    """Read a diff from stdin until EOF."""
    source = stream or sys.stdin
    try:
        return source.read()
    except (OSError, UnicodeDecodeError) as e:
        raise InputError(f"Failed to read from stdin: {e}") from e
