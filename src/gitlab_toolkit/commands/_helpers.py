"""Shared helper functions for command modules."""

from __future__ import annotations

import subprocess
from pathlib import Path

from ..exceptions import CommandError, InvalidInputError


def read_text_file(path: str) -> str:
    """Read a ``--*-file`` option value, e.g. an MR description written in an editor."""
    try:
        return Path(path).read_text(encoding="utf-8")
    except OSError:
        msg = f"File not found: {path}"
        raise InvalidInputError(msg) from None


def check_choice(value: str, choices: tuple[str, ...]) -> str:
    if value not in choices:
        msg = f"Invalid filter. Use: {', '.join(choices)}"
        raise InvalidInputError(msg)
    return value


def _git(*args: str) -> subprocess.CompletedProcess[str]:
    return subprocess.run(["git", *args], capture_output=True, text=True)


def push_branch(branch: str) -> None:
    """Push *branch* to ``origin`` from the current working tree."""
    try:
        inside = _git("rev-parse", "--is-inside-work-tree")
    except OSError:
        msg = "--push requires git to be installed"
        raise CommandError(msg) from None
    if inside.returncode != 0:
        msg = "--push requires being inside a git repository"
        raise CommandError(msg)

    pushed = _git("push", "origin", branch)
    if pushed.returncode != 0:
        msg = f"Failed to push branch: {pushed.stderr.strip()}"
        raise CommandError(msg)
