"""Validation for command-line identifiers, run before any API call."""

from __future__ import annotations

import re

from .exceptions import InvalidIdError, InvalidProjectError

# Exactly one "/" with something on each side: "org/project"
_PROJECT_RE = re.compile(r"^[^/]+/[^/]+$")


def validate_project(value: str) -> str:
    """Check that *value* looks like ``org/project`` and return it unchanged."""
    if not _PROJECT_RE.match(value):
        raise InvalidProjectError(value)
    return value


def validate_numeric_id(value: str | int, name: str) -> int:
    """Parse a positive integer ID, e.g. a job, MR or pipeline ID."""
    try:
        number = int(str(value).strip())
    except ValueError:
        raise InvalidIdError(name, str(value)) from None
    if number <= 0:
        raise InvalidIdError(name, str(value))
    return number
