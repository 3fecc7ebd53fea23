"""Tests for identifier validation."""

from __future__ import annotations

import pytest

from gitlab_toolkit.exceptions import InvalidIdError, InvalidProjectError
from gitlab_toolkit.validation import validate_numeric_id, validate_project


@pytest.mark.parametrize("value", ["group/project", "my-org/my.repo"])
def test_valid_project(value):
    assert validate_project(value) == value


@pytest.mark.parametrize("value", ["project", "a/b/c", "/project", "group/", ""])
def test_invalid_project(value):
    with pytest.raises(InvalidProjectError, match="org/project"):
        validate_project(value)


def test_valid_numeric_id():
    assert validate_numeric_id("42", "Job ID") == 42


@pytest.mark.parametrize("value", ["0", "-3", "abc", "1.5", ""])
def test_invalid_numeric_id(value):
    with pytest.raises(InvalidIdError, match="MR ID must be a positive number"):
        validate_numeric_id(value, "MR ID")
