"""Tests for exceptions."""

from gitlab_toolkit.exceptions import (
    GitLabApiError,
    GitLabAuthError,
    GitLabError,
    GitLabNotFoundError,
    InvalidIdError,
    InvalidInputError,
    InvalidProjectError,
    NoCredentialError,
)


def test_api_error():
    e = GitLabApiError(500, "Internal Server Error", "something broke", "raw body")
    assert e.status_code == 500
    assert e.body == "raw body"
    assert str(e) == "something broke"


def test_api_error_without_message():
    e = GitLabApiError(502, "Bad Gateway")
    assert str(e) == "HTTP 502 Bad Gateway"


def test_auth_error_401():
    e = GitLabAuthError(401)
    assert e.status_code == 401
    assert e.status_text == "Unauthorized"


def test_auth_error_403():
    e = GitLabAuthError(403, "insufficient_scope")
    assert e.status_text == "Forbidden"
    assert str(e) == "insufficient_scope"


def test_not_found_error():
    e = GitLabNotFoundError("404 Project Not Found")
    assert e.status_code == 404
    assert isinstance(e, GitLabApiError)


def test_no_credential():
    e = NoCredentialError()
    assert isinstance(e, GitLabError)
    assert "GITLAB_TOKEN" in str(e)
    assert "glab auth login" in str(e)


def test_invalid_input_errors():
    assert isinstance(InvalidProjectError("x"), InvalidInputError)
    assert str(InvalidIdError("Job ID", "abc")) == "Job ID must be a positive number"
