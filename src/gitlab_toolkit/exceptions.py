"""GitLab toolkit exceptions."""

from __future__ import annotations


class GitLabError(Exception):
    """Base exception for GitLab operations."""


class NoCredentialError(GitLabError):
    """Raised when no GitLab token can be resolved from any source."""

    def __init__(self) -> None:
        super().__init__("No GitLab token found. Set GITLAB_TOKEN env var or run: glab auth login")


class InvalidInputError(GitLabError):
    """Raised when a command argument is malformed."""


class InvalidProjectError(InvalidInputError):
    """Raised when a project identifier is not of the form ``org/project``."""

    def __init__(self, value: str) -> None:
        self.value = value
        super().__init__("Invalid project format. Use: org/project")


class InvalidIdError(InvalidInputError):
    """Raised when a numeric identifier is not a positive integer."""

    def __init__(self, name: str, value: str) -> None:
        self.name = name
        self.value = value
        super().__init__(f"{name} must be a positive number")


class GitLabApiError(GitLabError):
    """Raised when the GitLab API returns a non-success response.

    ``str(error)`` is the human-readable message extracted from the response
    body (or a status-code fallback); the raw body is kept on ``body``.
    """

    def __init__(
        self, status_code: int, status_text: str, message: str = "", body: str = ""
    ) -> None:
        self.status_code = status_code
        self.status_text = status_text
        self.body = body
        super().__init__(message or f"HTTP {status_code} {status_text}")


class GitLabAuthError(GitLabApiError):
    """Raised on 401/403 authentication failures."""

    def __init__(self, status_code: int, message: str = "", body: str = "") -> None:
        status_text = "Unauthorized" if status_code == 401 else "Forbidden"
        super().__init__(status_code, status_text, message, body)


class GitLabNotFoundError(GitLabApiError):
    """Raised on 404 responses."""

    def __init__(self, message: str = "", body: str = "") -> None:
        super().__init__(404, "Not Found", message, body)


class InvalidResponseError(GitLabError):
    """Raised when a response body cannot be decoded into the expected shape."""


class CommandError(GitLabError):
    """Raised when a command cannot complete for a reason other than an API error."""
