"""Turn GitLab error responses into a single readable message.

GitLab reports failures in several body shapes::

    {"error": "insufficient_scope"}
    {"message": "404 Project Not Found"}
    {"message": ["Branch already exists"]}
    {"message": {"title": ["can't be blank"], "source_branch": ["is invalid"]}}
    {"error": ["job is not retryable"]}

Each shape has a matcher below. Matchers run in order and the first one that
returns a message wins, so field-level validation errors are reported before
the status-code fallback.
"""

from __future__ import annotations

import json
from collections.abc import Callable
from typing import Any

STATUS_MESSAGES = {
    401: "Unauthorized (401) - check your GitLab token",
    403: "Forbidden (403)",
    404: "Not found (404)",
    409: "Conflict (409)",
    422: "Unprocessable entity (422)",
}

Matcher = Callable[[dict[str, Any]], str | None]


def _is_str_list(value: Any) -> bool:
    return isinstance(value, list) and all(isinstance(v, str) for v in value)


def _error_string(body: dict[str, Any]) -> str | None:
    error = body.get("error")
    return error if isinstance(error, str) else None


def _message_string(body: dict[str, Any]) -> str | None:
    message = body.get("message")
    return message if isinstance(message, str) else None


def _message_list(body: dict[str, Any]) -> str | None:
    message = body.get("message")
    return ", ".join(message) if _is_str_list(message) else None


def _message_fields(body: dict[str, Any]) -> str | None:
    message = body.get("message")
    if not isinstance(message, dict):
        return None
    parts = [
        f"{field}: {', '.join(str(e) for e in errors)}"
        for field, errors in message.items()
        if isinstance(errors, list)
    ]
    return "; ".join(parts) if parts else None


def _error_list(body: dict[str, Any]) -> str | None:
    error = body.get("error")
    return ", ".join(error) if _is_str_list(error) else None


MATCHERS: tuple[Matcher, ...] = (
    _error_string,
    _message_string,
    _message_list,
    _message_fields,
    _error_list,
)


def fallback_message(status_code: int, status_text: str = "") -> str:
    if status_code in STATUS_MESSAGES:
        return STATUS_MESSAGES[status_code]
    return f"HTTP {status_code} {status_text}".rstrip()


def extract_error_message(status_code: int, status_text: str = "", body: str = "") -> str:
    """Return the most specific message available for a failed response. Never raises."""
    try:
        parsed = json.loads(body) if body else None
    except ValueError:
        parsed = None

    if isinstance(parsed, dict):
        for matcher in MATCHERS:
            message = matcher(parsed)
            if message is not None:
                return message

    return fallback_message(status_code, status_text)
