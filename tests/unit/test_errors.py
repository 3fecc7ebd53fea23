"""Tests for error message extraction."""

from __future__ import annotations

import json

import pytest

from gitlab_toolkit.errors import extract_error_message


def _msg(body, status: int = 400, status_text: str = "Bad Request") -> str:
    text = body if isinstance(body, str) else json.dumps(body)
    return extract_error_message(status, status_text, text)


class TestBodyShapes:
    def test_error_string(self):
        assert _msg({"error": "insufficient_scope"}, 403) == "insufficient_scope"

    def test_message_string(self):
        assert _msg({"message": "404 Project Not Found"}, 404) == "404 Project Not Found"

    def test_message_list(self):
        assert _msg({"message": ["Branch already exists", "Another"]}) == (
            "Branch already exists, Another"
        )

    def test_message_fields(self):
        assert _msg({"message": {"title": ["can't be blank"]}}, 422) == "title: can't be blank"

    def test_message_multiple_fields(self):
        body = {"message": {"title": ["can't be blank", "is too short"], "labels": ["bad"]}}
        assert _msg(body) == "title: can't be blank, is too short; labels: bad"

    def test_message_fields_skip_non_lists(self):
        assert _msg({"message": {"title": "oops", "source": ["is invalid"]}}) == (
            "source: is invalid"
        )

    def test_error_list(self):
        assert _msg({"error": ["job is not retryable"]}) == "job is not retryable"

    def test_error_string_beats_message(self):
        assert _msg({"error": "first", "message": "second"}) == "first"


class TestFallbacks:
    @pytest.mark.parametrize(
        ("status", "expected"),
        [
            (401, "Unauthorized (401) - check your GitLab token"),
            (403, "Forbidden (403)"),
            (404, "Not found (404)"),
            (409, "Conflict (409)"),
            (422, "Unprocessable entity (422)"),
        ],
    )
    def test_known_status(self, status, expected):
        assert extract_error_message(status, "", "<html>nope</html>") == expected

    def test_unknown_status(self):
        assert extract_error_message(502, "Bad Gateway", "") == "HTTP 502 Bad Gateway"

    def test_empty_message_object_falls_back(self):
        assert _msg({"message": {}}, 500, "Internal Server Error") == (
            "HTTP 500 Internal Server Error"
        )

    def test_json_array_body_falls_back(self):
        assert _msg(["weird"], 404) == "Not found (404)"
