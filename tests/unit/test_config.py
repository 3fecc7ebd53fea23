"""Tests for toolkit configuration."""

from __future__ import annotations

import os
from unittest.mock import patch

import pytest

from gitlab_toolkit.config import DEFAULT_API_URL, GitLabConfig, normalize_api_url
from gitlab_toolkit.exceptions import InvalidInputError


class TestNormalizeApiUrl:
    def test_no_host_defaults_to_gitlab_com(self):
        assert normalize_api_url(None) == "https://gitlab.com/api/v4"
        assert normalize_api_url("") == DEFAULT_API_URL

    def test_bare_host_gets_scheme_and_suffix(self):
        assert normalize_api_url("gitlab.example.com") == "https://gitlab.example.com/api/v4"

    def test_trailing_slashes_stripped(self):
        assert normalize_api_url("https://gitlab.example.com//") == (
            "https://gitlab.example.com/api/v4"
        )

    def test_http_scheme_kept(self):
        assert normalize_api_url("http://localhost:8080") == "http://localhost:8080/api/v4"

    def test_existing_suffix_not_duplicated(self):
        assert normalize_api_url("https://gitlab.example.com/api/v4") == (
            "https://gitlab.example.com/api/v4"
        )


def test_config_from_env():
    env = {"GITLAB_HOST": "gitlab.example.com", "GITLAB_TOKEN": "glpat-abc123"}
    with patch.dict(os.environ, env, clear=True):
        config = GitLabConfig.from_env()
    assert config.url == "https://gitlab.example.com/api/v4"
    assert config.token == "glpat-abc123"
    assert config.timeout == 30
    assert config.ssl_verify is True


def test_config_from_env_url_alias():
    env = {"GITLAB_URL": "https://gitlab.internal/", "GITLAB_TOKEN": "x"}
    with patch.dict(os.environ, env, clear=True):
        config = GitLabConfig.from_env()
    assert config.url == "https://gitlab.internal/api/v4"


def test_config_from_env_defaults_to_gitlab_com():
    with patch.dict(os.environ, {"GITLAB_TOKEN": "x"}, clear=True):
        config = GitLabConfig.from_env()
    assert config.url == DEFAULT_API_URL


def test_config_timeout_and_ssl():
    env = {"GITLAB_TOKEN": "x", "GITLAB_TIMEOUT": "5", "GITLAB_SSL_VERIFY": "false"}
    with patch.dict(os.environ, env, clear=True):
        config = GitLabConfig.from_env()
    assert config.timeout == 5
    assert config.ssl_verify is False


def test_config_bad_timeout():
    env = {"GITLAB_TOKEN": "x", "GITLAB_TIMEOUT": "abc"}
    with patch.dict(os.environ, env, clear=True):
        with pytest.raises(InvalidInputError, match="GITLAB_TIMEOUT must be a number"):
            GitLabConfig.from_env()


def test_config_api_url_strips_trailing_slash():
    config = GitLabConfig(url="https://gitlab.example.com/api/v4/", token="x")
    assert config.api_url == "https://gitlab.example.com/api/v4"


def test_config_validate_missing_token():
    config = GitLabConfig(url="https://gitlab.example.com/api/v4", token="")
    with pytest.raises(ValueError, match="GITLAB_TOKEN"):
        config.validate()
