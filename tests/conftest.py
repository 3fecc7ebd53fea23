"""Shared test fixtures for gitlab-toolkit."""

from __future__ import annotations

import pytest
import respx

from gitlab_toolkit.client import GitLabClient
from gitlab_toolkit.config import GitLabConfig

TEST_URL = "https://gitlab.example.com/api/v4"
TEST_TOKEN = "test-token"


@pytest.fixture
def config() -> GitLabConfig:
    return GitLabConfig(url=TEST_URL, token=TEST_TOKEN)


@pytest.fixture
def client(config: GitLabConfig) -> GitLabClient:
    return GitLabClient(config)


@pytest.fixture
def mock_api() -> respx.MockRouter:
    with respx.mock(base_url=TEST_URL) as router:
        yield router
