"""GitLab toolkit configuration."""

from __future__ import annotations

import os
from dataclasses import dataclass

from .auth import resolve_token
from .exceptions import InvalidInputError

DEFAULT_API_URL = "https://gitlab.com/api/v4"
API_SUFFIX = "/api/v4"


def normalize_api_url(host: str | None) -> str:
    """Turn a ``GITLAB_HOST`` value into an API root.

    ``gitlab.example.com`` and ``https://gitlab.example.com/`` both become
    ``https://gitlab.example.com/api/v4``. No host means gitlab.com.
    """
    if not host:
        return DEFAULT_API_URL

    url = host
    if not url.startswith(("http://", "https://")):
        url = f"https://{url}"
    if not url.endswith(API_SUFFIX):
        url = url.rstrip("/") + API_SUFFIX
    return url


@dataclass
class GitLabConfig:
    """Connection settings for the toolkit, loaded from environment variables."""

    url: str = DEFAULT_API_URL
    token: str = ""
    timeout: int = 30
    ssl_verify: bool = True

    @classmethod
    def from_env(cls) -> GitLabConfig:
        host = os.getenv("GITLAB_HOST") or os.getenv("GITLAB_URL")
        raw_timeout = os.getenv("GITLAB_TIMEOUT", "30")
        try:
            timeout = int(raw_timeout)
        except ValueError:
            msg = f"GITLAB_TIMEOUT must be a number of seconds, got: {raw_timeout}"
            raise InvalidInputError(msg) from None
        ssl_verify = os.getenv("GITLAB_SSL_VERIFY", "true").lower() not in (
            "false",
            "0",
            "no",
        )

        return cls(
            url=normalize_api_url(host),
            token=resolve_token(),
            timeout=timeout,
            ssl_verify=ssl_verify,
        )

    @property
    def api_url(self) -> str:
        return self.url.rstrip("/")

    def validate(self) -> None:
        if not self.url:
            msg = "GitLab API URL is required"
            raise ValueError(msg)
        if not self.token:
            msg = "GitLab token is required. Set GITLAB_TOKEN or run: glab auth login"
            raise ValueError(msg)
