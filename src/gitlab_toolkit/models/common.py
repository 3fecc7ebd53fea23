"""Common GitLab models shared across domains."""

from __future__ import annotations

from .base import GitLabModel


class User(GitLabModel):
    id: int | None = None
    username: str = ""
    name: str = ""


class DiffRefs(GitLabModel):
    base_sha: str | None = None
    head_sha: str | None = None
    start_sha: str | None = None

    @property
    def complete(self) -> bool:
        return bool(self.base_sha and self.head_sha and self.start_sha)


class PipelineRef(GitLabModel):
    id: int
    status: str = ""
    web_url: str = ""
