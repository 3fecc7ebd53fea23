"""Pipeline and job models."""

from __future__ import annotations

from typing import Any

from .base import GitLabModel

TERMINAL_STATUSES = ("success", "failed", "canceled")


class Pipeline(GitLabModel):
    id: int
    status: str = ""
    ref: str = ""
    web_url: str = ""

    def summary(self) -> dict[str, Any]:
        return {"id": self.id, "status": self.status, "ref": self.ref, "web_url": self.web_url}


class Job(GitLabModel):
    id: int
    name: str = ""
    stage: str = ""
    status: str = ""
    web_url: str = ""

    def summary(self) -> dict[str, Any]:
        return {"id": self.id, "name": self.name, "status": self.status, "web_url": self.web_url}
