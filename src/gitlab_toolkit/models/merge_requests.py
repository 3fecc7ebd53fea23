"""Merge request and discussion models."""

from __future__ import annotations

from typing import Any

from .base import GitLabModel
from .common import DiffRefs, PipelineRef, User


class MergeRequest(GitLabModel):
    iid: int
    title: str = ""
    description: str | None = None
    state: str = ""
    draft: bool = False
    source_branch: str = ""
    target_branch: str = ""
    author: User | None = None
    web_url: str | None = None
    labels: list[str] = []
    created_at: str = ""
    updated_at: str = ""
    diff_refs: DiffRefs | None = None
    head_pipeline: PipelineRef | None = None

    def view(self) -> dict[str, Any]:
        """Flattened form printed by ``mr-view``."""
        return {
            "id": self.iid,
            "title": self.title,
            "description": self.description,
            "state": self.state,
            "draft": self.draft,
            "source_branch": self.source_branch,
            "target_branch": self.target_branch,
            "author": self.author.username if self.author else None,
            "url": self.web_url,
            "pipeline_status": self.head_pipeline.status if self.head_pipeline else None,
            "pipeline_id": self.head_pipeline.id if self.head_pipeline else None,
            "labels": self.labels,
            "created_at": self.created_at,
            "updated_at": self.updated_at,
        }


class Note(GitLabModel):
    id: int
    body: str = ""
    author: User | None = None
    created_at: str | None = None
    noteable_iid: int | None = None
    resolvable: bool = False
    resolved: bool | None = None


class Discussion(GitLabModel):
    id: str
    individual_note: bool = False
    notes: list[Note] = []

    @property
    def first_note(self) -> Note | None:
        return self.notes[0] if self.notes else None

    def created(self) -> dict[str, Any]:
        """Summary printed after a discussion is started."""
        note = self.first_note
        return {
            "discussion_id": self.id,
            "note_id": note.id if note else None,
            "author": note.author.username if note and note.author else None,
            "created_at": note.created_at if note else None,
        }
