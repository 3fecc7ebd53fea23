"""Response models for the GitLab endpoints the toolkit uses."""

from .base import GitLabModel
from .common import DiffRefs, PipelineRef, User
from .merge_requests import Discussion, MergeRequest, Note
from .pipelines import Job, Pipeline

__all__ = [
    "DiffRefs",
    "Discussion",
    "GitLabModel",
    "Job",
    "MergeRequest",
    "Note",
    "Pipeline",
    "PipelineRef",
    "User",
]
