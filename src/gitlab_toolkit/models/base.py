"""Base model for GitLab API responses."""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ValidationError

from ..exceptions import InvalidResponseError


class GitLabModel(BaseModel):
    """Base model with common behavior for all GitLab API models."""

    model_config = {"extra": "ignore", "populate_by_name": True}

    @classmethod
    def from_response(cls, data: Any):
        """Validate an API response body, raising InvalidResponseError on a bad shape."""
        try:
            return cls.model_validate(data)
        except ValidationError as e:
            msg = f"Unexpected {cls.__name__} response: {e.error_count()} invalid field(s)"
            raise InvalidResponseError(msg) from e

    def to_dict(self) -> dict[str, Any]:
        return self.model_dump(mode="json", exclude_none=True)
