"""Comment schemas."""

from __future__ import annotations

from datetime import datetime

from pydantic import Field, field_validator

from .common import CamelModel
from .user import UserSummary


class CommentCreate(CamelModel):
    content: str = Field(min_length=1, max_length=1000)

    @field_validator("content")
    @classmethod
    def _reject_blank(cls, value: str) -> str:
        if not value.strip():
            raise ValueError("Comment content is required")
        return value


class CommentRead(CamelModel):
    id: int
    content: str
    task_id: int
    user: UserSummary | None = None
    created_at: datetime
    updated_at: datetime


__all__ = ["CommentCreate", "CommentRead"]
