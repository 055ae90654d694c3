"""Task-related Pydantic schemas."""

from __future__ import annotations

from datetime import datetime
from typing import Any

from pydantic import ConfigDict, Field, field_validator, model_validator

from ..models import TaskPriority, TaskStatus
from .comment import CommentRead
from .common import CamelModel
from .user import UserSummary

TASK_READ_EXAMPLE = {
    "id": 1,
    "title": "Implement login page",
    "description": "Build the sign-in form and wire it to the auth API.",
    "status": TaskStatus.IN_PROGRESS.value,
    "priority": TaskPriority.HIGH.value,
    "creator": {"id": 1, "username": "admin", "nickname": "System Admin", "avatar": None},
    "assignee": {"id": 2, "username": "developer", "nickname": "Lead Developer", "avatar": None},
    "createdAt": "2024-01-01T12:00:00Z",
    "updatedAt": "2024-01-02T08:30:00Z",
    "commentCount": 2,
}

# Present-but-null is rejected for these; description and assigneeId may be cleared.
_NON_NULLABLE_UPDATE_FIELDS = ("title", "status", "priority")


class TaskCreate(CamelModel):
    """Payload for creating a new task. The caller becomes its creator."""

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "title": "Implement login page",
                "description": "Build the sign-in form and wire it to the auth API.",
                "priority": TaskPriority.HIGH.value,
                "assigneeId": 2,
            }
        }
    )

    title: str = Field(min_length=1, max_length=255)
    description: str | None = Field(default=None, max_length=1000)
    status: str = Field(default=TaskStatus.TODO.value, description="TODO, IN_PROGRESS or DONE")
    priority: str = Field(default=TaskPriority.MEDIUM.value, description="LOW, MEDIUM or HIGH")
    assignee_id: int | None = Field(default=None, ge=1)

    @field_validator("title")
    @classmethod
    def _reject_blank_title(cls, value: str) -> str:
        if not value.strip():
            raise ValueError("Title is required")
        return value


class TaskUpdate(CamelModel):
    """Partial update. Omitted fields are left unchanged.

    ``description: null`` clears the description and ``assigneeId: null``
    unassigns the task.
    """

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "status": TaskStatus.DONE.value,
                "assigneeId": None,
            }
        }
    )

    title: str | None = Field(default=None, min_length=1, max_length=255)
    description: str | None = Field(default=None, max_length=1000)
    status: str | None = None
    priority: str | None = None
    assignee_id: int | None = Field(default=None, ge=1)

    @model_validator(mode="after")
    def _check_explicit_nulls(self) -> "TaskUpdate":
        for field_name in _NON_NULLABLE_UPDATE_FIELDS:
            if field_name in self.model_fields_set and getattr(self, field_name) is None:
                raise ValueError(f"{field_name} cannot be null")
        if self.title is not None and not self.title.strip():
            raise ValueError("title cannot be blank")
        return self

    def changes(self) -> dict[str, Any]:
        """Return only the fields the client actually sent."""
        return self.model_dump(exclude_unset=True, by_alias=False)


class TaskRead(CamelModel):
    """Public representation of a task with projected user summaries."""

    model_config = ConfigDict(json_schema_extra={"example": TASK_READ_EXAMPLE})

    id: int
    title: str
    description: str | None = None
    status: TaskStatus
    priority: TaskPriority
    creator: UserSummary | None = None
    assignee: UserSummary | None = None
    created_at: datetime
    updated_at: datetime
    comment_count: int = 0


class TaskDetail(TaskRead):
    """A task together with its comments, newest first."""

    comments: list[CommentRead] = Field(default_factory=list)


__all__ = ["TaskCreate", "TaskDetail", "TaskRead", "TaskUpdate"]
