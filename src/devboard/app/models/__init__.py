"""Domain models exposed for the DevBoard API."""

from __future__ import annotations

from .comment import Comment, CommentBase
from .common import TimestampMixin, start_of_utc_day, utcnow
from .task import Task, TaskBase, TaskPriority, TaskStatus, parse_task_enum
from .user import User, UserBase, UserRole

__all__ = [
    "Comment",
    "CommentBase",
    "Task",
    "TaskBase",
    "TaskPriority",
    "TaskStatus",
    "TimestampMixin",
    "User",
    "UserBase",
    "UserRole",
    "parse_task_enum",
    "start_of_utc_day",
    "utcnow",
]
