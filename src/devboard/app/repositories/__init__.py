"""Database repositories for encapsulating persistence logic."""

from __future__ import annotations

from .comments import CommentRepository
from .tasks import TaskFilter, TaskRepository
from .users import UserRepository

__all__ = ["CommentRepository", "TaskFilter", "TaskRepository", "UserRepository"]
