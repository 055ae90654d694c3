"""Business services for the DevBoard API."""

from __future__ import annotations

from .access import Actor, can_delete_comment, can_delete_task, can_update_task, ensure_admin
from .admin import AdminService, DashboardStats, UserStats
from .auth import AuthService, LoginResult
from .comments import CommentService, CommentView
from .tasks import UNSET, TaskDetailView, TaskService, TaskView
from .users import UserService

__all__ = [
    "Actor",
    "AdminService",
    "AuthService",
    "CommentService",
    "CommentView",
    "DashboardStats",
    "LoginResult",
    "TaskDetailView",
    "TaskService",
    "TaskView",
    "UNSET",
    "UserService",
    "UserStats",
    "can_delete_comment",
    "can_delete_task",
    "can_update_task",
    "ensure_admin",
]
