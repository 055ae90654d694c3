"""Pydantic schemas for public interfaces."""

from __future__ import annotations

from .admin import ActivityCount, DashboardRead, PriorityBreakdown, RoleBreakdown, StatusBreakdown
from .auth import JwtResponse, LoginRequest, SignupRequest, TokenPayload
from .comment import CommentCreate, CommentRead
from .common import ApiResponse, CamelModel, MessageResponse
from .system import HealthCheckResponse, RootResponse
from .task import TaskCreate, TaskDetail, TaskRead, TaskUpdate
from .user import AdminUserSummary, UserProfile, UserProfileUpdate, UserSummary

__all__ = [
    "ActivityCount",
    "AdminUserSummary",
    "ApiResponse",
    "CamelModel",
    "CommentCreate",
    "CommentRead",
    "DashboardRead",
    "HealthCheckResponse",
    "JwtResponse",
    "LoginRequest",
    "MessageResponse",
    "PriorityBreakdown",
    "RoleBreakdown",
    "RootResponse",
    "SignupRequest",
    "StatusBreakdown",
    "TaskCreate",
    "TaskDetail",
    "TaskRead",
    "TaskUpdate",
    "TokenPayload",
    "UserProfile",
    "UserProfileUpdate",
    "UserSummary",
]
