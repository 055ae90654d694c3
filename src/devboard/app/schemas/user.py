"""User-facing schemas."""

from __future__ import annotations

from datetime import datetime

from pydantic import EmailStr, Field

from ..models import UserRole
from .common import CamelModel


class UserSummary(CamelModel):
    """Display fields of a user embedded in task and comment payloads."""

    id: int
    username: str
    nickname: str | None = None
    avatar: str | None = None


class UserProfile(CamelModel):
    id: int
    username: str
    email: EmailStr
    nickname: str | None = None
    avatar: str | None = None
    role: UserRole
    created_at: datetime
    updated_at: datetime


class UserProfileUpdate(CamelModel):
    """Partial profile update; only the fields present in the body change."""

    email: EmailStr | None = None
    nickname: str | None = Field(default=None, max_length=50)
    avatar: str | None = Field(default=None, max_length=255)


class AdminUserSummary(CamelModel):
    """A user together with activity counters, as shown to administrators."""

    id: int
    username: str
    email: EmailStr
    nickname: str | None = None
    avatar: str | None = None
    role: UserRole
    created_at: datetime
    last_active_at: datetime
    tasks_created: int
    tasks_assigned: int
    comments_count: int
    is_active: bool


__all__ = ["AdminUserSummary", "UserProfile", "UserProfileUpdate", "UserSummary"]
