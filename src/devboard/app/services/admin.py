"""Read-only statistics and account management for administrators."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field

from sqlmodel.ext.asyncio.session import AsyncSession

from ..errors import ValidationError
from ..models import TaskPriority, TaskStatus, User, UserRole, start_of_utc_day
from ..repositories import CommentRepository, TaskRepository, UserRepository
from .access import Actor, ensure_admin
from .users import UserService

logger = logging.getLogger(__name__)


@dataclass(slots=True)
class ActivityEntry:
    type: str
    message: str
    count: int


@dataclass(slots=True)
class DashboardStats:
    """Counters gathered by independent queries; no snapshot ties them together."""

    total_users: int
    total_tasks: int
    total_comments: int
    users_by_role: dict[UserRole, int]
    tasks_by_status: dict[TaskStatus, int]
    tasks_by_priority: dict[TaskPriority, int]
    unassigned_tasks: int
    recent_activity: list[ActivityEntry] = field(default_factory=list)


@dataclass(slots=True)
class UserStats:
    user: User
    tasks_created: int
    tasks_assigned: int
    comments_count: int


class AdminService:
    def __init__(self, session: AsyncSession) -> None:
        self._user_service = UserService(session)
        self._users = UserRepository(session)
        self._tasks = TaskRepository(session)
        self._comments = CommentRepository(session)

    async def dashboard(self) -> DashboardStats:
        today = start_of_utc_day()
        stats = DashboardStats(
            total_users=await self._users.count(),
            total_tasks=await self._tasks.count(),
            total_comments=await self._comments.count(),
            users_by_role=await self._users.count_by_role(),
            tasks_by_status=await self._tasks.count_by_status(),
            tasks_by_priority=await self._tasks.count_by_priority(),
            unassigned_tasks=await self._tasks.count_unassigned(),
            recent_activity=[
                ActivityEntry(
                    type="user_registered",
                    message="New user registrations today",
                    count=await self._users.count_created_since(today),
                ),
                ActivityEntry(
                    type="task_created",
                    message="Tasks created today",
                    count=await self._tasks.count_created_since(today),
                ),
                ActivityEntry(
                    type="comments_added",
                    message="Comments added today",
                    count=await self._comments.count_created_since(today),
                ),
            ],
        )
        logger.info(
            "Generated dashboard data",
            extra={
                "total_users": stats.total_users,
                "total_tasks": stats.total_tasks,
                "total_comments": stats.total_comments,
            },
        )
        return stats

    async def _stats_for(self, user: User) -> UserStats:
        if user.id is None:
            raise ValueError("User must be persisted before computing statistics.")
        return UserStats(
            user=user,
            tasks_created=await self._tasks.count_created_by(user.id),
            tasks_assigned=await self._tasks.count_assigned_to(user.id),
            comments_count=await self._comments.count_by_author(user.id),
        )

    async def list_user_summaries(self) -> list[UserStats]:
        return [await self._stats_for(user) for user in await self._users.list()]

    async def get_user_summary(self, user_id: int) -> UserStats:
        return await self._stats_for(await self._user_service.get_user(user_id))

    async def set_user_active(self, user_id: int, active: bool, actor: Actor) -> UserStats:
        """Enable or disable an account. Admins cannot disable themselves."""
        ensure_admin(actor)
        if not active and user_id == actor.id:
            raise ValidationError("Administrators cannot disable their own account.")
        user = await self._user_service.set_active(user_id, active)
        logger.info(
            "User account %s",
            "enabled" if active else "disabled",
            extra={"user_id": user_id, "admin_id": actor.id},
        )
        return await self._stats_for(user)


__all__ = ["ActivityEntry", "AdminService", "DashboardStats", "UserStats"]
