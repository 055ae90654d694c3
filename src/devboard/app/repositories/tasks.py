"""Repository and query object for task persistence."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import datetime
from typing import Any

from sqlalchemy import false, func, or_
from sqlmodel import select
from sqlmodel.ext.asyncio.session import AsyncSession

from ..models import Task, TaskPriority, TaskStatus, parse_task_enum
from .base import BaseRepository

logger = logging.getLogger(__name__)


@dataclass(slots=True, frozen=True)
class TaskFilter:
    """Conjunctive task filter parsed once from raw query parameters.

    ``unsatisfiable`` is set when a status or priority string names no known
    member; such a filter matches no task rather than failing the request.
    """

    assignee_id: int | None = None
    creator_id: int | None = None
    status: TaskStatus | None = None
    priority: TaskPriority | None = None
    search: str | None = None
    unsatisfiable: bool = False

    @classmethod
    def from_query(
        cls,
        *,
        assignee_id: int | None = None,
        creator_id: int | None = None,
        status: str | None = None,
        priority: str | None = None,
        search: str | None = None,
    ) -> "TaskFilter":
        unsatisfiable = False
        parsed_status: TaskStatus | None = None
        parsed_priority: TaskPriority | None = None
        if status is not None:
            try:
                parsed_status = parse_task_enum(TaskStatus, status)
            except ValueError:
                logger.warning("Ignoring tasks for unknown status filter", extra={"status": status})
                unsatisfiable = True
        if priority is not None:
            try:
                parsed_priority = parse_task_enum(TaskPriority, priority)
            except ValueError:
                logger.warning("Ignoring tasks for unknown priority filter", extra={"priority": priority})
                unsatisfiable = True
        term = search.strip() if search is not None else ""
        return cls(
            assignee_id=assignee_id,
            creator_id=creator_id,
            status=parsed_status,
            priority=parsed_priority,
            search=term or None,
            unsatisfiable=unsatisfiable,
        )

    def criteria(self) -> list[Any]:
        """Translate the filter into SQL ``WHERE`` clauses."""
        if self.unsatisfiable:
            return [false()]
        clauses: list[Any] = []
        if self.assignee_id is not None:
            clauses.append(Task.assignee_id.is_not(None))
            clauses.append(Task.assignee_id == self.assignee_id)
        if self.creator_id is not None:
            clauses.append(Task.creator_id == self.creator_id)
        if self.status is not None:
            clauses.append(Task.status == self.status)
        if self.priority is not None:
            clauses.append(Task.priority == self.priority)
        if self.search:
            clauses.append(
                or_(
                    Task.title.icontains(self.search, autoescape=True),
                    Task.description.icontains(self.search, autoescape=True),
                )
            )
        return clauses


class TaskRepository(BaseRepository[Task]):
    """Concrete repository encapsulating ``Task`` persistence operations."""

    def __init__(self, session: AsyncSession) -> None:
        super().__init__(session, Task)

    async def list_filtered(self, task_filter: TaskFilter) -> list[Task]:
        """Return tasks satisfying every predicate of ``task_filter``."""
        query = select(Task).where(*task_filter.criteria()).order_by(Task.id)
        result = await self.session.execute(query)
        return list(result.scalars().all())

    async def list_by_status(self, status: TaskStatus) -> list[Task]:
        result = await self.session.execute(
            select(Task).where(Task.status == status).order_by(Task.id)
        )
        return list(result.scalars().all())

    async def list_for_member(self, user_id: int) -> list[Task]:
        """Return tasks the user created or is assigned to."""
        result = await self.session.execute(
            select(Task)
            .where(or_(Task.creator_id == user_id, Task.assignee_id == user_id))
            .order_by(Task.id)
        )
        return list(result.scalars().all())

    async def count_by_status(self) -> dict[TaskStatus, int]:
        result = await self.session.execute(
            select(Task.status, func.count()).group_by(Task.status)
        )
        counts = {status: 0 for status in TaskStatus}
        for status, total in result.all():
            counts[TaskStatus(status)] = int(total)
        return counts

    async def count_by_priority(self) -> dict[TaskPriority, int]:
        result = await self.session.execute(
            select(Task.priority, func.count()).group_by(Task.priority)
        )
        counts = {priority: 0 for priority in TaskPriority}
        for priority, total in result.all():
            counts[TaskPriority(priority)] = int(total)
        return counts

    async def count_unassigned(self) -> int:
        return await self.count(Task.assignee_id.is_(None))

    async def count_created_by(self, user_id: int) -> int:
        return await self.count(Task.creator_id == user_id)

    async def count_assigned_to(self, user_id: int) -> int:
        return await self.count(Task.assignee_id == user_id)

    async def count_created_since(self, moment: datetime) -> int:
        return await self.count(Task.created_at >= moment)
