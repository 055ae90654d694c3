"""Repository for task comments."""

from __future__ import annotations

from datetime import datetime
from typing import Sequence

from sqlalchemy import delete, func
from sqlmodel import select
from sqlmodel.ext.asyncio.session import AsyncSession

from ..models import Comment
from .base import BaseRepository


class CommentRepository(BaseRepository[Comment]):
    """Persistence operations for ``Comment`` rows."""

    def __init__(self, session: AsyncSession) -> None:
        super().__init__(session, Comment)

    async def list_for_task(self, task_id: int) -> list[Comment]:
        """Return the task's comments, newest first."""
        result = await self.session.execute(
            select(Comment)
            .where(Comment.task_id == task_id)
            .order_by(Comment.created_at.desc(), Comment.id.desc())
        )
        return list(result.scalars().all())

    async def count_for_task(self, task_id: int) -> int:
        return await self.count(Comment.task_id == task_id)

    async def count_for_tasks(self, task_ids: Sequence[int]) -> dict[int, int]:
        """Return comment totals keyed by task id; tasks without comments map to 0."""
        counts = {task_id: 0 for task_id in task_ids}
        if not counts:
            return counts
        result = await self.session.execute(
            select(Comment.task_id, func.count())
            .where(Comment.task_id.in_(list(counts)))
            .group_by(Comment.task_id)
        )
        for task_id, total in result.all():
            counts[int(task_id)] = int(total)
        return counts

    async def count_by_author(self, user_id: int) -> int:
        return await self.count(Comment.user_id == user_id)

    async def count_created_since(self, moment: datetime) -> int:
        return await self.count(Comment.created_at >= moment)

    async def delete_for_task(self, task_id: int) -> int:
        """Bulk-delete the task's comments and return how many were removed."""
        result = await self.session.execute(
            delete(Comment)
            .where(Comment.task_id == task_id)
            .execution_options(synchronize_session="fetch")
        )
        await self.session.flush()
        return int(result.rowcount or 0)
