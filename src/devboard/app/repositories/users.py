"""Repository for user accounts."""

from __future__ import annotations

from datetime import datetime
from typing import Sequence

from sqlalchemy import func
from sqlmodel import select
from sqlmodel.ext.asyncio.session import AsyncSession

from ..models import User, UserRole
from .base import BaseRepository


class UserRepository(BaseRepository[User]):
    """Lookups and existence checks over ``User`` rows."""

    def __init__(self, session: AsyncSession) -> None:
        super().__init__(session, User)

    async def get_by_username(self, username: str) -> User | None:
        result = await self.session.execute(select(User).where(User.username == username))
        return result.scalar_one_or_none()

    async def username_exists(self, username: str) -> bool:
        return await self.count(User.username == username) > 0

    async def email_exists(self, email: str, *, exclude_user_id: int | None = None) -> bool:
        """Return ``True`` when ``email`` belongs to a user other than ``exclude_user_id``."""
        criteria = [User.email == email]
        if exclude_user_id is not None:
            criteria.append(User.id != exclude_user_id)
        return await self.count(*criteria) > 0

    async def list_by_ids(self, ids: Sequence[int]) -> list[User]:
        """Fetch all users whose IDs are contained in the provided sequence."""
        if not ids:
            return []
        result = await self.session.execute(select(User).where(User.id.in_(set(ids))))
        return list(result.scalars().all())

    async def count_by_role(self) -> dict[UserRole, int]:
        result = await self.session.execute(
            select(User.role, func.count()).group_by(User.role)
        )
        counts = {role: 0 for role in UserRole}
        for role, total in result.all():
            counts[UserRole(role)] = int(total)
        return counts

    async def count_created_since(self, moment: datetime) -> int:
        return await self.count(User.created_at >= moment)
