from __future__ import annotations

import pytest
from sqlmodel.ext.asyncio.session import AsyncSession

from devboard.app.core.security import verify_password
from devboard.app.db.seed import SEED_COMMENTS, SEED_TASKS, SEED_USERS, seed_database
from devboard.app.models import UserRole
from devboard.app.repositories import CommentRepository, TaskRepository, UserRepository

pytestmark = pytest.mark.asyncio


async def test_seed_populates_sample_data(session: AsyncSession) -> None:
    await seed_database(session)

    users = UserRepository(session)
    admin = await users.get_by_username("admin")
    developer = await users.get_by_username("developer")
    assert admin is not None and admin.role is UserRole.ADMIN
    assert developer is not None and developer.role is UserRole.USER
    assert verify_password("admin123", admin.hashed_password)

    assert await users.count() == len(SEED_USERS)
    assert await TaskRepository(session).count() == len(SEED_TASKS)
    assert await CommentRepository(session).count() == len(SEED_COMMENTS)


async def test_seed_is_idempotent(session: AsyncSession) -> None:
    await seed_database(session)
    await seed_database(session)

    assert await UserRepository(session).count() == len(SEED_USERS)
    assert await TaskRepository(session).count() == len(SEED_TASKS)
    assert await CommentRepository(session).count() == len(SEED_COMMENTS)
