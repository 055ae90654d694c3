"""Database engine and session management."""

from __future__ import annotations

from collections.abc import AsyncIterator
from typing import Any

from sqlalchemy import event
from sqlalchemy.ext.asyncio import AsyncEngine, async_sessionmaker, create_async_engine
from sqlmodel import SQLModel
from sqlmodel.ext.asyncio.session import AsyncSession

from ..core.config import get_settings
from .. import models  # noqa: F401  registers every table on SQLModel.metadata


def _unicode_lower(value: Any) -> Any:
    return value.lower() if isinstance(value, str) else value


def install_sqlite_functions(engine: AsyncEngine) -> None:
    """Replace SQLite's ASCII-only ``lower()`` with Python's Unicode folding.

    Case-insensitive search renders ``lower(column) LIKE lower(term)``; other
    backends already fold non-ASCII letters.
    """
    if engine.dialect.name != "sqlite":
        return

    @event.listens_for(engine.sync_engine, "connect")
    def _register(dbapi_connection: Any, _connection_record: Any) -> None:
        dbapi_connection.create_function("lower", 1, _unicode_lower)


settings = get_settings()

engine: AsyncEngine = create_async_engine(
    settings.database_url,
    echo=settings.db_echo,
    pool_pre_ping=True,
)
install_sqlite_functions(engine)
async_session_maker = async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)


async def get_session() -> AsyncIterator[AsyncSession]:
    """Yield an ``AsyncSession`` for request-scoped work."""
    async with async_session_maker() as session:
        yield session


async def init_db() -> None:
    """Create missing tables. Alembic owns the schema outside local development."""
    async with engine.begin() as connection:
        await connection.run_sync(SQLModel.metadata.create_all)


__all__ = ["async_session_maker", "engine", "get_session", "init_db", "install_sqlite_functions"]
