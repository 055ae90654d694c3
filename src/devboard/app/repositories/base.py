"""Generic repository over an async SQLModel session."""

from __future__ import annotations

from typing import Any, Generic, TypeVar

from sqlalchemy import func
from sqlmodel import SQLModel, select
from sqlmodel.ext.asyncio.session import AsyncSession

ModelType = TypeVar("ModelType", bound=SQLModel)


class BaseRepository(Generic[ModelType]):
    """Persistence helpers shared by every concrete repository.

    Repositories only flush; committing is the calling service's decision so a
    service method maps to exactly one unit of work.
    """

    def __init__(self, session: AsyncSession, model_type: type[ModelType]) -> None:
        self._session = session
        self._model_type = model_type

    @property
    def session(self) -> AsyncSession:
        return self._session

    async def get(self, entity_id: int) -> ModelType | None:
        """Retrieve a model instance by its primary key."""
        return await self._session.get(self._model_type, entity_id)

    async def list(self) -> list[ModelType]:
        """Return every row ordered by primary key."""
        primary_key: Any = getattr(self._model_type, "id")
        result = await self._session.execute(select(self._model_type).order_by(primary_key))
        return list(result.scalars().all())

    async def count(self, *criteria: Any) -> int:
        """Count rows, optionally restricted by SQL ``criteria``."""
        query = select(func.count()).select_from(self._model_type)
        if criteria:
            query = query.where(*criteria)
        result = await self._session.execute(query)
        return int(result.scalar_one())

    async def add(self, instance: ModelType) -> ModelType:
        """Add and flush a new entity instance."""
        self._session.add(instance)
        await self._session.flush()
        return instance

    async def delete(self, instance: ModelType) -> None:
        """Delete an entity instance and flush the change."""
        await self._session.delete(instance)
        await self._session.flush()

    async def refresh(self, instance: ModelType) -> ModelType:
        """Reload an entity's column values from the database."""
        await self._session.refresh(instance)
        return instance
