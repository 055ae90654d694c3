"""Shared model mixins and utilities."""

from __future__ import annotations

from datetime import datetime, timezone

import sqlalchemy as sa
from sqlmodel import Field, SQLModel


def utcnow() -> datetime:
    """Return a timezone-aware UTC timestamp."""
    return datetime.now(timezone.utc)


def start_of_utc_day(moment: datetime | None = None) -> datetime:
    """Return midnight UTC of the day containing ``moment`` (default: now)."""
    moment = moment or utcnow()
    return moment.astimezone(timezone.utc).replace(hour=0, minute=0, second=0, microsecond=0)


class TimestampMixin(SQLModel, table=False):
    """Adds ``created_at``/``updated_at`` columns maintained on insert and update."""

    created_at: datetime = Field(
        default_factory=utcnow,
        nullable=False,
        sa_type=sa.DateTime(timezone=True),
        sa_column_kwargs={"server_default": sa.func.now()},
    )
    updated_at: datetime = Field(
        default_factory=utcnow,
        nullable=False,
        sa_type=sa.DateTime(timezone=True),
        sa_column_kwargs={
            "server_default": sa.func.now(),
            "onupdate": utcnow,
        },
    )


__all__ = ["TimestampMixin", "start_of_utc_day", "utcnow"]
