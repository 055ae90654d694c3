"""Task records and their enumerations."""

from __future__ import annotations

from enum import Enum
from typing import TypeVar

import sqlalchemy as sa
from sqlmodel import Field, SQLModel

from .common import TimestampMixin


class TaskStatus(str, Enum):
    """Workflow state of a task."""

    TODO = "TODO"
    IN_PROGRESS = "IN_PROGRESS"
    DONE = "DONE"


class TaskPriority(str, Enum):
    """Relative urgency of a task."""

    LOW = "LOW"
    MEDIUM = "MEDIUM"
    HIGH = "HIGH"


TaskEnum = TypeVar("TaskEnum", TaskStatus, TaskPriority)


def parse_task_enum(enum_type: type[TaskEnum], raw: str, *, case_sensitive: bool = False) -> TaskEnum:
    """Resolve ``raw`` to a member of ``enum_type`` by name.

    Raises ``ValueError`` listing the accepted names when nothing matches.
    """

    candidate = raw.strip() if case_sensitive else raw.strip().upper()
    try:
        return enum_type[candidate]
    except KeyError:
        accepted = ", ".join(member.name for member in enum_type)
        raise ValueError(f"Invalid {enum_type.__name__} '{raw}'. Expected one of: {accepted}.") from None


class TaskBase(SQLModel, table=False):
    """Shared attributes for task models."""

    title: str = Field(
        max_length=255,
        sa_column=sa.Column(sa.String(length=255), nullable=False),
    )
    description: str | None = Field(
        default=None,
        max_length=1000,
        sa_column=sa.Column(sa.Text(), nullable=True),
    )
    status: TaskStatus = Field(
        default=TaskStatus.TODO,
        sa_column=sa.Column(
            sa.Enum(TaskStatus, name="task_status", native_enum=False, validate_strings=True),
            nullable=False,
            server_default=TaskStatus.TODO.value,
        ),
    )
    priority: TaskPriority = Field(
        default=TaskPriority.MEDIUM,
        sa_column=sa.Column(
            sa.Enum(TaskPriority, name="task_priority", native_enum=False, validate_strings=True),
            nullable=False,
            server_default=TaskPriority.MEDIUM.value,
        ),
    )
    creator_id: int = Field(
        sa_column=sa.Column(
            sa.Integer(),
            sa.ForeignKey("users.id", ondelete="CASCADE"),
            nullable=False,
        ),
    )
    assignee_id: int | None = Field(
        default=None,
        sa_column=sa.Column(
            sa.Integer(),
            sa.ForeignKey("users.id", ondelete="SET NULL"),
            nullable=True,
        ),
    )


class Task(TaskBase, TimestampMixin, table=True):
    """Persistent task model."""

    __tablename__ = "tasks"
    __table_args__ = (
        sa.CheckConstraint("length(title) > 0", name="ck_tasks_title_length"),
        sa.Index("ix_tasks_creator_id", "creator_id"),
        sa.Index("ix_tasks_assignee_id", "assignee_id"),
        sa.Index("ix_tasks_status", "status"),
    )

    id: int | None = Field(default=None, primary_key=True)


__all__ = ["Task", "TaskBase", "TaskPriority", "TaskStatus", "parse_task_enum"]
