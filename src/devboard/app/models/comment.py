"""Comments attached to tasks."""

from __future__ import annotations

import sqlalchemy as sa
from sqlmodel import Field, SQLModel

from .common import TimestampMixin


class CommentBase(SQLModel, table=False):
    content: str = Field(
        max_length=1000,
        sa_column=sa.Column(sa.Text(), nullable=False),
    )
    task_id: int = Field(
        sa_column=sa.Column(
            sa.Integer(),
            sa.ForeignKey("tasks.id", ondelete="CASCADE"),
            nullable=False,
        ),
    )
    user_id: int = Field(
        sa_column=sa.Column(
            sa.Integer(),
            sa.ForeignKey("users.id", ondelete="CASCADE"),
            nullable=False,
        ),
    )


class Comment(CommentBase, TimestampMixin, table=True):
    """Persistent comment model. Never edited after creation."""

    __tablename__ = "comments"
    __table_args__ = (
        sa.CheckConstraint("length(content) > 0", name="ck_comments_content_length"),
        sa.Index("ix_comments_task_id", "task_id"),
        sa.Index("ix_comments_user_id", "user_id"),
    )

    id: int | None = Field(default=None, primary_key=True)


__all__ = ["Comment", "CommentBase"]
