"""Ownership and role rules for mutating tasks and comments.

Every function here is pure: it looks only at the rows and the actor it is
given, so routers and services share one definition of each rule.
"""

from __future__ import annotations

from dataclasses import dataclass

from ..core.config import TaskUpdatePolicy
from ..errors import AccessDeniedError
from ..models import Comment, Task, User, UserRole


@dataclass(slots=True, frozen=True)
class Actor:
    """The authenticated caller an operation is performed on behalf of."""

    id: int
    username: str
    role: UserRole

    @property
    def is_admin(self) -> bool:
        return self.role == UserRole.ADMIN

    @classmethod
    def from_user(cls, user: User) -> "Actor":
        if user.id is None:
            raise ValueError("Cannot act as a user that has not been persisted.")
        return cls(id=user.id, username=user.username, role=user.role)


def can_delete_task(task: Task, actor: Actor) -> bool:
    return actor.is_admin or task.creator_id == actor.id


def can_delete_comment(comment: Comment, actor: Actor) -> bool:
    return actor.is_admin or comment.user_id == actor.id


def can_update_task(task: Task, actor: Actor, policy: TaskUpdatePolicy) -> bool:
    """Apply the configured update policy.

    ``ANY_AUTHENTICATED`` lets every signed-in user edit any task.
    ``CREATOR_OR_ASSIGNEE`` limits edits to admins, the creator and the
    current assignee.
    """

    if policy is TaskUpdatePolicy.ANY_AUTHENTICATED:
        return True
    return actor.is_admin or actor.id in (task.creator_id, task.assignee_id)


def ensure_admin(actor: Actor) -> None:
    if not actor.is_admin:
        raise AccessDeniedError("Administrator role required.")


__all__ = [
    "Actor",
    "can_delete_comment",
    "can_delete_task",
    "can_update_task",
    "ensure_admin",
]
