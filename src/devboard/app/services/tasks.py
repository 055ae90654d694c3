"""Service layer encapsulating task-related operations."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Sequence

from sqlmodel.ext.asyncio.session import AsyncSession

from ..core.config import TaskUpdatePolicy
from ..errors import AccessDeniedError, ErrorCode, NotFoundError, ValidationError
from ..models import Task, TaskPriority, TaskStatus, User, parse_task_enum
from ..repositories import CommentRepository, TaskFilter, TaskRepository, UserRepository
from .access import Actor, can_delete_task, can_update_task
from .comments import CommentService, CommentView

logger = logging.getLogger(__name__)


class _Unset(Enum):
    UNSET = "UNSET"


UNSET = _Unset.UNSET
"""Marks an update argument the caller did not supply."""


@dataclass(slots=True)
class TaskView:
    """A task with its creator/assignee rows and comment total resolved at read time."""

    task: Task
    creator: User | None
    assignee: User | None
    comment_count: int = 0


@dataclass(slots=True)
class TaskDetailView:
    task: TaskView
    comments: list[CommentView] = field(default_factory=list)


def _task_not_found(task_id: int) -> NotFoundError:
    return NotFoundError(f"Task not found with id: {task_id}", code=ErrorCode.TASK_NOT_FOUND)


def _parse_status(value: TaskStatus | str) -> TaskStatus:
    if isinstance(value, TaskStatus):
        return value
    try:
        return parse_task_enum(TaskStatus, value)
    except ValueError as exc:
        raise ValidationError(str(exc)) from exc


def _parse_priority(value: TaskPriority | str) -> TaskPriority:
    if isinstance(value, TaskPriority):
        return value
    try:
        return parse_task_enum(TaskPriority, value)
    except ValueError as exc:
        raise ValidationError(str(exc)) from exc


class TaskService:
    """Task CRUD, filtered queries and ownership checks."""

    def __init__(
        self,
        session: AsyncSession,
        *,
        update_policy: TaskUpdatePolicy = TaskUpdatePolicy.ANY_AUTHENTICATED,
    ) -> None:
        self._session = session
        self._update_policy = update_policy
        self._repository = TaskRepository(session)
        self._user_repository = UserRepository(session)
        self._comment_repository = CommentRepository(session)
        self._comment_service = CommentService(session)

    async def _require_task(self, task_id: int) -> Task:
        task = await self._repository.get(task_id)
        if task is None:
            raise _task_not_found(task_id)
        return task

    async def _require_user(self, user_id: int, role: str) -> User:
        user = await self._user_repository.get(user_id)
        if user is None:
            raise NotFoundError(f"{role} not found", code=ErrorCode.USER_NOT_FOUND)
        return user

    async def _project(self, tasks: Sequence[Task]) -> list[TaskView]:
        """Attach user rows and comment totals with one query each."""
        user_ids = {task.creator_id for task in tasks}
        user_ids.update(task.assignee_id for task in tasks if task.assignee_id is not None)
        users = {user.id: user for user in await self._user_repository.list_by_ids(list(user_ids))}
        counts = await self._comment_repository.count_for_tasks(
            [task.id for task in tasks if task.id is not None]
        )
        return [
            TaskView(
                task=task,
                creator=users.get(task.creator_id),
                assignee=users.get(task.assignee_id) if task.assignee_id is not None else None,
                comment_count=counts.get(task.id, 0) if task.id is not None else 0,
            )
            for task in tasks
        ]

    async def _project_one(self, task: Task) -> TaskView:
        (view,) = await self._project([task])
        return view

    async def create_task(
        self,
        *,
        creator_id: int,
        title: str,
        description: str | None = None,
        status: TaskStatus | str = TaskStatus.TODO,
        priority: TaskPriority | str = TaskPriority.MEDIUM,
        assignee_id: int | None = None,
    ) -> TaskView:
        parsed_status = _parse_status(status)
        parsed_priority = _parse_priority(priority)
        await self._require_user(creator_id, "Creator")
        if assignee_id is not None:
            await self._require_user(assignee_id, "Assignee")

        task = Task(
            title=title,
            description=description,
            status=parsed_status,
            priority=parsed_priority,
            creator_id=creator_id,
            assignee_id=assignee_id,
        )
        await self._repository.add(task)
        await self._session.commit()
        await self._repository.refresh(task)
        logger.info("Task created", extra={"task_id": task.id, "creator_id": creator_id})
        return await self._project_one(task)

    async def get_task(self, task_id: int) -> TaskView:
        return await self._project_one(await self._require_task(task_id))

    async def get_task_detail(self, task_id: int) -> TaskDetailView:
        view = await self.get_task(task_id)
        comments = await self._comment_service.list_comments(task_id)
        return TaskDetailView(task=view, comments=comments)

    async def update_task(
        self,
        task_id: int,
        actor: Actor,
        *,
        title: str | _Unset = UNSET,
        description: str | None | _Unset = UNSET,
        status: TaskStatus | str | _Unset = UNSET,
        priority: TaskPriority | str | _Unset = UNSET,
        assignee_id: int | None | _Unset = UNSET,
    ) -> TaskView:
        """Apply the supplied fields.

        ``description=None`` clears the description and ``assignee_id=None``
        unassigns the task; leaving an argument as ``UNSET`` keeps the value.
        """
        task = await self._require_task(task_id)
        if not can_update_task(task, actor, self._update_policy):
            logger.warning(
                "Task update denied",
                extra={"task_id": task_id, "user_id": actor.id, "policy": self._update_policy.value},
            )
            raise AccessDeniedError(
                "Only the creator, the assignee or an admin can update this task",
                code=ErrorCode.TASK_ACCESS_DENIED,
            )

        changes: dict[str, Any] = {}
        if title is not UNSET:
            if title is None or not title.strip():
                raise ValidationError("Title cannot be empty")
            changes["title"] = title
        if description is not UNSET:
            changes["description"] = description
        if status is not UNSET:
            if status is None:
                raise ValidationError("Status cannot be null")
            changes["status"] = _parse_status(status)
        if priority is not UNSET:
            if priority is None:
                raise ValidationError("Priority cannot be null")
            changes["priority"] = _parse_priority(priority)
        if assignee_id is not UNSET:
            if assignee_id is not None:
                await self._require_user(assignee_id, "Assignee")
            changes["assignee_id"] = assignee_id

        for name, value in changes.items():
            setattr(task, name, value)
        if changes:
            await self._session.commit()
            await self._repository.refresh(task)
        logger.info(
            "Task updated",
            extra={"task_id": task_id, "user_id": actor.id, "fields": sorted(changes)},
        )
        return await self._project_one(task)

    async def delete_task(self, task_id: int, actor: Actor) -> None:
        """Delete a task the actor created, or any task when the actor is an admin."""
        task = await self._require_task(task_id)
        if not can_delete_task(task, actor):
            logger.warning(
                "Task delete denied",
                extra={
                    "task_id": task_id,
                    "user_id": actor.id,
                    "creator_id": task.creator_id,
                    "role": actor.role.value,
                },
            )
            raise AccessDeniedError(
                "Only the creator or admin can delete this task",
                code=ErrorCode.TASK_ACCESS_DENIED,
            )
        await self._remove(task)
        logger.info("Task deleted", extra={"task_id": task_id, "user_id": actor.id})

    async def admin_delete_task(self, task_id: int) -> None:
        """Delete without an ownership check; callers gate this on the admin role."""
        task = await self._require_task(task_id)
        await self._remove(task)
        logger.info("Task deleted by admin", extra={"task_id": task_id})

    async def _remove(self, task: Task) -> None:
        if task.id is not None:
            await self._comment_repository.delete_for_task(task.id)
        await self._repository.delete(task)
        await self._session.commit()

    async def list_tasks(self, task_filter: TaskFilter | None = None) -> list[TaskView]:
        tasks = await self._repository.list_filtered(task_filter or TaskFilter())
        return await self._project(tasks)

    async def list_tasks_by_status(self, status: str) -> list[TaskView]:
        """Exact status name match; anything else is a validation failure."""
        try:
            parsed = parse_task_enum(TaskStatus, status, case_sensitive=True)
        except ValueError as exc:
            raise ValidationError(str(exc)) from exc
        return await self._project(await self._repository.list_by_status(parsed))

    async def list_my_tasks(self, user_id: int) -> list[TaskView]:
        return await self._project(await self._repository.list_for_member(user_id))

    async def is_task_creator(self, task_id: int, username: str) -> bool:
        """``True`` when ``username`` created the task; ``False`` if either is missing."""
        task = await self._repository.get(task_id)
        if task is None:
            return False
        creator = await self._user_repository.get(task.creator_id)
        return creator is not None and creator.username == username


__all__ = ["TaskDetailView", "TaskService", "TaskView", "UNSET"]
