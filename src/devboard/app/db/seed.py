"""Seed script for populating development data."""

from __future__ import annotations

import asyncio
import logging

from sqlmodel.ext.asyncio.session import AsyncSession

from ..core.config import get_settings
from ..core.logging import configure_logging
from ..models import TaskPriority, TaskStatus, UserRole
from ..repositories import CommentRepository, TaskRepository
from ..services import CommentService, TaskService, UserService
from .session import async_session_maker, init_db

logger = logging.getLogger(__name__)

SEED_USERS = (
    {
        "username": "admin",
        "email": "admin@devboard.com",
        "password": "admin123",
        "nickname": "System Admin",
        "role": UserRole.ADMIN,
    },
    {
        "username": "developer",
        "email": "dev@devboard.com",
        "password": "dev123",
        "nickname": "Lead Developer",
        "role": UserRole.USER,
    },
)

# (title, description, status, priority, creator, assignee)
SEED_TASKS = (
    (
        "Set up project structure",
        "Initialise the API and frontend projects with a clear directory layout.",
        TaskStatus.DONE,
        TaskPriority.HIGH,
        "admin",
        None,
    ),
    (
        "Configure database",
        "Run PostgreSQL in Docker and SQLite for local development.",
        TaskStatus.DONE,
        TaskPriority.MEDIUM,
        "admin",
        "developer",
    ),
    (
        "Implement task CRUD API",
        "Create REST endpoints for task management with full CRUD operations.",
        TaskStatus.DONE,
        TaskPriority.HIGH,
        "developer",
        None,
    ),
    (
        "Build frontend task board",
        "Create the task board UI with routing and navigation.",
        TaskStatus.IN_PROGRESS,
        TaskPriority.HIGH,
        "developer",
        "developer",
    ),
    (
        "Add user authentication",
        "Implement JWT-based authentication for secure access.",
        TaskStatus.TODO,
        TaskPriority.MEDIUM,
        "admin",
        "developer",
    ),
    (
        "Create admin dashboard",
        "Build an administrative interface for user and task management.",
        TaskStatus.TODO,
        TaskPriority.LOW,
        "admin",
        None,
    ),
    (
        "Deploy to production",
        "Set up a CI/CD pipeline and deploy the application.",
        TaskStatus.TODO,
        TaskPriority.LOW,
        "admin",
        None,
    ),
    (
        "Write unit tests",
        "Add test coverage for services and API routes.",
        TaskStatus.IN_PROGRESS,
        TaskPriority.MEDIUM,
        "developer",
        "developer",
    ),
)

# (index into SEED_TASKS, author, content)
SEED_COMMENTS = (
    (0, "developer", "Great work on the project structure, the layout is clean."),
    (0, "admin", "Thanks! It follows the conventions we agreed on."),
    (1, "developer", "Docker compose setup works for both database configurations."),
    (3, "developer", "Good progress on the task board, routing is in place."),
    (3, "admin", "Let me know if you need help with state management."),
    (3, "developer", "Could use guidance on keeping auth state in the client."),
    (7, "developer", "Test tooling is set up, starting with the service layer."),
)


async def seed_database(session: AsyncSession) -> None:
    """Create the sample accounts, tasks and comments that are still missing."""
    user_service = UserService(session)
    task_service = TaskService(session)
    comment_service = CommentService(session)

    user_ids: dict[str, int] = {}
    for account in SEED_USERS:
        user = await user_service.find_user_by_username(account["username"])
        if user is None:
            user = await user_service.create_user(**account)
            logger.info("Seeded user", extra={"username": user.username})
        if user.id is not None:
            user_ids[user.username] = user.id

    if await TaskRepository(session).count() > 0:
        logger.info("Tasks already present, skipping task and comment seed data")
        return

    task_ids: list[int] = []
    for title, description, status, priority, creator, assignee in SEED_TASKS:
        view = await task_service.create_task(
            creator_id=user_ids[creator],
            title=title,
            description=description,
            status=status,
            priority=priority,
            assignee_id=user_ids[assignee] if assignee else None,
        )
        if view.task.id is not None:
            task_ids.append(view.task.id)
    logger.info("Seeded tasks", extra={"count": len(task_ids)})

    if await CommentRepository(session).count() > 0:
        return
    for index, author, content in SEED_COMMENTS:
        await comment_service.create_comment(
            task_id=task_ids[index],
            author_id=user_ids[author],
            content=content,
        )
    logger.info("Seeded comments", extra={"count": len(SEED_COMMENTS)})


async def seed() -> None:
    async with async_session_maker() as session:
        await seed_database(session)


def main() -> None:
    """Entry point for ``devboard-seed`` and ``python -m`` execution."""
    configure_logging(get_settings())

    async def _run() -> None:
        await init_db()
        await seed()

    asyncio.run(_run())


if __name__ == "__main__":  # pragma: no cover - manual execution entry-point
    main()
