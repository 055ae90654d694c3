"""Reusable FastAPI dependencies."""

from __future__ import annotations

from collections.abc import AsyncIterator, Callable
from typing import Annotated, Awaitable

from fastapi import Depends
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlmodel.ext.asyncio.session import AsyncSession

from .core.config import Settings, get_settings
from .db.session import get_session
from .errors import AccessDeniedError, ErrorCode, InvalidCredentialsError
from .models import User, UserRole
from .services import Actor, AdminService, AuthService, CommentService, TaskService, UserService

_bearer_scheme = HTTPBearer(auto_error=False, description="JWT issued by POST /api/auth/login")


async def get_db_session() -> AsyncIterator[AsyncSession]:
    """FastAPI dependency that yields a database session."""

    async for session in get_session():
        yield session


SettingsDependency = Annotated[Settings, Depends(get_settings)]
DatabaseSessionDependency = Annotated[AsyncSession, Depends(get_db_session)]


def _role_satisfied(user_role: UserRole, required: UserRole) -> bool:
    if required == UserRole.ADMIN:
        return user_role == UserRole.ADMIN
    return user_role in {UserRole.USER, UserRole.ADMIN}


def require_current_user(required_role: UserRole | None = None) -> Callable[..., Awaitable[User]]:
    """Return a dependency enforcing authentication and optional role checks."""

    async def _dependency(
        session: DatabaseSessionDependency,
        settings: SettingsDependency,
        credentials: HTTPAuthorizationCredentials | None = Depends(_bearer_scheme),
    ) -> User:
        if credentials is None or not credentials.credentials:
            raise InvalidCredentialsError("Authentication required", code=ErrorCode.UNAUTHORIZED)
        user = await AuthService(session, settings).resolve_user(credentials.credentials)
        if required_role is not None and not _role_satisfied(user.role, required_role):
            raise AccessDeniedError("Access denied")
        return user

    return _dependency


CurrentUserDependency = Annotated[User, Depends(require_current_user())]
AdminUserDependency = Annotated[User, Depends(require_current_user(UserRole.ADMIN))]


async def get_current_actor(user: CurrentUserDependency) -> Actor:
    return Actor.from_user(user)


async def get_admin_actor(user: AdminUserDependency) -> Actor:
    return Actor.from_user(user)


CurrentActorDependency = Annotated[Actor, Depends(get_current_actor)]
AdminActorDependency = Annotated[Actor, Depends(get_admin_actor)]


def get_auth_service(session: DatabaseSessionDependency, settings: SettingsDependency) -> AuthService:
    return AuthService(session, settings)


def get_user_service(session: DatabaseSessionDependency) -> UserService:
    return UserService(session)


def get_task_service(session: DatabaseSessionDependency, settings: SettingsDependency) -> TaskService:
    return TaskService(session, update_policy=settings.task_update_policy)


def get_comment_service(session: DatabaseSessionDependency) -> CommentService:
    return CommentService(session)


def get_admin_service(session: DatabaseSessionDependency) -> AdminService:
    return AdminService(session)


AuthServiceDependency = Annotated[AuthService, Depends(get_auth_service)]
UserServiceDependency = Annotated[UserService, Depends(get_user_service)]
TaskServiceDependency = Annotated[TaskService, Depends(get_task_service)]
CommentServiceDependency = Annotated[CommentService, Depends(get_comment_service)]
AdminServiceDependency = Annotated[AdminService, Depends(get_admin_service)]


__all__ = [
    "AdminActorDependency",
    "AdminServiceDependency",
    "AdminUserDependency",
    "AuthServiceDependency",
    "CommentServiceDependency",
    "CurrentActorDependency",
    "CurrentUserDependency",
    "DatabaseSessionDependency",
    "SettingsDependency",
    "TaskServiceDependency",
    "UserServiceDependency",
    "get_db_session",
    "require_current_user",
]
