"""Service layer orchestrating user-related repository operations."""

from __future__ import annotations

import logging
from typing import Any, Mapping

from sqlalchemy.exc import IntegrityError
from sqlmodel.ext.asyncio.session import AsyncSession

from ..core.security import get_password_hash
from ..errors import AlreadyExistsError, ErrorCode, NotFoundError, ValidationError
from ..models import User, UserRole
from ..repositories import UserRepository

logger = logging.getLogger(__name__)

USERNAME_TAKEN = "Username is already taken!"
EMAIL_IN_USE = "Email is already in use!"

# Fields a user may change on their own profile.
PROFILE_FIELDS = frozenset({"email", "nickname", "avatar"})


def _conflict_message(exc: IntegrityError) -> str:
    detail = str(exc.orig).lower()
    if "username" in detail:
        return USERNAME_TAKEN
    if "email" in detail:
        return EMAIL_IN_USE
    return "User already exists"


class UserService:
    """High-level business operations for ``User`` entities."""

    def __init__(self, session: AsyncSession) -> None:
        self._session = session
        self._repository = UserRepository(session)

    async def create_user(
        self,
        *,
        username: str,
        email: str,
        password: str,
        nickname: str | None = None,
        avatar: str | None = None,
        role: UserRole = UserRole.USER,
        is_active: bool = True,
    ) -> User:
        """Create a user, rejecting a taken username or email.

        The existence checks give friendly messages; the unique constraints
        still decide the race between two concurrent registrations.
        """
        if await self._repository.username_exists(username):
            raise AlreadyExistsError(USERNAME_TAKEN)
        if await self._repository.email_exists(email):
            raise AlreadyExistsError(EMAIL_IN_USE)

        user = User(
            username=username,
            email=email,
            hashed_password=get_password_hash(password),
            nickname=nickname,
            avatar=avatar,
            role=role,
            is_active=is_active,
        )
        try:
            await self._repository.add(user)
            await self._session.commit()
        except IntegrityError as exc:
            await self._session.rollback()
            raise AlreadyExistsError(_conflict_message(exc)) from exc
        await self._repository.refresh(user)
        logger.info("User registered", extra={"user_id": user.id, "username": username})
        return user

    async def get_user(self, user_id: int) -> User:
        """Return the user or raise ``NotFoundError``."""
        user = await self._repository.get(user_id)
        if user is None:
            raise NotFoundError(f"User not found with id: {user_id}", code=ErrorCode.USER_NOT_FOUND)
        return user

    async def get_user_by_username(self, username: str) -> User:
        user = await self._repository.get_by_username(username)
        if user is None:
            raise NotFoundError(
                f"User not found with username: {username}",
                code=ErrorCode.USER_NOT_FOUND,
            )
        return user

    async def find_user_by_username(self, username: str) -> User | None:
        return await self._repository.get_by_username(username)

    async def list_users(self) -> list[User]:
        return await self._repository.list()

    async def update_profile(self, user_id: int, changes: Mapping[str, Any]) -> User:
        """Apply the supplied profile fields; keys absent from ``changes`` stay untouched."""
        user = await self.get_user(user_id)
        unknown = set(changes) - PROFILE_FIELDS
        if unknown:
            raise ValidationError(f"Unsupported profile fields: {', '.join(sorted(unknown))}")

        new_email = changes.get("email")
        if new_email is not None and new_email != user.email:
            if await self._repository.email_exists(new_email, exclude_user_id=user_id):
                raise AlreadyExistsError(EMAIL_IN_USE)
            user.email = new_email
        if "nickname" in changes:
            user.nickname = changes["nickname"]
        if "avatar" in changes:
            user.avatar = changes["avatar"]

        try:
            await self._session.commit()
        except IntegrityError as exc:
            await self._session.rollback()
            raise AlreadyExistsError(EMAIL_IN_USE) from exc
        await self._repository.refresh(user)
        logger.info("Profile updated", extra={"user_id": user_id, "fields": sorted(changes)})
        return user

    async def set_active(self, user_id: int, is_active: bool) -> User:
        user = await self.get_user(user_id)
        if user.is_active != is_active:
            user.is_active = is_active
            await self._session.commit()
            await self._repository.refresh(user)
        return user


__all__ = ["EMAIL_IN_USE", "PROFILE_FIELDS", "USERNAME_TAKEN", "UserService"]
