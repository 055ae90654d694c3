"""Authentication workflows: registration, login and bearer token resolution."""

from __future__ import annotations

import logging
from dataclasses import dataclass

from pydantic import ValidationError as PydanticValidationError
from sqlmodel.ext.asyncio.session import AsyncSession

from ..core.config import Settings
from ..core.security import (
    ExpiredSignatureError,
    GeneratedToken,
    JWTError,
    TokenType,
    create_access_token,
    decode_token,
    verify_password,
)
from ..errors import AccessDeniedError, ErrorCode, InvalidCredentialsError, NotFoundError
from ..models import User, UserRole
from ..schemas.auth import TokenPayload
from .users import UserService

logger = logging.getLogger(__name__)


@dataclass(slots=True)
class LoginResult:
    """A successful login: the account and the token issued for it."""

    user: User
    token: GeneratedToken


class AuthService:
    """Registration and credential checks backed by the user store."""

    def __init__(self, session: AsyncSession, settings: Settings) -> None:
        self._settings = settings
        self._user_service = UserService(session)

    async def register_user(self, *, username: str, email: str, password: str) -> User:
        """Create a regular account; duplicates raise ``AlreadyExistsError``."""
        return await self._user_service.create_user(
            username=username,
            email=email,
            password=password,
            role=UserRole.USER,
        )

    async def authenticate(self, username: str, password: str) -> LoginResult:
        user = await self._user_service.find_user_by_username(username)
        if user is None:
            logger.warning("Login attempt for unknown user", extra={"username": username})
            raise NotFoundError("User not found!", code=ErrorCode.USER_NOT_FOUND)
        if not verify_password(password, user.hashed_password):
            logger.warning("Login attempt with wrong password", extra={"username": username})
            raise InvalidCredentialsError("Invalid password!")
        if not user.is_active:
            raise AccessDeniedError("User account is inactive.")
        return LoginResult(user=user, token=self.issue_token(user))

    def issue_token(self, user: User) -> GeneratedToken:
        return create_access_token(
            subject=user.username,
            roles=[user.role.value],
            settings=self._settings,
        )

    def verify_token(self, token: str) -> TokenPayload:
        """Check signature, expiry and token type; return the validated claims."""
        try:
            claims = decode_token(
                token=token,
                secret=self._settings.jwt_secret_key,
                algorithm=self._settings.jwt_algorithm,
            )
        except ExpiredSignatureError as exc:
            raise InvalidCredentialsError("Token has expired", code=ErrorCode.TOKEN_EXPIRED) from exc
        except JWTError as exc:
            raise InvalidCredentialsError("Invalid token", code=ErrorCode.INVALID_TOKEN) from exc

        try:
            payload = TokenPayload.model_validate(claims)
        except PydanticValidationError as exc:
            raise InvalidCredentialsError("Invalid token", code=ErrorCode.INVALID_TOKEN) from exc
        if payload.type is not TokenType.ACCESS:
            raise InvalidCredentialsError("Invalid token type", code=ErrorCode.INVALID_TOKEN)
        return payload

    async def resolve_user(self, token: str) -> User:
        """Return the active account a bearer token was issued to."""
        payload = self.verify_token(token)
        user = await self._user_service.find_user_by_username(payload.sub)
        if user is None:
            raise InvalidCredentialsError("Invalid token", code=ErrorCode.INVALID_TOKEN)
        if not user.is_active:
            raise AccessDeniedError("User account is inactive.")
        return user


__all__ = ["AuthService", "LoginResult"]
