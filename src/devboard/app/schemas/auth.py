"""Schemas describing authentication payloads."""

from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel, ConfigDict, EmailStr, Field

from ..core.security import BEARER_TOKEN_TYPE, TokenType
from ..models import UserRole
from .common import CamelModel


class SignupRequest(CamelModel):
    """Incoming payload for registering a new user."""

    model_config = ConfigDict(
        json_schema_extra={
            "example": {"username": "alice", "email": "alice@example.com", "password": "s3cret-pass"}
        }
    )

    username: str = Field(min_length=3, max_length=50, pattern=r"^[A-Za-z0-9_.-]+$")
    email: EmailStr
    password: str = Field(min_length=6, max_length=128)


class LoginRequest(CamelModel):
    username: str = Field(min_length=1, max_length=50)
    password: str = Field(min_length=1)


class JwtResponse(CamelModel):
    """Token plus the public profile of the account it was issued to.

    ``token`` is omitted (``None``) when the payload describes the current
    user rather than a fresh login.
    """

    token: str | None = None
    type: str = BEARER_TOKEN_TYPE
    id: int
    username: str
    email: EmailStr
    nickname: str | None = None
    avatar: str | None = None
    role: UserRole


class TokenPayload(BaseModel):
    """Validated JWT claims."""

    model_config = ConfigDict(extra="ignore")

    sub: str
    exp: datetime
    iat: datetime
    jti: str
    roles: list[str]
    type: TokenType


__all__ = ["JwtResponse", "LoginRequest", "SignupRequest", "TokenPayload"]
