"""Password hashing and bearer token helpers."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from enum import Enum
from typing import Any, Sequence
from uuid import uuid4

from jose import ExpiredSignatureError, JWTError, jwt
from passlib.context import CryptContext

from .config import Settings

pwd_context = CryptContext(schemes=["bcrypt"], deprecated="auto")

BEARER_TOKEN_TYPE = "Bearer"


class TokenType(str, Enum):
    """Kinds of JWT issued by the service."""

    ACCESS = "access"


@dataclass(slots=True)
class GeneratedToken:
    """A signed token together with the claims callers usually need."""

    token: str
    subject: str
    expires_at: datetime
    jti: str


def get_password_hash(password: str) -> str:
    """Return a bcrypt hash of ``password``."""

    return pwd_context.hash(password)


def verify_password(plain_password: str, hashed_password: str) -> bool:
    """Check a plain password against a stored hash."""

    return pwd_context.verify(plain_password, hashed_password)


def _unique_roles(roles: Sequence[str] | None) -> list[str]:
    return list(dict.fromkeys(roles or ()))


def create_access_token(
    *,
    subject: str,
    roles: Sequence[str] | None,
    settings: Settings,
    expires_delta: timedelta | None = None,
) -> GeneratedToken:
    """Sign an access token whose subject is the username."""

    now = datetime.now(timezone.utc)
    if expires_delta is None:
        expires_delta = timedelta(minutes=settings.access_token_expire_minutes)
    expire = now + expires_delta
    payload: dict[str, Any] = {
        "sub": subject,
        "iat": now,
        "exp": expire,
        "roles": _unique_roles(roles),
        "type": TokenType.ACCESS.value,
        "jti": uuid4().hex,
    }
    token = jwt.encode(payload, settings.jwt_secret_key, algorithm=settings.jwt_algorithm)
    return GeneratedToken(token=token, subject=subject, expires_at=expire, jti=payload["jti"])


def decode_token(*, token: str, secret: str, algorithm: str) -> dict[str, Any]:
    """Verify signature and expiry, returning the raw claims.

    Raises ``ExpiredSignatureError`` for an expired token and ``JWTError`` for
    anything else that fails verification.
    """

    return jwt.decode(token, secret, algorithms=[algorithm])


__all__ = [
    "BEARER_TOKEN_TYPE",
    "ExpiredSignatureError",
    "GeneratedToken",
    "JWTError",
    "TokenType",
    "create_access_token",
    "decode_token",
    "get_password_hash",
    "verify_password",
]
