from __future__ import annotations

import os

os.environ.setdefault("DEVBOARD_ENVIRONMENT", "test")
os.environ.setdefault("DEVBOARD_DATABASE_URL", "sqlite+aiosqlite:///:memory:")

from collections.abc import AsyncIterator, Awaitable, Callable  # noqa: E402
from dataclasses import dataclass  # noqa: E402

import pytest_asyncio  # noqa: E402
from fastapi import FastAPI  # noqa: E402
from httpx import ASGITransport, AsyncClient  # noqa: E402
from sqlalchemy.ext.asyncio import AsyncEngine, async_sessionmaker, create_async_engine  # noqa: E402
from sqlalchemy.pool import StaticPool  # noqa: E402
from sqlmodel import SQLModel  # noqa: E402
from sqlmodel.ext.asyncio.session import AsyncSession  # noqa: E402

from devboard.app.core.config import get_settings  # noqa: E402
from devboard.app.db.session import install_sqlite_functions  # noqa: E402
from devboard.app.deps import get_db_session  # noqa: E402
from devboard.app.main import create_app  # noqa: E402
from devboard.app.models import User, UserRole  # noqa: E402
from devboard.app.services import UserService  # noqa: E402

DEFAULT_PASSWORD = "s3cret-pass"


@dataclass(slots=True)
class AuthenticatedUser:
    user: User
    token: str

    @property
    def id(self) -> int:
        assert self.user.id is not None
        return self.user.id

    @property
    def headers(self) -> dict[str, str]:
        return {"Authorization": f"Bearer {self.token}"}


UserFactory = Callable[..., Awaitable[AuthenticatedUser]]


@pytest_asyncio.fixture
async def engine() -> AsyncIterator[AsyncEngine]:
    engine: AsyncEngine = create_async_engine(
        "sqlite+aiosqlite:///:memory:",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    install_sqlite_functions(engine)
    async with engine.begin() as connection:
        await connection.run_sync(SQLModel.metadata.create_all)
    try:
        yield engine
    finally:
        await engine.dispose()


@pytest_asyncio.fixture
async def session(engine: AsyncEngine) -> AsyncIterator[AsyncSession]:
    session_factory = async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)
    async with session_factory() as session:
        try:
            yield session
        finally:
            if session.in_transaction():
                await session.rollback()


@pytest_asyncio.fixture
async def app(session: AsyncSession) -> AsyncIterator[FastAPI]:
    get_settings.cache_clear()
    application = create_app()

    async def _override_db_session() -> AsyncIterator[AsyncSession]:
        yield session

    application.dependency_overrides[get_db_session] = _override_db_session
    try:
        yield application
    finally:
        application.dependency_overrides.clear()


@pytest_asyncio.fixture
async def client(app: FastAPI) -> AsyncIterator[AsyncClient]:
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://testserver") as client:
        yield client


@pytest_asyncio.fixture
async def create_user(session: AsyncSession) -> UserFactory:
    """Persist an account directly through the service layer."""

    service = UserService(session)

    async def _create(
        username: str,
        *,
        email: str | None = None,
        password: str = DEFAULT_PASSWORD,
        role: UserRole = UserRole.USER,
        nickname: str | None = None,
    ) -> User:
        return await service.create_user(
            username=username,
            email=email or f"{username}@example.com",
            password=password,
            role=role,
            nickname=nickname,
        )

    return _create


@pytest_asyncio.fixture
async def authenticated_user(client: AsyncClient, create_user) -> UserFactory:
    """Create an account and log it in over HTTP, returning its bearer headers."""

    async def _login(username: str, *, role: UserRole = UserRole.USER, **kwargs) -> AuthenticatedUser:
        user = await create_user(username, role=role, **kwargs)
        response = await client.post(
            "/api/auth/login",
            json={"username": username, "password": kwargs.get("password", DEFAULT_PASSWORD)},
        )
        assert response.status_code == 200, response.text
        return AuthenticatedUser(user=user, token=response.json()["data"]["token"])

    return _login
