from __future__ import annotations

import pytest
from httpx import AsyncClient

from devboard.app.errors import ErrorCode

pytestmark = pytest.mark.asyncio


async def test_read_own_profile(client: AsyncClient, authenticated_user) -> None:
    alice = await authenticated_user("alice", nickname="Ally")

    response = await client.get("/api/users/me", headers=alice.headers)

    assert response.status_code == 200
    data = response.json()["data"]
    assert data["id"] == alice.id
    assert data["email"] == "alice@example.com"
    assert data["nickname"] == "Ally"
    assert data["role"] == "USER"
    assert "createdAt" in data
    assert "hashedPassword" not in data


async def test_partial_profile_update_keeps_other_fields(client: AsyncClient, authenticated_user) -> None:
    alice = await authenticated_user("alice", nickname="Ally")

    response = await client.put(
        "/api/users/me",
        json={"avatar": "https://cdn.example.com/alice.png"},
        headers=alice.headers,
    )

    assert response.status_code == 200
    body = response.json()
    assert body["message"] == "Profile updated successfully"
    assert body["data"]["avatar"] == "https://cdn.example.com/alice.png"
    assert body["data"]["nickname"] == "Ally"
    assert body["data"]["email"] == "alice@example.com"


async def test_profile_email_must_stay_unique(client: AsyncClient, authenticated_user, create_user) -> None:
    await create_user("bob", email="bob@example.com")
    alice = await authenticated_user("alice")

    conflict = await client.put("/api/users/me", json={"email": "bob@example.com"}, headers=alice.headers)
    assert conflict.status_code == 409
    assert conflict.json()["code"] == ErrorCode.USER_ALREADY_EXISTS

    unchanged = await client.put("/api/users/me", json={"email": "alice@example.com"}, headers=alice.headers)
    assert unchanged.status_code == 200


async def test_list_users_requires_authentication(client: AsyncClient, authenticated_user, create_user) -> None:
    assert (await client.get("/api/users")).status_code == 401

    alice = await authenticated_user("alice")
    await create_user("bob")

    response = await client.get("/api/users", headers=alice.headers)

    assert response.status_code == 200
    assert [user["username"] for user in response.json()["data"]] == ["alice", "bob"]
