from __future__ import annotations

from typing import Any

import pytest
from httpx import AsyncClient

from devboard.app.errors import ErrorCode
from devboard.app.models import UserRole

pytestmark = pytest.mark.asyncio


async def _create_task(client: AsyncClient, headers: dict[str, str], **payload: Any) -> dict[str, Any]:
    response = await client.post("/api/tasks", json=payload, headers=headers)
    assert response.status_code == 201, response.text
    return response.json()["data"]


async def test_create_task_defaults_and_projection(client: AsyncClient, authenticated_user) -> None:
    alice = await authenticated_user("alice", nickname="Ally")

    response = await client.post("/api/tasks", json={"title": "Write docs"}, headers=alice.headers)

    assert response.status_code == 201
    body = response.json()
    assert body["code"] == 0
    assert body["message"] == "Task created successfully"
    task = body["data"]
    assert task["title"] == "Write docs"
    assert task["status"] == "TODO"
    assert task["priority"] == "MEDIUM"
    assert task["description"] is None
    assert task["creator"] == {"id": alice.id, "username": "alice", "nickname": "Ally", "avatar": None}
    assert task["assignee"] is None
    assert task["commentCount"] == 0


async def test_create_task_accepts_lowercase_enums_and_assignee(client: AsyncClient, authenticated_user) -> None:
    alice = await authenticated_user("alice")
    bob = await authenticated_user("bob")

    task = await _create_task(
        client,
        alice.headers,
        title="Ship release",
        status="in_progress",
        priority="high",
        assigneeId=bob.id,
    )

    assert task["status"] == "IN_PROGRESS"
    assert task["priority"] == "HIGH"
    assert task["assignee"]["username"] == "bob"


@pytest.mark.parametrize(
    "payload",
    [
        {"title": ""},
        {"title": "   "},
        {"title": "x" * 256},
        {"title": "ok", "description": "d" * 1001},
        {"title": "ok", "status": "BLOCKED"},
        {"title": "ok", "priority": "URGENT"},
    ],
)
async def test_create_task_rejects_invalid_input(
    client: AsyncClient, authenticated_user, payload: dict[str, Any]
) -> None:
    alice = await authenticated_user("alice")

    response = await client.post("/api/tasks", json=payload, headers=alice.headers)

    assert response.status_code == 422
    assert response.json()["code"] == ErrorCode.VALIDATION_FAILED


async def test_create_task_with_unknown_assignee(client: AsyncClient, authenticated_user) -> None:
    alice = await authenticated_user("alice")

    response = await client.post("/api/tasks", json={"title": "Orphan", "assigneeId": 999}, headers=alice.headers)

    assert response.status_code == 404
    assert response.json()["code"] == ErrorCode.USER_NOT_FOUND
    assert response.json()["message"] == "Assignee not found"


async def test_get_task_and_missing_task(client: AsyncClient, authenticated_user) -> None:
    alice = await authenticated_user("alice")
    task = await _create_task(client, alice.headers, title="Lookup")

    found = await client.get(f"/api/tasks/{task['id']}", headers=alice.headers)
    assert found.status_code == 200
    assert found.json()["data"]["id"] == task["id"]

    missing = await client.get("/api/tasks/9999", headers=alice.headers)
    assert missing.status_code == 404
    assert missing.json()["code"] == ErrorCode.TASK_NOT_FOUND
    assert missing.json()["message"] == "Task not found with id: 9999"


async def test_filters_combine_conjunctively(client: AsyncClient, authenticated_user) -> None:
    alice = await authenticated_user("alice")
    bob = await authenticated_user("bob")

    await _create_task(client, alice.headers, title="Fix login bug", priority="HIGH", assigneeId=bob.id)
    await _create_task(client, alice.headers, title="Login page copy", priority="LOW", assigneeId=bob.id)
    await _create_task(client, alice.headers, title="Fix payment bug", priority="HIGH")
    await _create_task(
        client, bob.headers, title="Refactor", description="Touches the LOGIN flow", priority="HIGH"
    )

    async def titles(**params: Any) -> list[str]:
        response = await client.get("/api/tasks", params=params, headers=alice.headers)
        assert response.status_code == 200
        return [task["title"] for task in response.json()["data"]]

    assert await titles() == ["Fix login bug", "Login page copy", "Fix payment bug", "Refactor"]
    assert await titles(search="login") == ["Fix login bug", "Login page copy", "Refactor"]
    assert await titles(search="  LOGIN ", priority="high") == ["Fix login bug", "Refactor"]
    assert await titles(search="login", priority="HIGH", assigneeId=bob.id) == ["Fix login bug"]
    assert await titles(creatorId=bob.id) == ["Refactor"]
    assert await titles(status="todo", creatorId=alice.id, priority="low") == ["Login page copy"]


async def test_unknown_filter_values_match_nothing(client: AsyncClient, authenticated_user) -> None:
    alice = await authenticated_user("alice")
    await _create_task(client, alice.headers, title="Anything")

    for params in ({"status": "BLOCKED"}, {"priority": "URGENT"}, {"status": "TODO", "priority": "nope"}):
        response = await client.get("/api/tasks", params=params, headers=alice.headers)
        assert response.status_code == 200
        assert response.json()["data"] == []


async def test_assignee_filter_never_returns_unassigned_tasks(client: AsyncClient, authenticated_user) -> None:
    alice = await authenticated_user("alice")
    await _create_task(client, alice.headers, title="Unassigned")

    response = await client.get("/api/tasks", params={"assigneeId": alice.id}, headers=alice.headers)

    assert response.json()["data"] == []


async def test_search_treats_wildcards_literally(client: AsyncClient, authenticated_user) -> None:
    alice = await authenticated_user("alice")
    await _create_task(client, alice.headers, title="Reach 100% coverage")
    await _create_task(client, alice.headers, title="Reach 100 users")

    response = await client.get("/api/tasks", params={"search": "100%"}, headers=alice.headers)

    assert [task["title"] for task in response.json()["data"]] == ["Reach 100% coverage"]


async def test_search_folds_case_beyond_ascii(client: AsyncClient, authenticated_user) -> None:
    alice = await authenticated_user("alice")
    await _create_task(client, alice.headers, title="ÉCOLE Überblick")
    await _create_task(client, alice.headers, title="Plain", description="Straße und Mädchen")

    async def titles(search: str) -> list[str]:
        response = await client.get("/api/tasks", params={"search": search}, headers=alice.headers)
        assert response.status_code == 200
        return [task["title"] for task in response.json()["data"]]

    assert await titles("école") == ["ÉCOLE Überblick"]
    assert await titles("ÉCOLE") == ["ÉCOLE Überblick"]
    assert await titles("überBLICK") == ["ÉCOLE Überblick"]
    assert await titles("MÄDCHEN") == ["Plain"]


async def test_status_path_is_exact_match(client: AsyncClient, authenticated_user) -> None:
    alice = await authenticated_user("alice")
    await _create_task(client, alice.headers, title="Started", status="IN_PROGRESS")
    await _create_task(client, alice.headers, title="Waiting")

    exact = await client.get("/api/tasks/status/IN_PROGRESS", headers=alice.headers)
    assert exact.status_code == 200
    assert [task["title"] for task in exact.json()["data"]] == ["Started"]

    lowercase = await client.get("/api/tasks/status/in_progress", headers=alice.headers)
    assert lowercase.status_code == 422
    assert lowercase.json()["code"] == ErrorCode.VALIDATION_FAILED


async def test_my_tasks_lists_created_or_assigned(client: AsyncClient, authenticated_user) -> None:
    alice = await authenticated_user("alice")
    bob = await authenticated_user("bob")
    carol = await authenticated_user("carol")

    await _create_task(client, alice.headers, title="Alice own")
    await _create_task(client, bob.headers, title="Bob for Alice", assigneeId=alice.id)
    await _create_task(client, bob.headers, title="Bob for Carol", assigneeId=carol.id)

    response = await client.get("/api/tasks/my", headers=alice.headers)

    assert [task["title"] for task in response.json()["data"]] == ["Alice own", "Bob for Alice"]


async def test_partial_update_only_touches_sent_fields(client: AsyncClient, authenticated_user) -> None:
    alice = await authenticated_user("alice")
    bob = await authenticated_user("bob")
    task = await _create_task(
        client,
        alice.headers,
        title="Draft",
        description="First pass",
        priority="LOW",
        assigneeId=bob.id,
    )

    status_only = await client.put(f"/api/tasks/{task['id']}", json={"status": "done"}, headers=alice.headers)
    assert status_only.status_code == 200
    updated = status_only.json()["data"]
    assert status_only.json()["message"] == "Task updated successfully"
    assert updated["status"] == "DONE"
    assert updated["title"] == "Draft"
    assert updated["description"] == "First pass"
    assert updated["priority"] == "LOW"
    assert updated["assignee"]["id"] == bob.id

    cleared = await client.put(
        f"/api/tasks/{task['id']}",
        json={"description": None, "assigneeId": None},
        headers=alice.headers,
    )
    assert cleared.status_code == 200
    assert cleared.json()["data"]["description"] is None
    assert cleared.json()["data"]["assignee"] is None
    assert cleared.json()["data"]["status"] == "DONE"


@pytest.mark.parametrize(
    "payload",
    [{"title": None}, {"status": None}, {"priority": None}, {"title": "  "}, {"status": "PAUSED"}],
)
async def test_update_rejects_invalid_fields(
    client: AsyncClient, authenticated_user, payload: dict[str, Any]
) -> None:
    alice = await authenticated_user("alice")
    task = await _create_task(client, alice.headers, title="Stable")

    response = await client.put(f"/api/tasks/{task['id']}", json=payload, headers=alice.headers)

    assert response.status_code == 422


async def test_any_authenticated_user_may_update_by_default(client: AsyncClient, authenticated_user) -> None:
    alice = await authenticated_user("alice")
    mallory = await authenticated_user("mallory")
    task = await _create_task(client, alice.headers, title="Shared")

    response = await client.put(f"/api/tasks/{task['id']}", json={"priority": "HIGH"}, headers=mallory.headers)

    assert response.status_code == 200
    assert response.json()["data"]["priority"] == "HIGH"


async def test_delete_permissions(client: AsyncClient, authenticated_user) -> None:
    alice = await authenticated_user("alice")
    bob = await authenticated_user("bob")
    admin = await authenticated_user("root", role=UserRole.ADMIN)

    task = await _create_task(client, alice.headers, title="Temp", assigneeId=bob.id)

    denied = await client.delete(f"/api/tasks/{task['id']}", headers=bob.headers)
    assert denied.status_code == 403
    assert denied.json()["code"] == ErrorCode.TASK_ACCESS_DENIED
    assert denied.json()["message"] == "Only the creator or admin can delete this task"

    own = await client.delete(f"/api/tasks/{task['id']}", headers=alice.headers)
    assert own.status_code == 200
    assert own.json()["message"] == "Task deleted successfully"

    again = await client.delete(f"/api/tasks/{task['id']}", headers=alice.headers)
    assert again.status_code == 404
    assert again.json()["code"] == ErrorCode.TASK_NOT_FOUND

    other = await _create_task(client, bob.headers, title="Bob's")
    by_admin = await client.delete(f"/api/tasks/{other['id']}", headers=admin.headers)
    assert by_admin.status_code == 200


async def test_admin_delete_route_requires_admin(client: AsyncClient, authenticated_user) -> None:
    alice = await authenticated_user("alice")
    admin = await authenticated_user("root", role=UserRole.ADMIN)
    task = await _create_task(client, alice.headers, title="Own task")

    as_creator = await client.delete(f"/api/tasks/admin/{task['id']}", headers=alice.headers)
    assert as_creator.status_code == 403

    as_admin = await client.delete(f"/api/tasks/admin/{task['id']}", headers=admin.headers)
    assert as_admin.status_code == 200
    assert as_admin.json()["message"] == "Task deleted successfully by admin"

    missing = await client.delete(f"/api/tasks/admin/{task['id']}", headers=admin.headers)
    assert missing.status_code == 404


async def test_deleting_task_removes_its_comments(client: AsyncClient, authenticated_user) -> None:
    alice = await authenticated_user("alice")
    task = await _create_task(client, alice.headers, title="Chatty")
    for text in ("one", "two"):
        created = await client.post(
            f"/api/tasks/{task['id']}/comments", json={"content": text}, headers=alice.headers
        )
        assert created.status_code == 201

    assert (await client.delete(f"/api/tasks/{task['id']}", headers=alice.headers)).status_code == 200

    comments = await client.get(f"/api/tasks/{task['id']}/comments", headers=alice.headers)
    assert comments.status_code == 200
    assert comments.json()["data"] == []


async def test_task_detail_includes_comments_newest_first(client: AsyncClient, authenticated_user) -> None:
    alice = await authenticated_user("alice")
    bob = await authenticated_user("bob")
    task = await _create_task(client, alice.headers, title="Discuss")
    await client.post(f"/api/tasks/{task['id']}/comments", json={"content": "first"}, headers=alice.headers)
    await client.post(f"/api/tasks/{task['id']}/comments", json={"content": "second"}, headers=bob.headers)

    response = await client.get(f"/api/tasks/{task['id']}/detail", headers=alice.headers)

    assert response.status_code == 200
    detail = response.json()["data"]
    assert detail["commentCount"] == 2
    assert [comment["content"] for comment in detail["comments"]] == ["second", "first"]
    assert detail["comments"][0]["user"]["username"] == "bob"


async def test_task_routes_require_authentication(client: AsyncClient) -> None:
    for method, url in (("GET", "/api/tasks"), ("POST", "/api/tasks"), ("GET", "/api/tasks/my")):
        response = await client.request(method, url, json={"title": "x"} if method == "POST" else None)
        assert response.status_code == 401


async def test_alice_end_to_end(client: AsyncClient, authenticated_user) -> None:
    alice = await authenticated_user("alice")
    task = await _create_task(client, alice.headers, title="T")

    assigned = await client.get("/api/tasks", params={"assigneeId": alice.id}, headers=alice.headers)
    assert assigned.json()["data"] == []

    mine = await client.get("/api/tasks/my", headers=alice.headers)
    assert [item["id"] for item in mine.json()["data"]] == [task["id"]]

    await client.put(f"/api/tasks/{task['id']}", json={"status": "DONE"}, headers=alice.headers)
    fetched = await client.get(f"/api/tasks/{task['id']}", headers=alice.headers)
    assert fetched.json()["data"]["status"] == "DONE"

    assert (await client.delete(f"/api/tasks/{task['id']}", headers=alice.headers)).status_code == 200
    gone = await client.get(f"/api/tasks/{task['id']}", headers=alice.headers)
    assert gone.status_code == 404
    assert gone.json()["code"] == ErrorCode.TASK_NOT_FOUND
