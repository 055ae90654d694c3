from __future__ import annotations

import pytest
from sqlmodel.ext.asyncio.session import AsyncSession

from devboard.app.core.config import TaskUpdatePolicy
from devboard.app.core.security import verify_password
from devboard.app.errors import AccessDeniedError, AlreadyExistsError, ErrorCode, NotFoundError, ValidationError
from devboard.app.models import TaskPriority, TaskStatus, UserRole
from devboard.app.repositories import TaskFilter, UserRepository
from devboard.app.services import Actor, CommentService, TaskService, UserService
from devboard.app.services.users import EMAIL_IN_USE, USERNAME_TAKEN

pytestmark = pytest.mark.asyncio


async def test_user_service_hashes_passwords_and_guards_uniqueness(session: AsyncSession) -> None:
    service = UserService(session)

    user = await service.create_user(username="alice", email="alice@example.com", password="s3cret-pass")

    assert user.id is not None
    assert user.role is UserRole.USER
    assert user.is_active is True
    assert user.hashed_password != "s3cret-pass"
    assert verify_password("s3cret-pass", user.hashed_password)

    with pytest.raises(AlreadyExistsError) as excinfo:
        await service.create_user(username="alice", email="other@example.com", password="s3cret-pass")
    assert excinfo.value.code == ErrorCode.USER_ALREADY_EXISTS

    with pytest.raises(NotFoundError) as missing:
        await service.get_user(999)
    assert missing.value.code == ErrorCode.USER_NOT_FOUND
    assert missing.value.message == "User not found with id: 999"


async def test_update_profile_applies_only_supplied_keys(session: AsyncSession) -> None:
    service = UserService(session)
    user = await service.create_user(
        username="alice", email="alice@example.com", password="s3cret-pass", nickname="Ally"
    )
    assert user.id is not None

    updated = await service.update_profile(user.id, {"avatar": "a.png"})
    assert updated.nickname == "Ally"
    assert updated.avatar == "a.png"

    cleared = await service.update_profile(user.id, {"nickname": None})
    assert cleared.nickname is None
    assert cleared.avatar == "a.png"


async def test_task_service_update_sentinel_semantics(session: AsyncSession) -> None:
    users = UserService(session)
    alice = await users.create_user(username="alice", email="alice@example.com", password="s3cret-pass")
    bob = await users.create_user(username="bob", email="bob@example.com", password="s3cret-pass")
    assert alice.id is not None and bob.id is not None
    actor = Actor.from_user(alice)
    service = TaskService(session)

    view = await service.create_task(
        creator_id=alice.id, title="Plan", description="notes", priority="high", assignee_id=bob.id
    )
    task_id = view.task.id
    assert task_id is not None
    assert view.task.priority is TaskPriority.HIGH
    assert view.assignee is not None and view.assignee.username == "bob"

    untouched = await service.update_task(task_id, actor)
    assert untouched.task.description == "notes"
    assert untouched.task.assignee_id == bob.id

    cleared = await service.update_task(task_id, actor, description=None, assignee_id=None)
    assert cleared.task.description is None
    assert cleared.assignee is None

    with pytest.raises(ValidationError):
        await service.update_task(task_id, actor, status=None)
    with pytest.raises(ValidationError):
        await service.update_task(task_id, actor, status="WAITING")
    with pytest.raises(NotFoundError):
        await service.update_task(task_id, actor, assignee_id=999)


async def test_creator_or_assignee_policy_blocks_bystanders(session: AsyncSession) -> None:
    users = UserService(session)
    alice = await users.create_user(username="alice", email="alice@example.com", password="s3cret-pass")
    bob = await users.create_user(username="bob", email="bob@example.com", password="s3cret-pass")
    eve = await users.create_user(username="eve", email="eve@example.com", password="s3cret-pass")
    assert alice.id is not None
    service = TaskService(session, update_policy=TaskUpdatePolicy.CREATOR_OR_ASSIGNEE)
    view = await service.create_task(creator_id=alice.id, title="Guarded", assignee_id=bob.id)
    assert view.task.id is not None

    updated = await service.update_task(view.task.id, Actor.from_user(bob), status=TaskStatus.DONE)
    assert updated.task.status is TaskStatus.DONE

    with pytest.raises(AccessDeniedError) as excinfo:
        await service.update_task(view.task.id, Actor.from_user(eve), title="Hijacked")
    assert excinfo.value.code == ErrorCode.TASK_ACCESS_DENIED


async def test_list_tasks_and_creator_check(session: AsyncSession) -> None:
    users = UserService(session)
    alice = await users.create_user(username="alice", email="alice@example.com", password="s3cret-pass")
    assert alice.id is not None
    service = TaskService(session)
    first = await service.create_task(creator_id=alice.id, title="One", status="DONE")
    await service.create_task(creator_id=alice.id, title="Two")
    assert first.task.id is not None

    done = await service.list_tasks(TaskFilter.from_query(status="done"))
    assert [view.task.title for view in done] == ["One"]
    assert [view.task.title for view in await service.list_tasks()] == ["One", "Two"]

    assert await service.is_task_creator(first.task.id, "alice") is True
    assert await service.is_task_creator(first.task.id, "bob") is False
    assert await service.is_task_creator(999, "alice") is False


async def test_comment_service_counts_and_missing_task(session: AsyncSession) -> None:
    users = UserService(session)
    alice = await users.create_user(username="alice", email="alice@example.com", password="s3cret-pass")
    assert alice.id is not None
    task = await TaskService(session).create_task(creator_id=alice.id, title="Talk")
    assert task.task.id is not None
    comments = CommentService(session)

    await comments.create_comment(task_id=task.task.id, author_id=alice.id, content="hello")
    assert await comments.count_comments(task.task.id) == 1
    assert await comments.list_comments(12345) == []

    with pytest.raises(NotFoundError) as excinfo:
        await comments.create_comment(task_id=12345, author_id=alice.id, content="lost")
    assert excinfo.value.code == ErrorCode.TASK_NOT_FOUND


async def test_lookup_by_username(session: AsyncSession) -> None:
    service = UserService(session)
    created = await service.create_user(username="alice", email="alice@example.com", password="s3cret-pass")

    assert (await service.get_user_by_username("alice")).id == created.id
    assert await service.find_user_by_username("nobody") is None
    with pytest.raises(NotFoundError) as excinfo:
        await service.get_user_by_username("nobody")
    assert excinfo.value.code == ErrorCode.USER_NOT_FOUND


async def _never_exists(self: UserRepository, *args: object, **kwargs: object) -> bool:
    return False


async def test_store_conflict_on_register_becomes_already_exists(
    session: AsyncSession, monkeypatch: pytest.MonkeyPatch
) -> None:
    service = UserService(session)
    await service.create_user(username="alice", email="alice@example.com", password="s3cret-pass")
    monkeypatch.setattr(UserRepository, "username_exists", _never_exists)
    monkeypatch.setattr(UserRepository, "email_exists", _never_exists)

    with pytest.raises(AlreadyExistsError) as taken:
        await service.create_user(username="alice", email="other@example.com", password="s3cret-pass")
    assert taken.value.message == USERNAME_TAKEN
    assert taken.value.code == ErrorCode.USER_ALREADY_EXISTS

    with pytest.raises(AlreadyExistsError) as in_use:
        await service.create_user(username="alice2", email="alice@example.com", password="s3cret-pass")
    assert in_use.value.message == EMAIL_IN_USE

    assert await UserRepository(session).count() == 1


async def test_store_conflict_on_email_change_becomes_already_exists(
    session: AsyncSession, monkeypatch: pytest.MonkeyPatch
) -> None:
    service = UserService(session)
    alice = await service.create_user(username="alice", email="alice@example.com", password="s3cret-pass")
    await service.create_user(username="bob", email="bob@example.com", password="s3cret-pass")
    assert alice.id is not None
    monkeypatch.setattr(UserRepository, "email_exists", _never_exists)

    with pytest.raises(AlreadyExistsError) as excinfo:
        await service.update_profile(alice.id, {"email": "bob@example.com"})
    assert excinfo.value.message == EMAIL_IN_USE

    await session.refresh(alice)
    assert alice.email == "alice@example.com"


async def test_update_profile_rejects_unknown_fields(session: AsyncSession) -> None:
    service = UserService(session)
    alice = await service.create_user(username="alice", email="alice@example.com", password="s3cret-pass")
    assert alice.id is not None

    with pytest.raises(ValidationError) as excinfo:
        await service.update_profile(alice.id, {"role": "ADMIN"})
    assert excinfo.value.code == ErrorCode.VALIDATION_FAILED
    assert excinfo.value.message == "Unsupported profile fields: role"
    assert (await service.get_user(alice.id)).role is UserRole.USER
