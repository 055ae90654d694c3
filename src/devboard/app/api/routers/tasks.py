"""Routes handling task CRUD operations."""

from __future__ import annotations

from typing import Annotated

from fastapi import APIRouter, Query, status

from ...deps import (
    AdminActorDependency,
    CurrentActorDependency,
    TaskServiceDependency,
)
from ...repositories import TaskFilter
from ...schemas import ApiResponse, TaskCreate, TaskDetail, TaskRead, TaskUpdate
from ..mappers import map_task, map_task_detail

router = APIRouter(prefix="/tasks", tags=["tasks"])

AssigneeQuery = Annotated[
    int | None,
    Query(alias="assigneeId", description="Only tasks assigned to this user id."),
]
CreatorQuery = Annotated[
    int | None,
    Query(alias="creatorId", description="Only tasks created by this user id."),
]
PriorityQuery = Annotated[
    str | None,
    Query(description="HIGH, MEDIUM or LOW (case-insensitive). Unknown values match nothing."),
]
StatusQuery = Annotated[
    str | None,
    Query(description="TODO, IN_PROGRESS or DONE (case-insensitive). Unknown values match nothing."),
]
SearchQuery = Annotated[
    str | None,
    Query(description="Case-insensitive substring of the title or description."),
]


@router.get("", response_model=ApiResponse[list[TaskRead]], summary="List tasks with optional filters")
async def list_tasks(
    _: CurrentActorDependency,
    service: TaskServiceDependency,
    assignee_id: AssigneeQuery = None,
    priority: PriorityQuery = None,
    status: StatusQuery = None,
    search: SearchQuery = None,
    creator_id: CreatorQuery = None,
) -> ApiResponse[list[TaskRead]]:
    task_filter = TaskFilter.from_query(
        assignee_id=assignee_id,
        creator_id=creator_id,
        status=status,
        priority=priority,
        search=search,
    )
    views = await service.list_tasks(task_filter)
    return ApiResponse[list[TaskRead]](data=[map_task(view) for view in views])


@router.get("/my", response_model=ApiResponse[list[TaskRead]], summary="Tasks I created or am assigned to")
async def list_my_tasks(
    actor: CurrentActorDependency,
    service: TaskServiceDependency,
) -> ApiResponse[list[TaskRead]]:
    views = await service.list_my_tasks(actor.id)
    return ApiResponse[list[TaskRead]](data=[map_task(view) for view in views])


@router.get(
    "/status/{task_status}",
    response_model=ApiResponse[list[TaskRead]],
    summary="Tasks with an exact status name",
)
async def list_tasks_by_status(
    task_status: str,
    _: CurrentActorDependency,
    service: TaskServiceDependency,
) -> ApiResponse[list[TaskRead]]:
    views = await service.list_tasks_by_status(task_status)
    return ApiResponse[list[TaskRead]](data=[map_task(view) for view in views])


@router.get("/{task_id}", response_model=ApiResponse[TaskRead], summary="Retrieve a task by id")
async def get_task(
    task_id: int,
    _: CurrentActorDependency,
    service: TaskServiceDependency,
) -> ApiResponse[TaskRead]:
    return ApiResponse[TaskRead](data=map_task(await service.get_task(task_id)))


@router.get(
    "/{task_id}/detail",
    response_model=ApiResponse[TaskDetail],
    summary="Retrieve a task with its comments",
)
async def get_task_detail(
    task_id: int,
    _: CurrentActorDependency,
    service: TaskServiceDependency,
) -> ApiResponse[TaskDetail]:
    return ApiResponse[TaskDetail](data=map_task_detail(await service.get_task_detail(task_id)))


@router.post(
    "",
    response_model=ApiResponse[TaskRead],
    status_code=status.HTTP_201_CREATED,
    summary="Create a new task",
)
async def create_task(
    payload: TaskCreate,
    actor: CurrentActorDependency,
    service: TaskServiceDependency,
) -> ApiResponse[TaskRead]:
    view = await service.create_task(
        creator_id=actor.id,
        title=payload.title,
        description=payload.description,
        status=payload.status,
        priority=payload.priority,
        assignee_id=payload.assignee_id,
    )
    return ApiResponse[TaskRead](message="Task created successfully", data=map_task(view))


@router.put("/{task_id}", response_model=ApiResponse[TaskRead], summary="Update an existing task")
async def update_task(
    task_id: int,
    payload: TaskUpdate,
    actor: CurrentActorDependency,
    service: TaskServiceDependency,
) -> ApiResponse[TaskRead]:
    view = await service.update_task(task_id, actor, **payload.changes())
    return ApiResponse[TaskRead](message="Task updated successfully", data=map_task(view))


@router.delete(
    "/admin/{task_id}",
    response_model=ApiResponse[None],
    summary="Delete any task (admin only)",
)
async def admin_delete_task(
    task_id: int,
    _: AdminActorDependency,
    service: TaskServiceDependency,
) -> ApiResponse[None]:
    await service.admin_delete_task(task_id)
    return ApiResponse[None](message="Task deleted successfully by admin")


@router.delete(
    "/{task_id}",
    response_model=ApiResponse[None],
    summary="Delete a task (creator or admin)",
)
async def delete_task(
    task_id: int,
    actor: CurrentActorDependency,
    service: TaskServiceDependency,
) -> ApiResponse[None]:
    await service.delete_task(task_id, actor)
    return ApiResponse[None](message="Task deleted successfully")
