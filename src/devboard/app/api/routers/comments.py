"""Routes for task comments."""

from __future__ import annotations

from fastapi import APIRouter, status

from ...deps import CommentServiceDependency, CurrentActorDependency
from ...schemas import ApiResponse, CommentCreate, CommentRead
from ..mappers import map_comment

router = APIRouter(tags=["comments"])


@router.post(
    "/tasks/{task_id}/comments",
    response_model=ApiResponse[CommentRead],
    status_code=status.HTTP_201_CREATED,
    summary="Comment on a task",
)
async def create_comment(
    task_id: int,
    payload: CommentCreate,
    actor: CurrentActorDependency,
    service: CommentServiceDependency,
) -> ApiResponse[CommentRead]:
    view = await service.create_comment(task_id=task_id, author_id=actor.id, content=payload.content)
    return ApiResponse[CommentRead](message="Comment created successfully", data=map_comment(view))


@router.get(
    "/tasks/{task_id}/comments",
    response_model=ApiResponse[list[CommentRead]],
    summary="List a task's comments, newest first",
)
async def list_comments(
    task_id: int,
    _: CurrentActorDependency,
    service: CommentServiceDependency,
) -> ApiResponse[list[CommentRead]]:
    views = await service.list_comments(task_id)
    return ApiResponse[list[CommentRead]](data=[map_comment(view) for view in views])


@router.delete(
    "/comments/{comment_id}",
    response_model=ApiResponse[None],
    summary="Delete a comment (author or admin)",
)
async def delete_comment(
    comment_id: int,
    actor: CurrentActorDependency,
    service: CommentServiceDependency,
) -> ApiResponse[None]:
    await service.delete_comment(comment_id, actor)
    return ApiResponse[None](message="Comment deleted successfully")
