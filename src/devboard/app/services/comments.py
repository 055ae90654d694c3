"""Comment creation, listing and deletion."""

from __future__ import annotations

import logging
from dataclasses import dataclass

from sqlmodel.ext.asyncio.session import AsyncSession

from ..errors import AccessDeniedError, ErrorCode, NotFoundError
from ..models import Comment, User
from ..repositories import CommentRepository, TaskRepository, UserRepository
from .access import Actor, can_delete_comment

logger = logging.getLogger(__name__)


@dataclass(slots=True)
class CommentView:
    comment: Comment
    author: User | None


class CommentService:
    """Business operations for ``Comment`` entities."""

    def __init__(self, session: AsyncSession) -> None:
        self._session = session
        self._repository = CommentRepository(session)
        self._task_repository = TaskRepository(session)
        self._user_repository = UserRepository(session)

    async def create_comment(self, *, task_id: int, author_id: int, content: str) -> CommentView:
        if await self._task_repository.get(task_id) is None:
            raise NotFoundError(f"Task not found with id: {task_id}", code=ErrorCode.TASK_NOT_FOUND)
        author = await self._user_repository.get(author_id)
        if author is None:
            raise NotFoundError("User not found", code=ErrorCode.USER_NOT_FOUND)

        comment = Comment(content=content, task_id=task_id, user_id=author_id)
        await self._repository.add(comment)
        await self._session.commit()
        await self._repository.refresh(comment)
        logger.info("Comment created", extra={"comment_id": comment.id, "task_id": task_id, "user_id": author_id})
        return CommentView(comment=comment, author=author)

    async def list_comments(self, task_id: int) -> list[CommentView]:
        """Newest first. A task id that does not exist simply has no comments."""
        comments = await self._repository.list_for_task(task_id)
        authors = {
            user.id: user
            for user in await self._user_repository.list_by_ids([c.user_id for c in comments])
        }
        return [CommentView(comment=c, author=authors.get(c.user_id)) for c in comments]

    async def count_comments(self, task_id: int) -> int:
        return await self._repository.count_for_task(task_id)

    async def delete_comment(self, comment_id: int, actor: Actor) -> None:
        comment = await self._repository.get(comment_id)
        if comment is None:
            raise NotFoundError("Comment not found", code=ErrorCode.COMMENT_NOT_FOUND)
        if await self._user_repository.get(actor.id) is None:
            raise NotFoundError("User not found", code=ErrorCode.USER_NOT_FOUND)
        if not can_delete_comment(comment, actor):
            logger.warning(
                "Comment delete denied",
                extra={"comment_id": comment_id, "user_id": actor.id},
            )
            raise AccessDeniedError("You don't have permission to delete this comment")

        await self._repository.delete(comment)
        await self._session.commit()
        logger.info("Comment deleted", extra={"comment_id": comment_id, "user_id": actor.id})


__all__ = ["CommentService", "CommentView"]
