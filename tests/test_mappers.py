from __future__ import annotations

from devboard.app.api.mappers import map_comment
from devboard.app.models import Comment, User
from devboard.app.services import CommentView


def test_comment_author_is_projected() -> None:
    author = User(id=2, username="bob", email="bob@example.com", hashed_password="x", nickname="Bobby")
    comment = Comment(id=5, content="hi", task_id=10, user_id=2)

    read = map_comment(CommentView(comment=comment, author=author))

    assert read.user is not None
    assert read.user.id == 2
    assert read.user.username == "bob"
    assert read.model_dump(by_alias=True)["taskId"] == 10


def test_comment_without_author_row_has_no_user() -> None:
    comment = Comment(id=5, content="orphaned", task_id=10, user_id=42)

    read = map_comment(CommentView(comment=comment, author=None))

    assert read.user is None
    assert read.content == "orphaned"
