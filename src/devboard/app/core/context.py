"""Request correlation state shared between middleware, handlers and logging."""

from __future__ import annotations

from collections.abc import Iterator
from contextlib import contextmanager
from contextvars import ContextVar, Token

REQUEST_ID_HEADER = "X-Request-ID"
NO_REQUEST_ID = "-"

_request_id: ContextVar[str] = ContextVar("devboard_request_id", default=NO_REQUEST_ID)


def get_request_id() -> str:
    """Return the correlation id bound to the running task, or ``"-"``."""

    return _request_id.get()


def bind_request_id(request_id: str) -> Token[str]:
    return _request_id.set(request_id)


def reset_request_id(token: Token[str]) -> None:
    _request_id.reset(token)


@contextmanager
def request_id_bound(request_id: str | None) -> Iterator[None]:
    """Bind ``request_id`` for the duration of the block when one is given."""

    if not request_id:
        yield
        return
    token = bind_request_id(request_id)
    try:
        yield
    finally:
        reset_request_id(token)


__all__ = [
    "NO_REQUEST_ID",
    "REQUEST_ID_HEADER",
    "bind_request_id",
    "get_request_id",
    "request_id_bound",
    "reset_request_id",
]
