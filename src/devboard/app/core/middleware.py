"""HTTP middleware for the DevBoard API."""

from __future__ import annotations

import logging
import time
import uuid

from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request
from starlette.responses import Response

from .context import REQUEST_ID_HEADER, bind_request_id, reset_request_id

logger = logging.getLogger("devboard.access")

_MAX_INBOUND_ID_LENGTH = 128


class CorrelationIdMiddleware(BaseHTTPMiddleware):
    """Propagate ``X-Request-ID`` through the request and log one access line."""

    def __init__(self, app, header_name: str = REQUEST_ID_HEADER):  # type: ignore[override]
        super().__init__(app)
        self._header_name = header_name

    async def dispatch(self, request: Request, call_next) -> Response:  # type: ignore[override]
        request_id = self._inbound_request_id(request) or uuid.uuid4().hex
        request.state.request_id = request_id
        token = bind_request_id(request_id)
        started = time.perf_counter()
        try:
            response = await call_next(request)
            logger.info(
                "%s %s -> %s",
                request.method,
                request.url.path,
                response.status_code,
                extra={
                    "method": request.method,
                    "path": request.url.path,
                    "status_code": response.status_code,
                    "duration_ms": round((time.perf_counter() - started) * 1000, 2),
                },
            )
        finally:
            reset_request_id(token)
        response.headers.setdefault(self._header_name, request_id)
        return response

    def _inbound_request_id(self, request: Request) -> str | None:
        candidate = request.headers.get(self._header_name, "").strip()
        if not candidate or len(candidate) > _MAX_INBOUND_ID_LENGTH:
            return None
        return candidate


__all__ = ["CorrelationIdMiddleware"]
