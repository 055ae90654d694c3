"""Domain error taxonomy and the handlers that render it as envelopes."""

from __future__ import annotations

import logging
from enum import IntEnum
from http import HTTPStatus
from typing import Any, Mapping

from fastapi import FastAPI, status
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from sqlalchemy.exc import IntegrityError
from starlette.exceptions import HTTPException as StarletteHTTPException
from starlette.requests import Request

from .core.context import REQUEST_ID_HEADER, request_id_bound
from .schemas.common import ApiResponse

logger = logging.getLogger(__name__)


class ErrorCode(IntEnum):
    """Application codes carried in the ``code`` field of error envelopes."""

    BAD_REQUEST = 400
    UNAUTHORIZED = 401
    FORBIDDEN = 403
    NOT_FOUND = 404
    CONFLICT = 409
    VALIDATION_FAILED = 422
    INTERNAL_SERVER_ERROR = 500

    USER_NOT_FOUND = 1001
    USER_ALREADY_EXISTS = 1002
    INVALID_CREDENTIALS = 1003
    TOKEN_EXPIRED = 1004
    INVALID_TOKEN = 1005

    TASK_NOT_FOUND = 2001
    TASK_ACCESS_DENIED = 2002

    COMMENT_NOT_FOUND = 3001


class ApplicationError(Exception):
    """Base class for failures the API reports with a fixed status and code."""

    default_message = "Request failed."
    default_code = ErrorCode.BAD_REQUEST
    status_code = status.HTTP_400_BAD_REQUEST

    def __init__(
        self,
        message: str | None = None,
        *,
        code: int | None = None,
        status_code: int | None = None,
        details: Any | None = None,
        headers: Mapping[str, str] | None = None,
    ) -> None:
        self.message = message or self.default_message
        super().__init__(self.message)
        self.code = int(code if code is not None else self.default_code)
        if status_code is not None:
            self.status_code = status_code
        self.details = details
        self.headers = dict(headers) if headers else None


class NotFoundError(ApplicationError):
    """An entity referenced by the request does not exist."""

    default_message = "Resource not found."
    default_code = ErrorCode.NOT_FOUND
    status_code = status.HTTP_404_NOT_FOUND


class AlreadyExistsError(ApplicationError):
    """A uniqueness rule (username, email) would be violated."""

    default_message = "Resource already exists."
    default_code = ErrorCode.USER_ALREADY_EXISTS
    status_code = status.HTTP_409_CONFLICT


class InvalidCredentialsError(ApplicationError):
    """Login or bearer-token verification failed."""

    default_message = "Invalid username or password."
    default_code = ErrorCode.INVALID_CREDENTIALS
    status_code = status.HTTP_401_UNAUTHORIZED

    def __init__(self, message: str | None = None, **kwargs: Any) -> None:
        kwargs.setdefault("headers", {"WWW-Authenticate": "Bearer"})
        super().__init__(message, **kwargs)


class AccessDeniedError(ApplicationError):
    """The caller is authenticated but not allowed to perform the operation."""

    default_message = "Access denied."
    default_code = ErrorCode.FORBIDDEN
    status_code = status.HTTP_403_FORBIDDEN


class ValidationError(ApplicationError):
    """Input was well-formed JSON but violates a business rule."""

    default_message = "Validation failed."
    default_code = ErrorCode.VALIDATION_FAILED
    status_code = status.HTTP_422_UNPROCESSABLE_ENTITY


class ServerError(ApplicationError):
    """A failure the client cannot fix."""

    default_message = "An unexpected error occurred"
    default_code = ErrorCode.INTERNAL_SERVER_ERROR
    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR


_HTTP_STATUS_ERROR_CODES: dict[int, ErrorCode] = {
    status.HTTP_400_BAD_REQUEST: ErrorCode.BAD_REQUEST,
    status.HTTP_401_UNAUTHORIZED: ErrorCode.UNAUTHORIZED,
    status.HTTP_403_FORBIDDEN: ErrorCode.FORBIDDEN,
    status.HTTP_404_NOT_FOUND: ErrorCode.NOT_FOUND,
    status.HTTP_409_CONFLICT: ErrorCode.CONFLICT,
    status.HTTP_422_UNPROCESSABLE_ENTITY: ErrorCode.VALIDATION_FAILED,
}


def _request_id(request: Request) -> str | None:
    return getattr(request.state, "request_id", None)


def _with_request_id(request: Request, details: Any | None) -> Any | None:
    request_id = _request_id(request)
    if not request_id:
        return details
    if details is None:
        return {"request_id": request_id}
    if isinstance(details, dict):
        return {"request_id": request_id, **details}
    return {"request_id": request_id, "detail": details}


def _error_response(
    request: Request,
    *,
    status_code: int,
    code: int,
    message: str,
    details: Any | None = None,
    headers: Mapping[str, str] | None = None,
) -> JSONResponse:
    payload = ApiResponse[Any](
        code=code,
        message=message,
        data=_with_request_id(request, details),
    )
    response = JSONResponse(status_code=status_code, content=jsonable_encoder(payload))
    if headers:
        response.headers.update(headers)
    request_id = _request_id(request)
    if request_id:
        response.headers.setdefault(REQUEST_ID_HEADER, request_id)
    return response


def _log_for_status(status_code: int):
    return logger.error if status_code >= status.HTTP_500_INTERNAL_SERVER_ERROR else logger.warning


def register_exception_handlers(app: FastAPI) -> None:
    """Render every failure as an ``ApiResponse`` envelope."""

    @app.exception_handler(ApplicationError)
    async def _handle_application_error(request: Request, exc: ApplicationError) -> JSONResponse:
        with request_id_bound(_request_id(request)):
            _log_for_status(exc.status_code)(
                "%s: %s",
                type(exc).__name__,
                exc.message,
                extra={"code": exc.code, "status_code": exc.status_code, "path": request.url.path},
            )
            return _error_response(
                request,
                status_code=exc.status_code,
                code=exc.code,
                message=exc.message,
                details=exc.details,
                headers=exc.headers,
            )

    @app.exception_handler(RequestValidationError)
    async def _handle_request_validation_error(
        request: Request,
        exc: RequestValidationError,
    ) -> JSONResponse:
        errors = jsonable_encoder(exc.errors())
        with request_id_bound(_request_id(request)):
            logger.warning("Request validation failed", extra={"errors": errors})
            return _error_response(
                request,
                status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
                code=ErrorCode.VALIDATION_FAILED,
                message="Validation failed",
                details={"errors": errors},
            )

    @app.exception_handler(IntegrityError)
    async def _handle_integrity_error(request: Request, exc: IntegrityError) -> JSONResponse:
        with request_id_bound(_request_id(request)):
            logger.error("Database integrity error encountered.", exc_info=exc)
            return _error_response(
                request,
                status_code=status.HTTP_409_CONFLICT,
                code=ErrorCode.CONFLICT,
                message="Resource conflict",
            )

    @app.exception_handler(StarletteHTTPException)
    async def _handle_http_exception(request: Request, exc: StarletteHTTPException) -> JSONResponse:
        code = _HTTP_STATUS_ERROR_CODES.get(exc.status_code, exc.status_code)
        if isinstance(exc.detail, str):
            message = exc.detail
        else:
            try:
                message = HTTPStatus(exc.status_code).phrase
            except ValueError:
                message = "Error"
        with request_id_bound(_request_id(request)):
            _log_for_status(exc.status_code)(
                "HTTP exception raised",
                extra={"code": code, "status_code": exc.status_code, "path": request.url.path},
            )
            return _error_response(
                request,
                status_code=exc.status_code,
                code=code,
                message=message,
                headers=exc.headers,
            )

    @app.exception_handler(Exception)
    async def _handle_unhandled_exception(request: Request, exc: Exception) -> JSONResponse:
        with request_id_bound(_request_id(request)):
            logger.error("Unexpected error occurred", exc_info=exc)
            return _error_response(
                request,
                status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
                code=ErrorCode.INTERNAL_SERVER_ERROR,
                message=ServerError.default_message,
            )


__all__ = [
    "AccessDeniedError",
    "AlreadyExistsError",
    "ApplicationError",
    "ErrorCode",
    "InvalidCredentialsError",
    "NotFoundError",
    "ServerError",
    "ValidationError",
    "register_exception_handlers",
]
