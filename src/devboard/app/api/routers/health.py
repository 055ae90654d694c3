"""Health and readiness endpoints."""

from __future__ import annotations

from fastapi import APIRouter, status
from sqlalchemy import text

from ...deps import DatabaseSessionDependency
from ...schemas.system import HealthCheckResponse

router = APIRouter(tags=["system"])


@router.get(
    "/healthz",
    response_model=HealthCheckResponse,
    status_code=status.HTTP_200_OK,
    summary="Health check",
)
async def read_health(session: DatabaseSessionDependency) -> HealthCheckResponse:
    """Confirm the process is up and the database answers a trivial query."""
    await session.execute(text("SELECT 1"))
    return HealthCheckResponse(status="ok", database="ok")
