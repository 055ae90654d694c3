"""Administrator-only endpoints."""

from __future__ import annotations

from fastapi import APIRouter

from ...deps import AdminActorDependency, AdminServiceDependency
from ...schemas import AdminUserSummary, ApiResponse, DashboardRead
from ..mappers import map_dashboard, map_user_stats

router = APIRouter(prefix="/admin", tags=["admin"])


@router.get("/users", response_model=ApiResponse[list[AdminUserSummary]], summary="All users with activity counts")
async def list_users(
    _: AdminActorDependency,
    service: AdminServiceDependency,
) -> ApiResponse[list[AdminUserSummary]]:
    summaries = await service.list_user_summaries()
    return ApiResponse[list[AdminUserSummary]](data=[map_user_stats(item) for item in summaries])


@router.get("/users/{user_id}", response_model=ApiResponse[AdminUserSummary], summary="One user's activity counts")
async def get_user(
    user_id: int,
    _: AdminActorDependency,
    service: AdminServiceDependency,
) -> ApiResponse[AdminUserSummary]:
    return ApiResponse[AdminUserSummary](data=map_user_stats(await service.get_user_summary(user_id)))


@router.get("/dashboard", response_model=ApiResponse[DashboardRead], summary="System-wide counters")
async def read_dashboard(
    _: AdminActorDependency,
    service: AdminServiceDependency,
) -> ApiResponse[DashboardRead]:
    return ApiResponse[DashboardRead](data=map_dashboard(await service.dashboard()))


@router.put("/users/{user_id}/disable", response_model=ApiResponse[AdminUserSummary], summary="Disable an account")
async def disable_user(
    user_id: int,
    actor: AdminActorDependency,
    service: AdminServiceDependency,
) -> ApiResponse[AdminUserSummary]:
    stats = await service.set_user_active(user_id, False, actor)
    return ApiResponse[AdminUserSummary](message="User disabled", data=map_user_stats(stats))


@router.put("/users/{user_id}/enable", response_model=ApiResponse[AdminUserSummary], summary="Re-enable an account")
async def enable_user(
    user_id: int,
    actor: AdminActorDependency,
    service: AdminServiceDependency,
) -> ApiResponse[AdminUserSummary]:
    stats = await service.set_user_active(user_id, True, actor)
    return ApiResponse[AdminUserSummary](message="User enabled", data=map_user_stats(stats))
