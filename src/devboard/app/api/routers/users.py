"""User-centric API endpoints."""

from __future__ import annotations

from fastapi import APIRouter

from ...deps import CurrentUserDependency, UserServiceDependency
from ...schemas import ApiResponse, UserProfile, UserProfileUpdate
from ..mappers import map_profile

router = APIRouter(prefix="/users", tags=["users"])


@router.get("/me", response_model=ApiResponse[UserProfile], summary="Return the authenticated user's profile")
async def read_current_user(current_user: CurrentUserDependency) -> ApiResponse[UserProfile]:
    return ApiResponse[UserProfile](data=map_profile(current_user))


@router.put("/me", response_model=ApiResponse[UserProfile], summary="Update email, nickname or avatar")
async def update_current_user(
    payload: UserProfileUpdate,
    current_user: CurrentUserDependency,
    service: UserServiceDependency,
) -> ApiResponse[UserProfile]:
    user = await service.update_profile(current_user.id, payload.model_dump(exclude_unset=True))
    return ApiResponse[UserProfile](message="Profile updated successfully", data=map_profile(user))


@router.get("", response_model=ApiResponse[list[UserProfile]], summary="List all users")
async def list_users(
    _: CurrentUserDependency,
    service: UserServiceDependency,
) -> ApiResponse[list[UserProfile]]:
    users = await service.list_users()
    return ApiResponse[list[UserProfile]](data=[map_profile(user) for user in users])
