"""Routes handling user authentication flows."""

from __future__ import annotations

from fastapi import APIRouter, status

from ...deps import AuthServiceDependency, CurrentUserDependency
from ...schemas import ApiResponse, JwtResponse, LoginRequest, MessageResponse, SignupRequest
from ..mappers import map_jwt

router = APIRouter(prefix="/auth", tags=["auth"])


@router.post(
    "/signup",
    response_model=ApiResponse[MessageResponse],
    status_code=status.HTTP_200_OK,
    summary="Register a new user account",
)
async def signup(payload: SignupRequest, service: AuthServiceDependency) -> ApiResponse[MessageResponse]:
    await service.register_user(
        username=payload.username,
        email=str(payload.email),
        password=payload.password,
    )
    return ApiResponse[MessageResponse](data=MessageResponse(message="User registered successfully!"))


@router.post(
    "/login",
    response_model=ApiResponse[JwtResponse],
    summary="Authenticate with username and password",
)
async def login(payload: LoginRequest, service: AuthServiceDependency) -> ApiResponse[JwtResponse]:
    result = await service.authenticate(payload.username, payload.password)
    return ApiResponse[JwtResponse](data=map_jwt(result.user, result.token.token))


@router.get(
    "/me",
    response_model=ApiResponse[JwtResponse],
    summary="Describe the authenticated user",
)
async def read_me(current_user: CurrentUserDependency) -> ApiResponse[JwtResponse]:
    return ApiResponse[JwtResponse](data=map_jwt(current_user))
