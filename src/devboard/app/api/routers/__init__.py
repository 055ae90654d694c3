"""API routers for the DevBoard application."""

from __future__ import annotations

from fastapi import APIRouter

from . import admin, auth, comments, health, tasks, users

api_router = APIRouter()
api_router.include_router(auth.router)
api_router.include_router(users.router)
api_router.include_router(tasks.router)
api_router.include_router(comments.router)
api_router.include_router(admin.router)

health_router = health.router

__all__ = ["api_router", "health_router"]
