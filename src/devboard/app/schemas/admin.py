"""Administrator dashboard schemas."""

from __future__ import annotations

from pydantic import Field

from .common import CamelModel


class RoleBreakdown(CamelModel):
    admins: int
    users: int


class StatusBreakdown(CamelModel):
    todo: int
    in_progress: int
    done: int


class PriorityBreakdown(CamelModel):
    high: int
    medium: int
    low: int


class ActivityCount(CamelModel):
    type: str
    message: str
    count: int


class DashboardRead(CamelModel):
    """Point-in-time counters; the parts are read by separate queries."""

    total_users: int
    total_tasks: int
    total_comments: int
    user_role_breakdown: RoleBreakdown
    task_status_breakdown: StatusBreakdown
    task_priority_breakdown: PriorityBreakdown
    unassigned_tasks: int
    recent_activity: list[ActivityCount] = Field(default_factory=list)


__all__ = [
    "ActivityCount",
    "DashboardRead",
    "PriorityBreakdown",
    "RoleBreakdown",
    "StatusBreakdown",
]
