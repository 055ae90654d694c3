"""Translate service views into response schemas."""

from __future__ import annotations

from ..models import TaskPriority, TaskStatus, User, UserRole
from ..schemas import (
    ActivityCount,
    AdminUserSummary,
    CommentRead,
    DashboardRead,
    JwtResponse,
    PriorityBreakdown,
    RoleBreakdown,
    StatusBreakdown,
    TaskDetail,
    TaskRead,
    UserProfile,
    UserSummary,
)
from ..services import CommentView, DashboardStats, TaskDetailView, TaskView, UserStats


def map_user_summary(user: User | None) -> UserSummary | None:
    if user is None:
        return None
    return UserSummary.model_validate(user)


def map_profile(user: User) -> UserProfile:
    return UserProfile.model_validate(user)


def map_jwt(user: User, token: str | None = None) -> JwtResponse:
    return JwtResponse(
        token=token,
        id=user.id,
        username=user.username,
        email=user.email,
        nickname=user.nickname,
        avatar=user.avatar,
        role=user.role,
    )


def map_comment(view: CommentView) -> CommentRead:
    comment = view.comment
    author = map_user_summary(view.author)
    return CommentRead(
        id=comment.id,
        content=comment.content,
        task_id=comment.task_id,
        user=author,
        created_at=comment.created_at,
        updated_at=comment.updated_at,
    )


def map_task(view: TaskView) -> TaskRead:
    task = view.task
    return TaskRead(
        id=task.id,
        title=task.title,
        description=task.description,
        status=task.status,
        priority=task.priority,
        creator=map_user_summary(view.creator),
        assignee=map_user_summary(view.assignee),
        created_at=task.created_at,
        updated_at=task.updated_at,
        comment_count=view.comment_count,
    )


def map_task_detail(detail: TaskDetailView) -> TaskDetail:
    return TaskDetail(
        **map_task(detail.task).model_dump(),
        comments=[map_comment(comment) for comment in detail.comments],
    )


def map_user_stats(stats: UserStats) -> AdminUserSummary:
    user = stats.user
    return AdminUserSummary(
        id=user.id,
        username=user.username,
        email=user.email,
        nickname=user.nickname,
        avatar=user.avatar,
        role=user.role,
        created_at=user.created_at,
        last_active_at=user.updated_at,
        tasks_created=stats.tasks_created,
        tasks_assigned=stats.tasks_assigned,
        comments_count=stats.comments_count,
        is_active=user.is_active,
    )


def map_dashboard(stats: DashboardStats) -> DashboardRead:
    return DashboardRead(
        total_users=stats.total_users,
        total_tasks=stats.total_tasks,
        total_comments=stats.total_comments,
        user_role_breakdown=RoleBreakdown(
            admins=stats.users_by_role[UserRole.ADMIN],
            users=stats.users_by_role[UserRole.USER],
        ),
        task_status_breakdown=StatusBreakdown(
            todo=stats.tasks_by_status[TaskStatus.TODO],
            in_progress=stats.tasks_by_status[TaskStatus.IN_PROGRESS],
            done=stats.tasks_by_status[TaskStatus.DONE],
        ),
        task_priority_breakdown=PriorityBreakdown(
            high=stats.tasks_by_priority[TaskPriority.HIGH],
            medium=stats.tasks_by_priority[TaskPriority.MEDIUM],
            low=stats.tasks_by_priority[TaskPriority.LOW],
        ),
        unassigned_tasks=stats.unassigned_tasks,
        recent_activity=[
            ActivityCount(type=entry.type, message=entry.message, count=entry.count)
            for entry in stats.recent_activity
        ],
    )
