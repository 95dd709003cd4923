"""Permissions 관련 공용 유틸리티 헬퍼입니다."""

from eos_api.models.comment import Comment
from eos_api.models.task import Task
from eos_api.models.user import User


ADMIN = "admin"
USER = "user"

ALL_ROLES = (ADMIN, USER)


def is_admin(user: User) -> bool:
    return user.role == ADMIN


def same_department(user: User, other: User) -> bool:
    # 부서 미지정 사용자끼리는 같은 부서로 보지 않는다.
    if user.department_id is None or other is None:
        return False
    return user.department_id == other.department_id


def can_view_user(user: User, target_id: int) -> bool:
    return is_admin(user) or user.id == target_id


def can_view_task(user: User, task: Task) -> bool:
    if is_admin(user) or task.user_id == user.id:
        return True
    return same_department(user, task.owner)


def can_modify_task(user: User, task: Task) -> bool:
    return is_admin(user) or task.user_id == user.id or task.plan_by == user.id


def can_delete_comment(user: User, comment: Comment) -> bool:
    return is_admin(user) or comment.user_id == user.id
