"""User Service 도메인 서비스 레이어입니다. 비즈니스 규칙과 데이터 접근 흐름을 캡슐화합니다."""

import logging

from fastapi import HTTPException
from sqlalchemy.orm import Session

from eos_api.models.department import Department
from eos_api.models.task import Task
from eos_api.models.user import User
from eos_api.schemas.user import UserCreate, UserUpdate
from eos_api.services.auth_service import hash_password
from eos_api.utils.permissions import ALL_ROLES, can_view_user, is_admin

logger = logging.getLogger(__name__)

SELF_EDITABLE_FIELDS = {"name", "password"}


def _normalize_role_or_raise(role: str) -> str:
    normalized = str(role or "").strip().lower()
    if normalized not in ALL_ROLES:
        raise HTTPException(status_code=400, detail="Invalid role")
    return normalized


def _ensure_department_exists(db: Session, department_id):
    if department_id is None:
        return
    if not db.query(Department).filter(Department.id == department_id).first():
        raise HTTPException(status_code=400, detail="Department not found")


def _ensure_login_id_available(db: Session, login_id: str, exclude_id: int = None):
    q = db.query(User).filter(User.login_id == login_id)
    if exclude_id is not None:
        q = q.filter(User.id != exclude_id)
    if q.first():
        raise HTTPException(status_code=409, detail="User ID already registered")


def list_users(db: Session):
    return db.query(User).order_by(User.created_at.desc(), User.id.desc()).all()


def get_user(db: Session, user_id: int, current_user: User) -> User:
    if not can_view_user(current_user, user_id):
        raise HTTPException(status_code=403, detail="Unauthorized")
    user = db.query(User).filter(User.id == user_id).first()
    if not user:
        raise HTTPException(status_code=404, detail="User not found")
    return user


def create_user(db: Session, data: UserCreate) -> User:
    name = (data.name or "").strip()
    login_id = (data.login_id or "").strip()
    if not name or not login_id or not data.password:
        raise HTTPException(status_code=400, detail="Name, user ID, and password required")

    role = _normalize_role_or_raise(data.role or "user")
    _ensure_login_id_available(db, login_id)
    _ensure_department_exists(db, data.department_id)

    user = User(
        name=name,
        login_id=login_id,
        password_hash=hash_password(data.password),
        role=role,
        department_id=data.department_id,
        is_active=True,
    )
    db.add(user)
    db.commit()
    db.refresh(user)
    logger.info("User %s created (role=%s)", user.login_id, user.role)
    return user


def update_user(db: Session, user_id: int, data: UserUpdate, current_user: User) -> User:
    fields = set(data.model_fields_set)
    if not is_admin(current_user):
        # 일반 사용자는 본인 프로필(이름/비밀번호)만 수정할 수 있다.
        if current_user.id != user_id or not fields <= SELF_EDITABLE_FIELDS:
            raise HTTPException(status_code=403, detail="Unauthorized")

    user = db.query(User).filter(User.id == user_id).first()
    if not user:
        raise HTTPException(status_code=404, detail="User not found")

    for field, label in (("name", "Name"), ("login_id", "User ID"), ("password", "Password")):
        if field in fields and not (getattr(data, field) or "").strip():
            raise HTTPException(status_code=400, detail=f"{label} cannot be empty")

    updates = {}
    if "name" in fields:
        updates["name"] = data.name.strip()
    if "login_id" in fields:
        login_id = data.login_id.strip()
        _ensure_login_id_available(db, login_id, exclude_id=user.id)
        updates["login_id"] = login_id
    if data.password:
        updates["password_hash"] = hash_password(data.password)
    if data.role:
        updates["role"] = _normalize_role_or_raise(data.role)
    if "department_id" in fields:
        _ensure_department_exists(db, data.department_id)
        updates["department_id"] = data.department_id
    if data.is_active is not None:
        updates["is_active"] = data.is_active

    if not updates:
        raise HTTPException(status_code=400, detail="No fields to update")

    for k, v in updates.items():
        setattr(user, k, v)
    db.commit()
    db.refresh(user)
    return user


def delete_user(db: Session, user_id: int, current_user: User):
    user = db.query(User).filter(User.id == user_id).first()
    if not user:
        raise HTTPException(status_code=404, detail="User not found")
    if user.id == current_user.id:
        raise HTTPException(status_code=400, detail="You cannot delete your own account")

    # 다른 사용자 소유 태스크의 작성자/완료자 기록은 남기고 참조만 해제한다.
    db.query(Task).filter(Task.plan_by == user.id, Task.user_id != user.id).update(
        {"plan_by": None}, synchronize_session=False
    )
    db.query(Task).filter(Task.completed_by == user.id, Task.user_id != user.id).update(
        {"completed_by": None}, synchronize_session=False
    )
    db.delete(user)
    db.commit()
    logger.info("User %s deleted", user_id)
