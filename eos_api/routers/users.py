"""Users 기능 API 라우터입니다. 요청을 검증하고 서비스 레이어로 비즈니스 로직을 위임합니다."""

from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from eos_api.database import get_db
from eos_api.middleware.auth_middleware import get_current_user, require_roles
from eos_api.models.user import User
from eos_api.schemas.user import UserCreate, UserListResponse, UserOut, UserResponse, UserUpdate
from eos_api.services import user_service

router = APIRouter(prefix="/api/users", tags=["users"])


@router.get("", response_model=UserListResponse)
def list_users(
    db: Session = Depends(get_db),
    _current_user: User = Depends(require_roles("admin")),
):
    return UserListResponse(users=[UserOut.model_validate(u) for u in user_service.list_users(db)])


@router.get("/{user_id}", response_model=UserResponse)
def get_user(
    user_id: int,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    user = user_service.get_user(db, user_id, current_user)
    return UserResponse(user=UserOut.model_validate(user))


@router.post("", response_model=UserResponse, status_code=status.HTTP_201_CREATED)
def create_user(
    data: UserCreate,
    db: Session = Depends(get_db),
    _current_user: User = Depends(require_roles("admin")),
):
    user = user_service.create_user(db, data)
    return UserResponse(message="User created successfully", user=UserOut.model_validate(user))


@router.put("/{user_id}", response_model=UserResponse)
def update_user(
    user_id: int,
    data: UserUpdate,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    user = user_service.update_user(db, user_id, data, current_user)
    return UserResponse(message="User updated successfully", user=UserOut.model_validate(user))


@router.delete("/{user_id}")
def delete_user(
    user_id: int,
    db: Session = Depends(get_db),
    current_user: User = Depends(require_roles("admin")),
):
    user_service.delete_user(db, user_id, current_user)
    return {"success": True, "message": "User deleted successfully"}
