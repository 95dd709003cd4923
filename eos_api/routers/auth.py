"""Auth 기능 API 라우터입니다. 요청을 검증하고 서비스 레이어로 비즈니스 로직을 위임합니다."""

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session
from eos_api.database import get_db
from eos_api.schemas.user import LoginRequest, TokenResponse, UserOut, UserResponse
from eos_api.services import auth_service
from eos_api.middleware.auth_middleware import get_current_user
from eos_api.models.user import User

router = APIRouter(prefix="/api/auth", tags=["auth"])


@router.post("/login", response_model=TokenResponse)
def login(request: LoginRequest, db: Session = Depends(get_db)):
    user = auth_service.login(db, request.login_id, request.password)
    token = auth_service.create_access_token(user)
    return TokenResponse(token=token, user=UserOut.model_validate(user))


@router.get("/me", response_model=UserResponse)
def me(current_user: User = Depends(get_current_user)):
    return UserResponse(user=UserOut.model_validate(current_user))
