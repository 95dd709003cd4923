"""User 요청/응답 계약을 위한 Pydantic 스키마입니다."""

from pydantic import BaseModel
from typing import List, Optional
from datetime import datetime


class UserBase(BaseModel):
    name: str
    login_id: str
    role: str = "user"
    department_id: Optional[int] = None


class UserCreate(UserBase):
    password: str


class UserUpdate(BaseModel):
    name: Optional[str] = None
    login_id: Optional[str] = None
    password: Optional[str] = None
    role: Optional[str] = None
    department_id: Optional[int] = None
    is_active: Optional[bool] = None


class UserOut(UserBase):
    id: int
    department_name: Optional[str] = None
    is_active: bool
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    model_config = {"from_attributes": True}


class UserResponse(BaseModel):
    success: bool = True
    message: Optional[str] = None
    user: UserOut


class UserListResponse(BaseModel):
    success: bool = True
    users: List[UserOut]


class LoginRequest(BaseModel):
    login_id: Optional[str] = None
    password: Optional[str] = None


class TokenResponse(BaseModel):
    success: bool = True
    token: str
    token_type: str = "bearer"
    user: UserOut
