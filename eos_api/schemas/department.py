"""Department 요청/응답 계약을 위한 Pydantic 스키마입니다."""

from pydantic import BaseModel
from typing import List, Optional
from datetime import datetime


class DepartmentCreate(BaseModel):
    name: Optional[str] = None
    code: Optional[str] = None


class DepartmentUpdate(BaseModel):
    name: Optional[str] = None
    code: Optional[str] = None


class DepartmentOut(BaseModel):
    id: int
    name: str
    code: Optional[str] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    model_config = {"from_attributes": True}


class DepartmentResponse(BaseModel):
    success: bool = True
    department: DepartmentOut


class DepartmentListResponse(BaseModel):
    success: bool = True
    departments: List[DepartmentOut]
