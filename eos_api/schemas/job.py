"""Job 요청/응답 계약을 위한 Pydantic 스키마입니다."""

from pydantic import BaseModel
from typing import List, Optional
from datetime import datetime


class JobHierarchyOut(BaseModel):
    category: str = "-"
    parent: str = "-"
    subParent: str = "-"


class JobCreate(BaseModel):
    category: Optional[str] = None
    parent: Optional[int] = None
    sub_parent: Optional[str] = None
    department_id: Optional[int] = None


class JobUpdate(BaseModel):
    category: Optional[str] = None
    parent: Optional[int] = None
    sub_parent: Optional[str] = None
    department_id: Optional[int] = None


class JobOut(BaseModel):
    id: int
    user_id: Optional[int] = None
    category: str
    parent: Optional[int] = None
    sub_parent: Optional[str] = None
    department_id: Optional[int] = None
    department_name: Optional[str] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None
    level: int = 0
    job_type: str = "Category"
    hierarchy: JobHierarchyOut = JobHierarchyOut()

    model_config = {"from_attributes": True}


class JobResponse(BaseModel):
    success: bool = True
    message: Optional[str] = None
    job: JobOut


class JobListResponse(BaseModel):
    success: bool = True
    jobs: List[JobOut]


class JobHierarchyResponse(BaseModel):
    success: bool = True
    job_id: int
    level: int
    job_type: str
    hierarchy: JobHierarchyOut
