"""Task 요청/응답 계약을 위한 Pydantic 스키마입니다."""

from pydantic import BaseModel
from typing import List, Optional
from datetime import datetime

from eos_api.schemas.job import JobHierarchyOut


class TaskBase(BaseModel):
    title: Optional[str] = None
    description: Optional[str] = None
    priority: str = "medium"
    category: Optional[str] = None
    due_date: Optional[datetime] = None
    status: str = "plan"
    job_id: Optional[int] = None


class TaskCreate(TaskBase):
    user_id: Optional[int] = None


class TaskUpdate(BaseModel):
    title: Optional[str] = None
    description: Optional[str] = None
    priority: Optional[str] = None
    category: Optional[str] = None
    due_date: Optional[datetime] = None
    status: Optional[str] = None
    job_id: Optional[int] = None


class TaskOut(BaseModel):
    id: int
    user_id: int
    title: str
    description: Optional[str] = None
    priority: Optional[str] = None
    category: Optional[str] = None
    due_date: Optional[datetime] = None
    status: Optional[str] = None
    job_id: Optional[int] = None
    plan_by: Optional[int] = None
    completed_by: Optional[int] = None
    completed_date: Optional[datetime] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None
    user_name: Optional[str] = None
    plan_by_name: Optional[str] = None
    completed_by_name: Optional[str] = None
    comment_count: int = 0
    job_hierarchy: JobHierarchyOut = JobHierarchyOut()

    model_config = {"from_attributes": True}


class TaskResponse(BaseModel):
    success: bool = True
    message: Optional[str] = None
    task: TaskOut


class TaskListResponse(BaseModel):
    success: bool = True
    tasks: List[TaskOut]


class TaskStats(BaseModel):
    total_tasks: int = 0
    plan_count: int = 0
    in_progress_count: int = 0
    completed_count: int = 0
    high_priority_count: int = 0
    medium_priority_count: int = 0
    low_priority_count: int = 0
    completion_rate: int = 0


class TaskStatsResponse(BaseModel):
    success: bool = True
    stats: TaskStats
