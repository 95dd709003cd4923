"""Jobs 기능 API 라우터입니다. Job 계층 조회/관리와 연쇄 삭제를 노출합니다."""

from typing import Optional

from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from eos_api.database import get_db
from eos_api.middleware.auth_middleware import get_current_user, require_roles
from eos_api.models.user import User
from eos_api.schemas.job import (
    JobCreate,
    JobHierarchyResponse,
    JobListResponse,
    JobResponse,
    JobUpdate,
)
from eos_api.services import job_service

router = APIRouter(prefix="/api/jobs", tags=["jobs"])


@router.get("", response_model=JobListResponse)
def list_jobs(
    department_id: Optional[int] = None,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    return JobListResponse(jobs=job_service.get_jobs(db, current_user, department_id))


@router.get("/{job_id}", response_model=JobResponse)
def get_job(job_id: int, db: Session = Depends(get_db), current_user: User = Depends(get_current_user)):
    return JobResponse(job=job_service.get_job_out(db, job_id, current_user))


@router.get("/{job_id}/hierarchy", response_model=JobHierarchyResponse)
def get_job_hierarchy(job_id: int, db: Session = Depends(get_db), current_user: User = Depends(get_current_user)):
    job = job_service.get_job_out(db, job_id, current_user)
    return JobHierarchyResponse(
        job_id=job.id,
        level=job.level,
        job_type=job.job_type,
        hierarchy=job.hierarchy,
    )


@router.post("", response_model=JobResponse, status_code=status.HTTP_201_CREATED)
def create_job(
    data: JobCreate,
    db: Session = Depends(get_db),
    current_user: User = Depends(require_roles("admin")),
):
    job = job_service.create_job(db, data, current_user)
    return JobResponse(message="Job created successfully", job=job)


@router.put("/{job_id}", response_model=JobResponse)
def update_job(
    job_id: int,
    data: JobUpdate,
    db: Session = Depends(get_db),
    current_user: User = Depends(require_roles("admin")),
):
    job = job_service.update_job(db, job_id, data)
    return JobResponse(message="Job updated successfully", job=job)


@router.delete("/{job_id}")
def delete_job(
    job_id: int,
    db: Session = Depends(get_db),
    current_user: User = Depends(require_roles("admin")),
):
    result = job_service.delete_job(db, job_id)
    return {
        "success": True,
        "message": f"Job and {max(result.deleted_jobs - 1, 0)} child job(s) deleted successfully",
        "deletedJobs": result.deleted_jobs,
        "deletedJobIds": result.deleted_job_ids,
        "deletedTasks": result.deleted_tasks,
    }
