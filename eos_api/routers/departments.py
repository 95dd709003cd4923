"""Departments 기능 API 라우터입니다."""

from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from eos_api.database import get_db
from eos_api.middleware.auth_middleware import get_current_user, require_roles
from eos_api.models.user import User
from eos_api.schemas.department import (
    DepartmentCreate,
    DepartmentListResponse,
    DepartmentOut,
    DepartmentResponse,
    DepartmentUpdate,
)
from eos_api.services import department_service

router = APIRouter(prefix="/api/departments", tags=["departments"])


@router.get("", response_model=DepartmentListResponse)
def list_departments(db: Session = Depends(get_db), current_user: User = Depends(get_current_user)):
    rows = department_service.get_departments(db)
    return DepartmentListResponse(departments=[DepartmentOut.model_validate(d) for d in rows])


@router.get("/{department_id}", response_model=DepartmentResponse)
def get_department(department_id: int, db: Session = Depends(get_db), current_user: User = Depends(get_current_user)):
    department = department_service.get_department(db, department_id)
    return DepartmentResponse(department=DepartmentOut.model_validate(department))


@router.post("", response_model=DepartmentResponse, status_code=status.HTTP_201_CREATED)
def create_department(
    data: DepartmentCreate,
    db: Session = Depends(get_db),
    current_user: User = Depends(require_roles("admin")),
):
    department = department_service.create_department(db, data)
    return DepartmentResponse(department=DepartmentOut.model_validate(department))


@router.put("/{department_id}", response_model=DepartmentResponse)
def update_department(
    department_id: int,
    data: DepartmentUpdate,
    db: Session = Depends(get_db),
    current_user: User = Depends(require_roles("admin")),
):
    department = department_service.update_department(db, department_id, data)
    return DepartmentResponse(department=DepartmentOut.model_validate(department))


@router.delete("/{department_id}")
def delete_department(
    department_id: int,
    db: Session = Depends(get_db),
    current_user: User = Depends(require_roles("admin")),
):
    department_service.delete_department(db, department_id)
    return {"success": True}
