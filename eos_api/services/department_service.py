"""Department Service 도메인 서비스 레이어입니다. 비즈니스 규칙과 데이터 접근 흐름을 캡슐화합니다."""

from fastapi import HTTPException
from sqlalchemy import func
from sqlalchemy.orm import Session

from eos_api.models.department import Department
from eos_api.models.job import Job
from eos_api.models.user import User
from eos_api.schemas.department import DepartmentCreate, DepartmentUpdate

DUPLICATE_NAME = "A department with this name already exists"


def _ensure_name_available(db: Session, name: str, exclude_id: int = None):
    q = db.query(Department).filter(func.lower(Department.name) == name.lower())
    if exclude_id is not None:
        q = q.filter(Department.id != exclude_id)
    if q.first():
        raise HTTPException(status_code=409, detail=DUPLICATE_NAME)


def get_departments(db: Session):
    return db.query(Department).order_by(Department.name).all()


def get_department(db: Session, department_id: int) -> Department:
    department = db.query(Department).filter(Department.id == department_id).first()
    if not department:
        raise HTTPException(status_code=404, detail="Department not found")
    return department


def create_department(db: Session, data: DepartmentCreate) -> Department:
    name = (data.name or "").strip()
    if not name:
        raise HTTPException(status_code=400, detail="Department name is required")
    _ensure_name_available(db, name)
    department = Department(name=name, code=(data.code or "").strip() or None)
    db.add(department)
    db.commit()
    db.refresh(department)
    return department


def update_department(db: Session, department_id: int, data: DepartmentUpdate) -> Department:
    department = get_department(db, department_id)
    fields = data.model_fields_set
    if not fields & {"name", "code"}:
        raise HTTPException(status_code=400, detail="No fields to update")

    if "name" in fields:
        name = (data.name or "").strip()
        if not name:
            raise HTTPException(status_code=400, detail="Department name is required")
        _ensure_name_available(db, name, exclude_id=department.id)
        department.name = name
    if "code" in fields:
        department.code = (data.code or "").strip() or None
    db.commit()
    db.refresh(department)
    return department


def delete_department(db: Session, department_id: int):
    department = get_department(db, department_id)
    if db.query(User.id).filter(User.department_id == department.id).first():
        raise HTTPException(status_code=400, detail="Department is in use by users")
    if db.query(Job.id).filter(Job.department_id == department.id).first():
        raise HTTPException(status_code=400, detail="Department is in use by jobs")
    db.delete(department)
    db.commit()
