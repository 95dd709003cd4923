"""Task Service 도메인 서비스 레이어입니다. 비즈니스 규칙과 데이터 접근 흐름을 캡슐화합니다."""

from datetime import datetime
from decimal import ROUND_HALF_UP, Decimal
from typing import List

from fastapi import HTTPException
from sqlalchemy.orm import Session

from eos_api.models.job import Job
from eos_api.models.task import Task
from eos_api.models.user import User
from eos_api.schemas.job import JobHierarchyOut
from eos_api.schemas.task import TaskCreate, TaskOut, TaskStats, TaskUpdate
from eos_api.services.job_service import load_job_tree, resolve_job_lineage
from eos_api.utils.job_tree import JobLineage, JobTree
from eos_api.utils.permissions import can_modify_task, can_view_task, is_admin

PRIORITIES = ("low", "medium", "high")
STATUSES = ("plan", "in_progress", "completed")


def _validate_choice(value: str, choices, label: str) -> str:
    if value not in choices:
        raise HTTPException(status_code=400, detail=f"Invalid {label}. Allowed: {', '.join(choices)}")
    return value


def _ensure_job_exists(db: Session, job_id):
    if job_id is None:
        return
    if not db.query(Job.id).filter(Job.id == job_id).first():
        raise HTTPException(status_code=400, detail="Job not found")


def _with_hierarchy(task: Task, lineage: JobLineage) -> TaskOut:
    return TaskOut.model_validate(task).model_copy(
        update={"job_hierarchy": JobHierarchyOut(**lineage.as_dict())}
    )


def to_out(task: Task, tree: JobTree) -> TaskOut:
    return _with_hierarchy(task, tree.resolve(task.job_id))


def task_out(db: Session, task: Task) -> TaskOut:
    return _with_hierarchy(task, resolve_job_lineage(db, task.job_id))


def get_tasks(db: Session, current_user: User) -> List[TaskOut]:
    q = db.query(Task)
    if not is_admin(current_user):
        if current_user.department_id is None:
            q = q.filter(Task.user_id == current_user.id)
        else:
            q = q.join(User, Task.user_id == User.id).filter(
                User.department_id == current_user.department_id
            )
    tasks = q.order_by(Task.created_at.desc(), Task.id.desc()).all()
    tree = load_job_tree(db)
    return [to_out(task, tree) for task in tasks]


def get_task(db: Session, task_id: int, current_user: User) -> Task:
    task = db.query(Task).filter(Task.id == task_id).first()
    if not task:
        raise HTTPException(status_code=404, detail="Task not found")
    if not can_view_task(current_user, task):
        raise HTTPException(status_code=403, detail="Unauthorized")
    return task


def create_task(db: Session, data: TaskCreate, current_user: User) -> Task:
    title = (data.title or "").strip()
    if not title:
        raise HTTPException(status_code=400, detail="Title is required")

    # 관리자는 다른 사용자에게 배정할 수 있고, 그 외에는 본인 태스크로 생성된다.
    owner_id = current_user.id
    if is_admin(current_user) and data.user_id:
        if not db.query(User.id).filter(User.id == data.user_id).first():
            raise HTTPException(status_code=400, detail="Assigned user not found")
        owner_id = data.user_id

    status = _validate_choice(data.status or "plan", STATUSES, "status")
    priority = _validate_choice(data.priority or "medium", PRIORITIES, "priority")
    job_id = data.job_id or None
    _ensure_job_exists(db, job_id)

    task = Task(
        user_id=owner_id,
        title=title,
        description=data.description or "",
        priority=priority,
        category=data.category or "General",
        due_date=data.due_date,
        status=status,
        job_id=job_id,
        plan_by=current_user.id,
    )
    if status == "completed":
        task.completed_by = current_user.id
        task.completed_date = datetime.utcnow()
    db.add(task)
    db.commit()
    db.refresh(task)
    return task


def update_task(db: Session, task_id: int, data: TaskUpdate, current_user: User) -> Task:
    task = db.query(Task).filter(Task.id == task_id).first()
    if not task:
        raise HTTPException(status_code=404, detail="Task not found")
    if not can_modify_task(current_user, task):
        raise HTTPException(status_code=403, detail="Unauthorized")

    updates = data.model_dump(exclude_unset=True)
    if not updates:
        raise HTTPException(status_code=400, detail="No fields to update")

    if "title" in updates:
        updates["title"] = (updates["title"] or "").strip()
        if not updates["title"]:
            raise HTTPException(status_code=400, detail="Title is required")
    if "priority" in updates:
        _validate_choice(updates["priority"], PRIORITIES, "priority")
    if "job_id" in updates:
        updates["job_id"] = updates["job_id"] or None
        _ensure_job_exists(db, updates["job_id"])
    if "status" in updates:
        new_status = _validate_choice(updates["status"], STATUSES, "status")
        if new_status == "completed" and task.status != "completed":
            updates["completed_by"] = current_user.id
            updates["completed_date"] = datetime.utcnow()
        elif new_status != "completed" and task.status == "completed":
            updates["completed_by"] = None
            updates["completed_date"] = None

    for k, v in updates.items():
        setattr(task, k, v)
    db.commit()
    db.refresh(task)
    return task


def delete_task(db: Session, task_id: int, current_user: User):
    task = db.query(Task).filter(Task.id == task_id).first()
    if not task:
        raise HTTPException(status_code=404, detail="Task not found")
    if not can_modify_task(current_user, task):
        raise HTTPException(status_code=403, detail="Unauthorized")
    db.delete(task)
    db.commit()


def get_stats(db: Session) -> TaskStats:
    rows = db.query(Task.status, Task.priority).all()
    stats = TaskStats(total_tasks=len(rows))
    for status, priority in rows:
        if status == "plan":
            stats.plan_count += 1
        elif status == "in_progress":
            stats.in_progress_count += 1
        elif status == "completed":
            stats.completed_count += 1

        if priority == "high":
            stats.high_priority_count += 1
        elif priority == "medium":
            stats.medium_priority_count += 1
        elif priority == "low":
            stats.low_priority_count += 1

    if stats.total_tasks:
        rate = Decimal(stats.completed_count * 100) / Decimal(stats.total_tasks)
        stats.completion_rate = int(rate.quantize(Decimal("1"), rounding=ROUND_HALF_UP))
    return stats
