from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session
from eos_api.database import get_db
from eos_api.schemas.task import TaskCreate, TaskUpdate, TaskListResponse, TaskResponse, TaskStatsResponse
from eos_api.services import task_service
from eos_api.middleware.auth_middleware import get_current_user, require_roles
from eos_api.models.user import User

router = APIRouter(prefix="/api/tasks", tags=["tasks"])


@router.get("", response_model=TaskListResponse)
def list_tasks(db: Session = Depends(get_db), current_user: User = Depends(get_current_user)):
    return TaskListResponse(tasks=task_service.get_tasks(db, current_user))


@router.get("/stats/overview", response_model=TaskStatsResponse)
def task_stats(db: Session = Depends(get_db), current_user: User = Depends(require_roles("admin"))):
    return TaskStatsResponse(stats=task_service.get_stats(db))


@router.post("", response_model=TaskResponse, status_code=status.HTTP_201_CREATED)
def create_task(
    data: TaskCreate,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    task = task_service.create_task(db, data, current_user)
    return TaskResponse(message="Task created successfully", task=task_service.task_out(db, task))


@router.get("/{task_id}", response_model=TaskResponse)
def get_task(task_id: int, db: Session = Depends(get_db), current_user: User = Depends(get_current_user)):
    task = task_service.get_task(db, task_id, current_user)
    return TaskResponse(task=task_service.task_out(db, task))


@router.put("/{task_id}", response_model=TaskResponse)
def update_task(
    task_id: int,
    data: TaskUpdate,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    task = task_service.update_task(db, task_id, data, current_user)
    return TaskResponse(message="Task updated successfully", task=task_service.task_out(db, task))


@router.delete("/{task_id}")
def delete_task(task_id: int, db: Session = Depends(get_db), current_user: User = Depends(get_current_user)):
    task_service.delete_task(db, task_id, current_user)
    return {"success": True, "message": "Task deleted successfully"}
