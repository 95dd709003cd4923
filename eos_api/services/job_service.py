"""Job Service 도메인 서비스 레이어입니다. 부서별 Job 계층 조회/수정과 하위 트리 연쇄 삭제를 담당합니다."""

import logging
from dataclasses import dataclass, field
from typing import List, Optional

from fastapi import HTTPException
from sqlalchemy import func, select
from sqlalchemy.orm import Session

from eos_api.models.comment import Comment
from eos_api.models.department import Department
from eos_api.models.job import Job
from eos_api.models.task import Task
from eos_api.models.user import User
from eos_api.schemas.job import JobCreate, JobHierarchyOut, JobOut, JobUpdate
from eos_api.utils.job_tree import JobLineage, JobTree, job_type_for_depth
from eos_api.utils.permissions import is_admin

logger = logging.getLogger(__name__)

DUPLICATE_CATEGORY = "This category name already exists in the selected department"
DUPLICATE_PARENT = "This parent name already exists under the selected category"
DUPLICATE_SUB_PARENT = "This sub-parent name already exists under the selected parent"


@dataclass
class CascadeResult:
    deleted_job_ids: List[int] = field(default_factory=list)
    deleted_tasks: int = 0

    @property
    def deleted_jobs(self) -> int:
        return len(self.deleted_job_ids)


def load_job_tree(db: Session) -> JobTree:
    return JobTree(db.query(Job.id, Job.parent, Job.category).order_by(Job.id).all())


def resolve_job_lineage(db: Session, job_id: Optional[int]) -> JobLineage:
    if job_id is None:
        return JobLineage()
    return load_job_tree(db).resolve(job_id)


def _to_out(job: Job, tree: JobTree) -> JobOut:
    level = tree.depth(job.id)
    return JobOut.model_validate(job).model_copy(update={
        "level": level,
        "job_type": job_type_for_depth(level),
        "hierarchy": JobHierarchyOut(**tree.resolve(job.id).as_dict()),
    })


def _visible_query(db: Session, current_user: User, department_id: Optional[int] = None):
    q = db.query(Job)
    if not is_admin(current_user) and current_user.department_id is not None:
        # 부서가 지정된 일반 사용자는 자기 부서 Job만 조회한다.
        return q.filter(Job.department_id == current_user.department_id)
    if department_id is not None:
        q = q.filter(Job.department_id == department_id)
    return q


def get_jobs(db: Session, current_user: User, department_id: Optional[int] = None) -> List[JobOut]:
    rows = {job.id: job for job in _visible_query(db, current_user, department_id).all()}
    tree = load_job_tree(db)
    ordered = [rows[item["id"]] for item in tree.flatten() if item["id"] in rows]
    return [_to_out(job, tree) for job in ordered]


def get_job(db: Session, job_id: int, current_user: User) -> Job:
    job = _visible_query(db, current_user).filter(Job.id == job_id).first()
    if not job:
        raise HTTPException(status_code=404, detail="Job not found or unauthorized")
    return job


def get_job_out(db: Session, job_id: int, current_user: User) -> JobOut:
    return _to_out(get_job(db, job_id, current_user), load_job_tree(db))


def _ensure_department_exists(db: Session, department_id: int):
    if not db.query(Department).filter(Department.id == department_id).first():
        raise HTTPException(status_code=400, detail="Department not found")


def _ensure_parent_exists(db: Session, parent_id: Optional[int]):
    if parent_id is None:
        return
    if not db.query(Job).filter(Job.id == parent_id).first():
        raise HTTPException(status_code=400, detail="Parent job not found")


def _ensure_unique_sibling(
    db: Session,
    category: str,
    parent_id: Optional[int],
    department_id: int,
    exclude_id: Optional[int] = None,
):
    q = db.query(Job.id).filter(
        func.lower(Job.category) == category.lower(),
        Job.department_id == department_id,
    )
    q = q.filter(Job.parent.is_(None)) if parent_id is None else q.filter(Job.parent == parent_id)
    if exclude_id is not None:
        q = q.filter(Job.id != exclude_id)
    if not q.first():
        return

    if parent_id is None:
        detail = DUPLICATE_CATEGORY
    else:
        parent = db.query(Job).filter(Job.id == parent_id).first()
        detail = DUPLICATE_PARENT if parent is not None and parent.parent is None else DUPLICATE_SUB_PARENT
    raise HTTPException(status_code=409, detail=detail)


def create_job(db: Session, data: JobCreate, current_user: User) -> JobOut:
    category = (data.category or "").strip()
    if not category:
        raise HTTPException(status_code=400, detail="Category is required")
    if not data.department_id:
        raise HTTPException(status_code=400, detail="Department is required")
    _ensure_department_exists(db, data.department_id)
    parent_id = data.parent or None
    _ensure_parent_exists(db, parent_id)
    _ensure_unique_sibling(db, category, parent_id, data.department_id)

    job = Job(
        user_id=current_user.id,
        category=category,
        parent=parent_id,
        sub_parent=data.sub_parent or None,
        department_id=data.department_id,
    )
    db.add(job)
    db.commit()
    db.refresh(job)
    return _to_out(job, load_job_tree(db))


def update_job(db: Session, job_id: int, data: JobUpdate) -> JobOut:
    job = db.query(Job).filter(Job.id == job_id).first()
    if not job:
        raise HTTPException(status_code=404, detail="Job not found or unauthorized")

    fields = data.model_fields_set & {"category", "parent", "sub_parent", "department_id"}
    if not fields:
        raise HTTPException(status_code=400, detail="No fields to update")

    new_category = job.category
    if "category" in fields:
        new_category = (data.category or "").strip()
        if not new_category:
            raise HTTPException(status_code=400, detail="Category is required")
    new_parent = (data.parent or None) if "parent" in fields else job.parent
    new_department_id = job.department_id
    if "department_id" in fields:
        if not data.department_id:
            raise HTTPException(status_code=400, detail="Department is required")
        _ensure_department_exists(db, data.department_id)
        new_department_id = data.department_id

    if "parent" in fields and new_parent is not None:
        _ensure_parent_exists(db, new_parent)
        subtree = {node.id for node in load_job_tree(db).descendants(job.id)}
        if new_parent == job.id or new_parent in subtree:
            raise HTTPException(status_code=400, detail="A job cannot be moved under itself or its descendants")

    _ensure_unique_sibling(db, new_category, new_parent, new_department_id, exclude_id=job.id)

    job.category = new_category
    job.parent = new_parent
    job.department_id = new_department_id
    if "sub_parent" in fields:
        job.sub_parent = data.sub_parent
    db.commit()
    db.refresh(job)
    return _to_out(job, load_job_tree(db))


def _collect_subtree_ids(db: Session, job_id: int) -> List[int]:
    """job_id부터 parent 참조를 따라 내려가며 전위 순서로 id를 모은다. 노드마다 한 번씩 조회한다."""
    ordered: List[int] = []
    visited = set()
    stack = [job_id]
    while stack:
        current = stack.pop()
        if current in visited:
            continue
        visited.add(current)
        ordered.append(current)
        child_ids = [
            row[0]
            for row in db.query(Job.id).filter(Job.parent == current).order_by(Job.id).all()
        ]
        stack.extend(reversed(child_ids))
    return ordered


def cascade_delete_job(db: Session, job_id: int) -> CascadeResult:
    """Job 하위 트리 전체와 이를 참조하는 태스크를 삭제합니다.

    이미 일부가 삭제된 트리에도 안전하게 동작하며, 없는 job_id는 빈 결과를 반환합니다.
    """
    subtree_ids = _collect_subtree_ids(db, job_id)
    logger.info("Jobs to delete (cascade): %s", subtree_ids)

    task_ids = select(Task.id).where(Task.job_id.in_(subtree_ids))
    db.query(Comment).filter(Comment.task_id.in_(task_ids)).delete(synchronize_session=False)
    deleted_tasks = db.query(Task).filter(Task.job_id.in_(subtree_ids)).delete(synchronize_session=False)

    removed = set()
    for current in reversed(subtree_ids):
        count = db.query(Job).filter(Job.id == current).delete(synchronize_session=False)
        if count:
            removed.add(current)
    db.commit()

    result = CascadeResult(
        deleted_job_ids=[jid for jid in subtree_ids if jid in removed],
        deleted_tasks=deleted_tasks or 0,
    )
    logger.info(
        "Cascade delete of job %s removed %d job(s) and %d task(s)",
        job_id, result.deleted_jobs, result.deleted_tasks,
    )
    return result


def delete_job(db: Session, job_id: int) -> CascadeResult:
    if not db.query(Job.id).filter(Job.id == job_id).first():
        raise HTTPException(status_code=404, detail="Job not found")
    return cascade_delete_job(db, job_id)
