"""Comment Service 도메인 서비스 레이어입니다. 태스크 댓글 조회/작성/삭제 권한을 검사합니다."""

from typing import List

from fastapi import HTTPException
from sqlalchemy.orm import Session

from eos_api.models.comment import Comment
from eos_api.models.task import Task
from eos_api.models.user import User
from eos_api.utils.permissions import can_delete_comment, can_view_task


def _get_accessible_task(db: Session, task_id: int, current_user: User) -> Task:
    task = db.query(Task).filter(Task.id == task_id).first()
    if not task:
        raise HTTPException(status_code=404, detail="Task not found")
    if not can_view_task(current_user, task):
        raise HTTPException(status_code=403, detail="Access denied: Task from different department")
    return task


def get_comments(db: Session, task_id: int, current_user: User) -> List[Comment]:
    _get_accessible_task(db, task_id, current_user)
    return (
        db.query(Comment)
        .filter(Comment.task_id == task_id)
        .order_by(Comment.created_at.asc(), Comment.id.asc())
        .all()
    )


def add_comment(db: Session, task_id: int, comment_text: str, current_user: User) -> Comment:
    text = (comment_text or "").strip()
    if not text:
        raise HTTPException(status_code=400, detail="Comment text is required")
    _get_accessible_task(db, task_id, current_user)

    comment = Comment(task_id=task_id, user_id=current_user.id, comment_text=text)
    db.add(comment)
    db.commit()
    db.refresh(comment)
    return comment


def delete_comment(db: Session, comment_id: int, current_user: User):
    comment = db.query(Comment).filter(Comment.id == comment_id).first()
    if not comment:
        raise HTTPException(status_code=404, detail="Comment not found")
    if not can_delete_comment(current_user, comment):
        raise HTTPException(status_code=403, detail="Access denied: Not comment owner")
    db.delete(comment)
    db.commit()
