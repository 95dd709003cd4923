"""Comments 기능 API 라우터입니다. 요청을 검증하고 서비스 레이어로 비즈니스 로직을 위임합니다."""

from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from eos_api.database import get_db
from eos_api.middleware.auth_middleware import get_current_user
from eos_api.models.user import User
from eos_api.schemas.comment import CommentCreate, CommentListResponse, CommentOut, CommentResponse
from eos_api.services import comment_service

router = APIRouter(prefix="/api/comments", tags=["comments"])


@router.get("/{task_id}", response_model=CommentListResponse)
def list_comments(task_id: int, db: Session = Depends(get_db), current_user: User = Depends(get_current_user)):
    rows = comment_service.get_comments(db, task_id, current_user)
    return CommentListResponse(comments=[CommentOut.model_validate(c) for c in rows], count=len(rows))


@router.post("/{task_id}", response_model=CommentResponse, status_code=status.HTTP_201_CREATED)
def add_comment(
    task_id: int,
    data: CommentCreate,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    comment = comment_service.add_comment(db, task_id, data.comment_text, current_user)
    return CommentResponse(message="Comment added successfully", comment=CommentOut.model_validate(comment))


@router.delete("/{comment_id}")
def delete_comment(comment_id: int, db: Session = Depends(get_db), current_user: User = Depends(get_current_user)):
    comment_service.delete_comment(db, comment_id, current_user)
    return {"message": "Comment deleted successfully"}
