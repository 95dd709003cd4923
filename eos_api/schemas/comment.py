"""Comment 요청/응답 계약을 위한 Pydantic 스키마입니다."""

from pydantic import BaseModel
from typing import List, Optional
from datetime import datetime


class CommentCreate(BaseModel):
    comment_text: Optional[str] = None


class CommentOut(BaseModel):
    id: int
    task_id: int
    user_id: int
    comment_text: str
    created_at: Optional[datetime] = None
    user_name: Optional[str] = None

    model_config = {"from_attributes": True}


class CommentListResponse(BaseModel):
    comments: List[CommentOut]
    count: int


class CommentResponse(BaseModel):
    message: Optional[str] = None
    comment: CommentOut
