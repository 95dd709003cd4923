"""Task 도메인의 SQLAlchemy 모델 정의입니다."""

from sqlalchemy import Column, Integer, String, Text, DateTime, ForeignKey, Index
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func
from eos_api.database import Base


class Task(Base):
    __tablename__ = "tasks"

    id = Column(Integer, primary_key=True, autoincrement=True)
    user_id = Column(Integer, ForeignKey("users.id", ondelete="CASCADE"), nullable=False)
    title = Column(String(255), nullable=False)
    description = Column(Text)
    priority = Column(String(50), default="medium")  # high/medium/low
    category = Column(String(100), default="General")
    due_date = Column(DateTime)
    status = Column(String(50), default="plan")  # plan/in_progress/completed
    job_id = Column(Integer, ForeignKey("jobs.id"), nullable=True)
    plan_by = Column(Integer, ForeignKey("users.id"), nullable=True)
    completed_by = Column(Integer, ForeignKey("users.id"), nullable=True)
    completed_date = Column(DateTime)
    created_at = Column(DateTime, server_default=func.now())
    updated_at = Column(DateTime, server_default=func.now(), onupdate=func.now())

    owner = relationship("User", foreign_keys=[user_id], back_populates="tasks")
    planner = relationship("User", foreign_keys=[plan_by])
    completer = relationship("User", foreign_keys=[completed_by])
    job = relationship("Job")
    comments = relationship("Comment", back_populates="task", cascade="all, delete-orphan")

    @property
    def user_name(self):
        return self.owner.name if self.owner else None

    @property
    def plan_by_name(self):
        return self.planner.name if self.planner else None

    @property
    def completed_by_name(self):
        return self.completer.name if self.completer else None

    @property
    def comment_count(self):
        return len(self.comments)

    __table_args__ = (
        Index("idx_task_user", "user_id"),
        Index("idx_task_job", "job_id"),
        Index("idx_task_status", "status"),
    )
