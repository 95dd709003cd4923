"""User 도메인의 SQLAlchemy 모델 정의입니다."""

from sqlalchemy import Column, Integer, String, Boolean, DateTime, Text, ForeignKey
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func
from eos_api.database import Base


class User(Base):
    __tablename__ = "users"

    id = Column(Integer, primary_key=True, autoincrement=True)
    name = Column(String(255), nullable=False)
    login_id = Column(String(255), unique=True, nullable=False)
    password_hash = Column(Text, nullable=False)
    role = Column(String(50), nullable=False, default="user")  # admin/user
    department_id = Column(Integer, ForeignKey("departments.id", ondelete="SET NULL"), nullable=True)
    is_active = Column(Boolean, default=True)
    created_at = Column(DateTime, server_default=func.now())
    updated_at = Column(DateTime, server_default=func.now(), onupdate=func.now())

    # Relationships
    department = relationship("Department", back_populates="users")
    tasks = relationship(
        "Task",
        foreign_keys="Task.user_id",
        back_populates="owner",
        cascade="all, delete-orphan",
    )
    comments = relationship("Comment", back_populates="author", cascade="all, delete-orphan")
    jobs_created = relationship("Job", back_populates="creator")

    @property
    def department_name(self):
        return self.department.name if self.department else None
