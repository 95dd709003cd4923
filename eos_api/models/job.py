"""Job 도메인의 SQLAlchemy 모델 정의입니다.

category/parent/sub-parent 계층은 parent 자기참조 체인의 깊이로만 결정됩니다.
sub_parent 컬럼은 레거시 라벨로 저장/응답에만 쓰입니다.
"""

from sqlalchemy import Column, Integer, String, DateTime, ForeignKey, Index
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func
from eos_api.database import Base


class Job(Base):
    __tablename__ = "jobs"

    id = Column(Integer, primary_key=True, autoincrement=True)
    user_id = Column(Integer, ForeignKey("users.id", ondelete="SET NULL"), nullable=True)
    category = Column(String(100), nullable=False)
    parent = Column(Integer, ForeignKey("jobs.id"), nullable=True)
    sub_parent = Column(String(100))
    department_id = Column(Integer, ForeignKey("departments.id"), nullable=False)
    created_at = Column(DateTime, server_default=func.now())
    updated_at = Column(DateTime, server_default=func.now(), onupdate=func.now())

    department = relationship("Department", back_populates="jobs")
    creator = relationship("User", back_populates="jobs_created")

    @property
    def department_name(self):
        return self.department.name if self.department else None

    __table_args__ = (
        Index("idx_job_parent", "parent"),
        Index("idx_job_department", "department_id"),
    )
