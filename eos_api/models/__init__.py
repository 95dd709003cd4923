"""SQLAlchemy 모델 패키지 초기화 모듈입니다."""

from eos_api.models.department import Department
from eos_api.models.user import User
from eos_api.models.job import Job
from eos_api.models.task import Task
from eos_api.models.comment import Comment

__all__ = [
    "Department",
    "User",
    "Job",
    "Task",
    "Comment",
]
