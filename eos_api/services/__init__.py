"""서비스 레이어 패키지 초기화 모듈입니다."""

from eos_api.services import (
    auth_service,
    user_service,
    department_service,
    job_service,
    task_service,
    comment_service,
)
