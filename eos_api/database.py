"""DB 엔진/세션 핸들입니다. 애플리케이션 시작 시 생성되고 종료 시 정리됩니다."""

import logging
from typing import Generator, Optional

from fastapi import Request
from sqlalchemy import create_engine
from sqlalchemy.engine import Engine
from sqlalchemy.orm import Session, declarative_base, sessionmaker

from eos_api.config import settings

logger = logging.getLogger(__name__)

Base = declarative_base()


class Database:
    """프로세스당 하나의 커넥션 풀과 세션 팩토리를 보관합니다."""

    def __init__(self, url: str):
        self.url = url
        kwargs = {"pool_pre_ping": True}
        if url.startswith("sqlite"):
            kwargs["connect_args"] = {"check_same_thread": False}
        else:
            kwargs["pool_size"] = settings.DB_POOL_SIZE
            kwargs["max_overflow"] = settings.DB_MAX_OVERFLOW
        self.engine: Engine = create_engine(url, **kwargs)
        self.SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=self.engine)

    def create_all(self) -> None:
        import eos_api.models  # noqa: F401 - 모델 import로 metadata 등록
        Base.metadata.create_all(bind=self.engine)

    def session(self) -> Generator[Session, None, None]:
        db = self.SessionLocal()
        try:
            yield db
        finally:
            db.close()

    def dispose(self) -> None:
        self.engine.dispose()
        logger.info("Database connection pool closed")


def get_db(request: Request) -> Generator[Session, None, None]:
    database: Optional[Database] = getattr(request.app.state, "database", None)
    if database is None:
        raise RuntimeError("Database not initialized")
    yield from database.session()
