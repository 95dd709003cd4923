"""Auth Service 도메인 서비스 레이어입니다. 로그인, 비밀번호 해시, JWT 발급/검증을 담당합니다."""

import logging
from dataclasses import dataclass
from datetime import datetime, timedelta

import bcrypt
from fastapi import HTTPException, status
from jose import JWTError, jwt
from sqlalchemy.orm import Session

from eos_api.config import settings
from eos_api.models.user import User

logger = logging.getLogger(__name__)

ALGORITHM = "HS256"
INVALID_CREDENTIALS = "Invalid user ID or password"


@dataclass(frozen=True)
class Principal:
    id: int
    login_id: str
    role: str


def _password_bytes(password: str) -> bytes:
    # bcrypt는 72바이트까지만 사용한다.
    return password.encode("utf-8")[:72]


def hash_password(password: str) -> str:
    return bcrypt.hashpw(_password_bytes(password), bcrypt.gensalt(rounds=10)).decode("utf-8")


def verify_password(password: str, password_hash: str) -> bool:
    if not password or not password_hash:
        return False
    try:
        return bcrypt.checkpw(_password_bytes(password), password_hash.encode("utf-8"))
    except ValueError:
        # 해시 형식이 아닌 값이 저장된 경우
        return False


def create_access_token(user: User) -> str:
    expire = datetime.utcnow() + timedelta(minutes=settings.ACCESS_TOKEN_EXPIRE_MINUTES)
    payload = {
        "sub": str(user.id),
        "id": user.id,
        "login_id": user.login_id,
        "role": user.role,
        "exp": expire,
    }
    return jwt.encode(payload, settings.SECRET_KEY, algorithm=ALGORITHM)


def verify_token(token: str) -> Principal:
    try:
        payload = jwt.decode(token, settings.SECRET_KEY, algorithms=[ALGORITHM])
    except JWTError:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid or expired token",
        )
    sub = payload.get("sub")
    if sub is None or not str(sub).isdigit():
        raise HTTPException(status_code=401, detail="Invalid token payload")
    return Principal(id=int(sub), login_id=payload.get("login_id", ""), role=payload.get("role", ""))


def login(db: Session, login_id: str, password: str) -> User:
    if not (login_id or "").strip() or not password:
        raise HTTPException(status_code=400, detail="User ID and password required")

    user = db.query(User).filter(User.login_id == login_id.strip()).first()
    if not user or not user.is_active or not verify_password(password, user.password_hash):
        logger.info("Login failed for '%s'", login_id)
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail=INVALID_CREDENTIALS)
    return user
