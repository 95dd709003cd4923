import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from eos_api.database import Base, get_db
from eos_api.main import app
import eos_api.models  # noqa: F401
from eos_api.models.department import Department
from eos_api.models.user import User
from eos_api.services.auth_service import hash_password

TEST_DB_URL = "sqlite:///./test_eos.db"
DEFAULT_PASSWORD = "secret123"
PASSWORD_HASH = hash_password(DEFAULT_PASSWORD)

engine = create_engine(TEST_DB_URL, connect_args={"check_same_thread": False})
TestingSession = sessionmaker(autocommit=False, autoflush=False, bind=engine)


def override_get_db():
    db = TestingSession()
    try:
        yield db
    finally:
        db.close()


app.dependency_overrides[get_db] = override_get_db


@pytest.fixture(autouse=True)
def setup_db():
    Base.metadata.create_all(bind=engine)
    yield
    Base.metadata.drop_all(bind=engine)


@pytest.fixture
def db():
    db = TestingSession()
    try:
        yield db
    finally:
        db.close()


@pytest.fixture
def client():
    return TestClient(app)


@pytest.fixture
def seed_departments(db):
    departments = {
        "eng": Department(name="Engineering", code="ENG"),
        "design": Department(name="Design", code="DSN"),
    }
    for d in departments.values():
        db.add(d)
    db.commit()
    for d in departments.values():
        db.refresh(d)
    return departments


@pytest.fixture
def seed_users(db, seed_departments):
    eng_id = seed_departments["eng"].id
    design_id = seed_departments["design"].id
    users = {
        "admin": User(name="Admin", login_id="admin", password_hash=PASSWORD_HASH, role="admin"),
        "eng1": User(name="Budi", login_id="budi", password_hash=PASSWORD_HASH, role="user", department_id=eng_id),
        "eng2": User(name="Sari", login_id="sari", password_hash=PASSWORD_HASH, role="user", department_id=eng_id),
        "designer": User(name="Dewi", login_id="dewi", password_hash=PASSWORD_HASH, role="user", department_id=design_id),
        "loner": User(name="Rudi", login_id="rudi", password_hash=PASSWORD_HASH, role="user"),
    }
    for u in users.values():
        db.add(u)
    db.commit()
    for u in users.values():
        db.refresh(u)
    return users


def get_token(client, login_id: str, password: str = DEFAULT_PASSWORD) -> str:
    resp = client.post("/api/auth/login", json={"login_id": login_id, "password": password})
    assert resp.status_code == 200, resp.text
    return resp.json()["token"]


def auth_headers(client, login_id: str) -> dict:
    return {"Authorization": f"Bearer {get_token(client, login_id)}"}
