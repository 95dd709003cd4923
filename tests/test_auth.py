from jose import jwt

from eos_api.config import settings
from tests.conftest import DEFAULT_PASSWORD, auth_headers, get_token


def test_login_success(client, seed_users):
    resp = client.post("/api/auth/login", json={"login_id": "admin", "password": DEFAULT_PASSWORD})
    assert resp.status_code == 200
    data = resp.json()
    assert data["success"] is True
    assert "token" in data
    assert data["user"]["role"] == "admin"
    assert "password_hash" not in data["user"]


def test_token_carries_principal_claims(client, seed_users):
    token = get_token(client, "budi")
    payload = jwt.decode(token, settings.SECRET_KEY, algorithms=["HS256"])
    assert payload["sub"] == str(seed_users["eng1"].id)
    assert payload["login_id"] == "budi"
    assert payload["role"] == "user"
    assert "exp" in payload


def test_login_wrong_password(client, seed_users):
    resp = client.post("/api/auth/login", json={"login_id": "admin", "password": "nope"})
    assert resp.status_code == 401
    assert resp.json() == {"error": "Invalid user ID or password"}


def test_login_unknown_user(client, seed_users):
    resp = client.post("/api/auth/login", json={"login_id": "ghost", "password": DEFAULT_PASSWORD})
    assert resp.status_code == 401


def test_login_missing_fields(client, seed_users):
    resp = client.post("/api/auth/login", json={"login_id": "admin"})
    assert resp.status_code == 400
    assert "error" in resp.json()


def test_login_inactive_user(client, db, seed_users):
    seed_users["eng2"].is_active = False
    db.commit()
    resp = client.post("/api/auth/login", json={"login_id": "sari", "password": DEFAULT_PASSWORD})
    assert resp.status_code == 401


def test_me_authenticated(client, seed_users):
    headers = auth_headers(client, "budi")
    resp = client.get("/api/auth/me", headers=headers)
    assert resp.status_code == 200
    user = resp.json()["user"]
    assert user["login_id"] == "budi"
    assert user["department_name"] == "Engineering"


def test_me_unauthenticated(client):
    resp = client.get("/api/auth/me")
    assert resp.status_code == 401
    assert "error" in resp.json()


def test_me_invalid_token(client, seed_users):
    resp = client.get("/api/auth/me", headers={"Authorization": "Bearer not-a-token"})
    assert resp.status_code == 401


def test_health(client):
    resp = client.get("/api/health")
    assert resp.status_code == 200
    assert resp.json()["status"] == "ok"


def test_unknown_route(client):
    resp = client.get("/api/nope")
    assert resp.status_code == 404
    assert resp.json() == {"error": "Route not found"}
