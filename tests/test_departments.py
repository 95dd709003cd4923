from eos_api.models.job import Job
from tests.conftest import auth_headers


def test_list_departments_any_user(client, seed_users):
    headers = auth_headers(client, "budi")
    resp = client.get("/api/departments", headers=headers)
    assert resp.status_code == 200
    names = [d["name"] for d in resp.json()["departments"]]
    assert names == ["Design", "Engineering"]


def test_create_department(client, seed_users):
    headers = auth_headers(client, "admin")
    resp = client.post("/api/departments", headers=headers, json={"name": "Finance", "code": "FIN"})
    assert resp.status_code == 201, resp.text
    assert resp.json()["department"]["code"] == "FIN"


def test_create_department_requires_name(client, seed_users):
    headers = auth_headers(client, "admin")
    resp = client.post("/api/departments", headers=headers, json={"code": "X"})
    assert resp.status_code == 400
    assert resp.json() == {"error": "Department name is required"}


def test_create_department_duplicate_is_case_insensitive(client, seed_users):
    headers = auth_headers(client, "admin")
    resp = client.post("/api/departments", headers=headers, json={"name": "engineering"})
    assert resp.status_code == 409


def test_create_department_forbidden_for_user(client, seed_users):
    headers = auth_headers(client, "budi")
    resp = client.post("/api/departments", headers=headers, json={"name": "Ops"})
    assert resp.status_code == 403


def test_update_department(client, seed_users, seed_departments):
    headers = auth_headers(client, "admin")
    dept_id = seed_departments["design"].id
    resp = client.put(f"/api/departments/{dept_id}", headers=headers, json={"name": "Product Design"})
    assert resp.status_code == 200
    assert resp.json()["department"]["name"] == "Product Design"

    dup = client.put(f"/api/departments/{dept_id}", headers=headers, json={"name": "ENGINEERING"})
    assert dup.status_code == 409

    empty = client.put(f"/api/departments/{dept_id}", headers=headers, json={})
    assert empty.status_code == 400


def test_update_department_not_found(client, seed_users):
    headers = auth_headers(client, "admin")
    resp = client.put("/api/departments/999", headers=headers, json={"name": "X"})
    assert resp.status_code == 404


def test_delete_department_in_use_by_users(client, seed_users, seed_departments):
    headers = auth_headers(client, "admin")
    resp = client.delete(f"/api/departments/{seed_departments['eng'].id}", headers=headers)
    assert resp.status_code == 400
    assert resp.json() == {"error": "Department is in use by users"}


def test_delete_department_in_use_by_jobs(client, db, seed_users):
    headers = auth_headers(client, "admin")
    created = client.post("/api/departments", headers=headers, json={"name": "Ops"})
    dept_id = created.json()["department"]["id"]
    db.add(Job(category="Infra", department_id=dept_id))
    db.commit()

    resp = client.delete(f"/api/departments/{dept_id}", headers=headers)
    assert resp.status_code == 400
    assert resp.json() == {"error": "Department is in use by jobs"}


def test_delete_department_unused(client, seed_users):
    headers = auth_headers(client, "admin")
    created = client.post("/api/departments", headers=headers, json={"name": "Legal"})
    dept_id = created.json()["department"]["id"]

    resp = client.delete(f"/api/departments/{dept_id}", headers=headers)
    assert resp.status_code == 200
    assert client.get(f"/api/departments/{dept_id}", headers=headers).status_code == 404
