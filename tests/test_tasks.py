"""태스크 API의 부서 범위 조회, 완료 상태 전이, 통계를 검증하는 테스트입니다."""

from eos_api.models.job import Job
from eos_api.models.task import Task
from tests.conftest import auth_headers


def _create_task(client, headers, **payload):
    payload.setdefault("title", "Write report")
    resp = client.post("/api/tasks", headers=headers, json=payload)
    assert resp.status_code == 201, resp.text
    return resp.json()["task"]


def test_create_task_defaults(client, seed_users):
    headers = auth_headers(client, "budi")
    task = _create_task(client, headers)
    assert task["status"] == "plan"
    assert task["priority"] == "medium"
    assert task["category"] == "General"
    assert task["user_id"] == seed_users["eng1"].id
    assert task["plan_by"] == seed_users["eng1"].id
    assert task["user_name"] == "Budi"
    assert task["completed_by"] is None
    assert task["job_hierarchy"] == {"category": "-", "parent": "-", "subParent": "-"}


def test_create_task_requires_title(client, seed_users):
    headers = auth_headers(client, "budi")
    resp = client.post("/api/tasks", headers=headers, json={"title": "   "})
    assert resp.status_code == 400
    assert resp.json() == {"error": "Title is required"}


def test_create_task_rejects_invalid_choices(client, seed_users):
    headers = auth_headers(client, "budi")
    assert client.post("/api/tasks", headers=headers, json={"title": "A", "priority": "urgent"}).status_code == 400
    assert client.post("/api/tasks", headers=headers, json={"title": "A", "status": "done"}).status_code == 400
    assert client.post("/api/tasks", headers=headers, json={"title": "A", "job_id": 999}).status_code == 400


def test_admin_assigns_task_to_user(client, seed_users):
    headers = auth_headers(client, "admin")
    task = _create_task(client, headers, user_id=seed_users["designer"].id)
    assert task["user_id"] == seed_users["designer"].id
    assert task["plan_by"] == seed_users["admin"].id
    assert task["plan_by_name"] == "Admin"

    resp = client.post("/api/tasks", headers=headers, json={"title": "X", "user_id": 9999})
    assert resp.status_code == 400


def test_user_cannot_assign_to_others(client, seed_users):
    headers = auth_headers(client, "budi")
    task = _create_task(client, headers, user_id=seed_users["eng2"].id)
    assert task["user_id"] == seed_users["eng1"].id


def test_create_completed_task_sets_completion(client, seed_users):
    headers = auth_headers(client, "budi")
    task = _create_task(client, headers, status="completed")
    assert task["completed_by"] == seed_users["eng1"].id
    assert task["completed_by_name"] == "Budi"
    assert task["completed_date"] is not None


def test_task_carries_job_hierarchy(client, db, seed_users, seed_departments):
    eng = seed_departments["eng"].id
    root = Job(category="Eng", department_id=eng)
    db.add(root)
    db.commit()
    child = Job(category="Backend", department_id=eng, parent=root.id)
    db.add(child)
    db.commit()

    headers = auth_headers(client, "budi")
    task = _create_task(client, headers, job_id=child.id)
    assert task["job_hierarchy"] == {"category": "Eng", "parent": "Backend", "subParent": "-"}

    listed = client.get("/api/tasks", headers=headers).json()["tasks"]
    assert listed[0]["job_hierarchy"]["parent"] == "Backend"


def test_list_tasks_scoped_by_department(client, db, seed_users):
    db.add_all([
        Task(user_id=seed_users["eng1"].id, plan_by=seed_users["eng1"].id, title="Budi task"),
        Task(user_id=seed_users["eng2"].id, plan_by=seed_users["eng2"].id, title="Sari task"),
        Task(user_id=seed_users["designer"].id, plan_by=seed_users["designer"].id, title="Dewi task"),
        Task(user_id=seed_users["loner"].id, plan_by=seed_users["loner"].id, title="Rudi task"),
    ])
    db.commit()

    eng = client.get("/api/tasks", headers=auth_headers(client, "budi")).json()["tasks"]
    assert {t["title"] for t in eng} == {"Budi task", "Sari task"}

    design = client.get("/api/tasks", headers=auth_headers(client, "dewi")).json()["tasks"]
    assert {t["title"] for t in design} == {"Dewi task"}

    loner = client.get("/api/tasks", headers=auth_headers(client, "rudi")).json()["tasks"]
    assert {t["title"] for t in loner} == {"Rudi task"}

    admin = client.get("/api/tasks", headers=auth_headers(client, "admin")).json()["tasks"]
    assert len(admin) == 4


def test_list_tasks_newest_first(client, seed_users):
    headers = auth_headers(client, "budi")
    first = _create_task(client, headers, title="First")
    second = _create_task(client, headers, title="Second")
    ids = [t["id"] for t in client.get("/api/tasks", headers=headers).json()["tasks"]]
    assert ids == [second["id"], first["id"]]


def test_get_task_other_department_forbidden(client, seed_users):
    task = _create_task(client, auth_headers(client, "dewi"))
    resp = client.get(f"/api/tasks/{task['id']}", headers=auth_headers(client, "budi"))
    assert resp.status_code == 403

    same_dept = _create_task(client, auth_headers(client, "sari"))
    assert client.get(f"/api/tasks/{same_dept['id']}", headers=auth_headers(client, "budi")).status_code == 200

    assert client.get("/api/tasks/999", headers=auth_headers(client, "budi")).status_code == 404


def test_status_transitions_manage_completion_fields(client, seed_users):
    headers = auth_headers(client, "budi")
    task = _create_task(client, headers)

    done = client.put(f"/api/tasks/{task['id']}", headers=headers, json={"status": "completed"})
    assert done.status_code == 200, done.text
    assert done.json()["task"]["completed_by"] == seed_users["eng1"].id
    assert done.json()["task"]["completed_date"] is not None

    reopened = client.put(f"/api/tasks/{task['id']}", headers=headers, json={"status": "in_progress"})
    assert reopened.status_code == 200
    assert reopened.json()["task"]["completed_by"] is None
    assert reopened.json()["task"]["completed_date"] is None


def test_update_task_validation(client, seed_users):
    headers = auth_headers(client, "budi")
    task = _create_task(client, headers)
    assert client.put(f"/api/tasks/{task['id']}", headers=headers, json={}).status_code == 400
    assert client.put(f"/api/tasks/{task['id']}", headers=headers, json={"priority": "urgent"}).status_code == 400
    assert client.put(f"/api/tasks/{task['id']}", headers=headers, json={"title": ""}).status_code == 400

    ok = client.put(f"/api/tasks/{task['id']}", headers=headers, json={"priority": "high", "description": "details"})
    assert ok.status_code == 200
    assert ok.json()["task"]["priority"] == "high"
    assert ok.json()["task"]["description"] == "details"


def test_update_and_delete_forbidden_for_colleague(client, seed_users):
    task = _create_task(client, auth_headers(client, "budi"))
    sari = auth_headers(client, "sari")
    assert client.put(f"/api/tasks/{task['id']}", headers=sari, json={"title": "Mine now"}).status_code == 403
    assert client.delete(f"/api/tasks/{task['id']}", headers=sari).status_code == 403


def test_planner_can_modify_assigned_task(client, seed_users):
    task = _create_task(client, auth_headers(client, "admin"), user_id=seed_users["eng1"].id)
    resp = client.put(f"/api/tasks/{task['id']}", headers=auth_headers(client, "budi"), json={"status": "in_progress"})
    assert resp.status_code == 200


def test_delete_task(client, db, seed_users):
    headers = auth_headers(client, "budi")
    task = _create_task(client, headers)
    client.post(f"/api/comments/{task['id']}", headers=headers, json={"comment_text": "note"})

    resp = client.delete(f"/api/tasks/{task['id']}", headers=headers)
    assert resp.status_code == 200
    assert resp.json()["success"] is True
    assert client.get(f"/api/tasks/{task['id']}", headers=headers).status_code == 404
    assert client.delete(f"/api/tasks/{task['id']}", headers=headers).status_code == 404


def test_stats_overview(client, seed_users):
    headers = auth_headers(client, "budi")
    _create_task(client, headers, priority="high")
    _create_task(client, headers, status="in_progress", priority="low")
    _create_task(client, headers, status="completed")

    assert client.get("/api/tasks/stats/overview", headers=headers).status_code == 403

    resp = client.get("/api/tasks/stats/overview", headers=auth_headers(client, "admin"))
    assert resp.status_code == 200
    stats = resp.json()["stats"]
    assert stats["total_tasks"] == 3
    assert stats["plan_count"] == 1
    assert stats["in_progress_count"] == 1
    assert stats["completed_count"] == 1
    assert stats["high_priority_count"] == 1
    assert stats["medium_priority_count"] == 1
    assert stats["low_priority_count"] == 1
    assert stats["completion_rate"] == 33


def test_stats_empty(client, seed_users):
    resp = client.get("/api/tasks/stats/overview", headers=auth_headers(client, "admin"))
    assert resp.json()["stats"]["completion_rate"] == 0


def test_stats_rounds_half_up(client, db, seed_users):
    owner_id = seed_users["eng1"].id
    tasks = [Task(user_id=owner_id, plan_by=owner_id, title=f"Task {i}") for i in range(7)]
    tasks.append(Task(user_id=owner_id, plan_by=owner_id, title="Done", status="completed"))
    db.add_all(tasks)
    db.commit()

    resp = client.get("/api/tasks/stats/overview", headers=auth_headers(client, "admin"))
    stats = resp.json()["stats"]
    assert stats["total_tasks"] == 8
    assert stats["completed_count"] == 1
    assert stats["completion_rate"] == 13
