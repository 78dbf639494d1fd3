from takween.models import Task, TaskStatus
from conftest import auth_headers


def _create_project(client, admin, manager, steps):
    return client.post("/projects/", json={
        "name": "Royal Villa",
        "client": "Private client",
        "budget": 1200000,
        "deadline": "2025-10-15",
        "manager_id": manager.id,
        "steps": steps,
    }, headers=auth_headers(admin))


def test_steps_become_tasks_for_the_manager(client, admin, interior_manager):
    response = _create_project(client, admin, interior_manager, [
        {"title": "Concept", "weight": 40},
        {"title": "Detailing", "weight": 60},
    ])
    assert response.status_code == 201
    body = response.json()
    assert body["department_id"] == "interior"
    assert body["progress"] == 0
    assert body["weight_total"] == 100
    assert body["weights_balanced"] is True
    assert body["manager"]["id"] == interior_manager.id

    concept = body["tasks"][0]
    assert concept["assigned_to"] == interior_manager.id
    assert concept["department_id"] == "interior"
    assert concept["due_date"] == "2025-10-15"
    assert concept["estimated_hours"] == 8
    assert concept["kpi_points"] == 80


def test_only_admin_creates_projects(client, manager):
    assert _create_project(client, manager, manager, []).status_code == 403


def test_unbalanced_weights_are_allowed(client, admin, manager):
    body = _create_project(client, admin, manager, [{"title": "Only step", "weight": 30}]).json()
    assert body["weight_total"] == 30
    assert body["weights_balanced"] is False


def test_toggle_updates_weighted_progress(client, admin, manager):
    project = _create_project(client, admin, manager, [
        {"title": "Concept", "weight": 40},
        {"title": "Detailing", "weight": 60},
    ]).json()
    concept_id = project["tasks"][0]["id"]

    toggled = client.post(f"/projects/{project['id']}/steps/{concept_id}/toggle", headers=auth_headers(manager))
    assert toggled.status_code == 200
    assert toggled.json()["progress"] == 40

    back = client.post(f"/projects/{project['id']}/steps/{concept_id}/toggle", headers=auth_headers(admin)).json()
    assert back["progress"] == 0


def test_toggle_refused_for_other_staff(client, db, admin, manager, employee):
    project = _create_project(client, admin, manager, [{"title": "Concept", "weight": 100}]).json()
    step_id = project["tasks"][0]["id"]

    response = client.post(f"/projects/{project['id']}/steps/{step_id}/toggle", headers=auth_headers(employee))
    assert response.status_code == 403
    assert db.query(Task).filter(Task.id == step_id).first().status == TaskStatus.NEW


def test_add_and_remove_steps(client, db, admin, manager):
    project = _create_project(client, admin, manager, []).json()

    step = client.post(f"/projects/{project['id']}/steps", json={"title": "Survey", "weight": 25},
                       headers=auth_headers(admin))
    assert step.status_code == 201
    assert step.json()["kpi_points"] == 50

    detail = client.get(f"/projects/{project['id']}", headers=auth_headers(manager)).json()
    assert detail["task_count"] == 1

    removed = client.delete(f"/projects/{project['id']}/steps/{step.json()['id']}", headers=auth_headers(admin))
    assert removed.status_code == 204
    assert db.query(Task).count() == 0


def test_update_project_manager_and_status(client, admin, manager, employee):
    project = _create_project(client, admin, manager, []).json()
    response = client.patch(f"/projects/{project['id']}", json={"manager_id": employee.id, "status": "ON_HOLD"},
                            headers=auth_headers(admin))
    assert response.status_code == 200
    assert response.json()["manager_id"] == employee.id
    assert response.json()["status"] == "ON_HOLD"


def test_update_ignores_null_fields(client, admin, manager):
    project = _create_project(client, admin, manager, []).json()
    response = client.patch(f"/projects/{project['id']}", json={"name": None, "budget": None, "client": "Emaar"},
                            headers=auth_headers(admin))
    assert response.status_code == 200
    assert response.json()["name"] == "Royal Villa"
    assert response.json()["budget"] == 1200000
    assert response.json()["client"] == "Emaar"


def test_projects_are_department_scoped(client, admin, manager, interior_manager):
    _create_project(client, admin, manager, [])
    _create_project(client, admin, interior_manager, [])

    assert len(client.get("/projects/", headers=auth_headers(manager)).json()) == 1
    assert len(client.get("/projects/", headers=auth_headers(admin)).json()) == 2


def test_missing_manager_renders_blank(client, db, admin, manager):
    project = _create_project(client, admin, manager, []).json()
    db.delete(manager)
    db.commit()

    detail = client.get(f"/projects/{project['id']}", headers=auth_headers(admin)).json()
    assert detail["manager"] is None
