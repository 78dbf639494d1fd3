from datetime import date

import pytest
from fastapi import WebSocketDisconnect

from takween.models import Employee, EmployeeStatus, Project, Role, Sprint, SprintStatus
from conftest import PASSWORD, auth_headers


def test_root_and_health(client):
    assert client.get("/").status_code == 200
    assert client.get("/health").json() == {"status": "ok"}


def test_registration_stays_pending(client, db):
    response = client.post("/auth/register", json={
        "name": "New Hire", "email": "new@takween.com", "password": "hunter22",
    })
    assert response.status_code == 201
    body = response.json()
    assert body["status"] == "PENDING"
    assert body["role"] == "EMPLOYEE"
    assert body["department_id"] == "arch"

    login = client.post("/auth/login", json={"email": "new@takween.com", "password": "hunter22"})
    assert login.status_code == 401


def test_duplicate_email_is_rejected(client, employee):
    response = client.post("/auth/register", json={
        "name": "Copy", "email": employee.email, "password": "hunter22",
    })
    assert response.status_code == 400


def test_login_returns_token_and_user(client, employee):
    response = client.post("/auth/login", json={"email": employee.email, "password": PASSWORD})
    assert response.status_code == 200
    body = response.json()
    assert body["token_type"] == "bearer"
    assert body["user"]["id"] == employee.id

    me = client.get("/employees/me", headers={"Authorization": f"Bearer {body['access_token']}"})
    assert me.json()["email"] == employee.email


def test_wrong_password(client, employee):
    response = client.post("/auth/login", json={"email": employee.email, "password": "nope"})
    assert response.status_code == 400


def test_missing_or_bad_token(client):
    assert client.get("/tasks/").status_code == 401
    assert client.get("/tasks/", headers={"Authorization": "Bearer junk"}).status_code == 401


def test_pending_account_token_is_refused(client, make_employee):
    pending = make_employee(status=EmployeeStatus.PENDING)
    assert client.get("/employees/me", headers=auth_headers(pending)).status_code == 401


def test_manager_approves_registration(client, db, manager):
    client.post("/auth/register", json={"name": "Applicant", "email": "app@takween.com", "password": "hunter22"})
    pending = client.get("/employees/pending", headers=auth_headers(manager)).json()
    assert [row["email"] for row in pending] == ["app@takween.com"]

    response = client.post(
        f"/employees/{pending[0]['id']}/approve",
        json={"role": "TEAM_LEADER", "department_id": "arch"},
        headers=auth_headers(manager),
    )
    assert response.status_code == 200
    assert response.json()["status"] == "ACTIVE"
    assert response.json()["department_id"] == "arch"

    again = client.post(
        f"/employees/{pending[0]['id']}/approve",
        json={"role": "TEAM_LEADER", "department_id": "arch"},
        headers=auth_headers(manager),
    )
    assert again.status_code == 400

    login = client.post("/auth/login", json={"email": "app@takween.com", "password": "hunter22"})
    assert login.status_code == 200


def test_employees_cannot_approve_or_open_directory(client, employee):
    assert client.get("/employees/pending", headers=auth_headers(employee)).status_code == 403
    assert client.get("/employees/", headers=auth_headers(employee)).status_code == 403


def test_directory_is_department_scoped(client, manager, employee, interior_manager, admin):
    ids = [row["id"] for row in client.get("/employees/", headers=auth_headers(manager)).json()]
    assert set(ids) == {manager.id, employee.id, admin.id}

    everyone = client.get("/employees/", headers=auth_headers(admin)).json()
    assert len(everyone) == 4

    assert client.get(f"/employees/{interior_manager.id}", headers=auth_headers(manager)).status_code == 404


def test_role_update(client, db, admin, employee):
    response = client.patch(f"/employees/{employee.id}/role", json={"role": "TEAM_LEADER"}, headers=auth_headers(admin))
    assert response.status_code == 200
    db.refresh(employee)
    assert employee.role == Role.TEAM_LEADER
    assert db.query(Employee).count() == 2


def test_manager_cannot_grant_admin(client, db, manager, employee):
    response = client.patch(f"/employees/{employee.id}/role", json={"role": "ADMIN"}, headers=auth_headers(manager))
    assert response.status_code == 403
    db.refresh(employee)
    assert employee.role == Role.EMPLOYEE


def test_manager_cannot_edit_own_role(client, db, manager):
    response = client.patch(f"/employees/{manager.id}/role", json={"role": "ADMIN"}, headers=auth_headers(manager))
    assert response.status_code == 403
    response = client.patch(f"/employees/{manager.id}/role", json={"role": "TEAM_LEADER"},
                            headers=auth_headers(manager))
    assert response.status_code == 403
    db.refresh(manager)
    assert manager.role == Role.DEPT_MANAGER


def test_manager_role_edits_stay_in_department(client, db, manager, employee, interior_manager):
    response = client.patch(f"/employees/{interior_manager.id}/role", json={"role": "EMPLOYEE"},
                            headers=auth_headers(manager))
    assert response.status_code == 403
    db.refresh(interior_manager)
    assert interior_manager.role == Role.DEPT_MANAGER

    response = client.patch(f"/employees/{employee.id}/role", json={"role": "TEAM_LEADER"},
                            headers=auth_headers(manager))
    assert response.status_code == 200
    assert response.json()["role"] == "TEAM_LEADER"


def test_admin_can_grant_admin(client, admin, manager):
    response = client.patch(f"/employees/{manager.id}/role", json={"role": "ADMIN"}, headers=auth_headers(admin))
    assert response.status_code == 200
    assert response.json()["role"] == "ADMIN"


def test_manager_approval_is_scoped(client, db, manager):
    client.post("/auth/register", json={"name": "Applicant", "email": "app@takween.com", "password": "hunter22"})
    applicant = db.query(Employee).filter(Employee.email == "app@takween.com").first()

    as_admin = client.post(f"/employees/{applicant.id}/approve", json={"role": "ADMIN", "department_id": "arch"},
                           headers=auth_headers(manager))
    assert as_admin.status_code == 403

    elsewhere = client.post(f"/employees/{applicant.id}/approve",
                            json={"role": "EMPLOYEE", "department_id": "interior"},
                            headers=auth_headers(manager))
    assert elsewhere.status_code == 403

    db.refresh(applicant)
    assert applicant.status == EmployeeStatus.PENDING


def test_self_promotion_does_not_unlock_reopen(client, db, manager):
    project = Project(name="Tower", client="Emaar", budget=100, department_id="arch")
    db.add(project)
    db.commit()
    sprint = Sprint(name="Closed", project_id=project.id, start_date=date(2025, 1, 1),
                    end_date=date(2025, 1, 14), status=SprintStatus.CLOSED)
    db.add(sprint)
    db.commit()

    client.patch(f"/employees/{manager.id}/role", json={"role": "ADMIN"}, headers=auth_headers(manager))
    reopened = client.post(f"/sprints/{sprint.id}/reopen", headers=auth_headers(manager)).json()
    assert reopened["applied"] is False
    assert reopened["sprint"]["status"] == "CLOSED"


def test_websocket_rejects_bad_token(client):
    with client.websocket_connect("/ws?token=junk") as websocket:
        with pytest.raises(WebSocketDisconnect) as closed:
            websocket.receive_text()
    assert closed.value.code == 1008
