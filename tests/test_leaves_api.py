from takween.models import LeaveRequest, LeaveStatus
from conftest import auth_headers

LEAVE = {"type": "ANNUAL", "start_date": "2025-02-01", "end_date": "2025-02-05", "reason": "Family trip"}


def _request(client, employee):
    response = client.post("/leaves/", json=LEAVE, headers=auth_headers(employee))
    assert response.status_code == 201
    return response.json()


def test_request_is_pending(client, employee):
    leave = _request(client, employee)
    assert leave["status"] == "PENDING"
    assert leave["employee_id"] == employee.id


def test_end_before_start_is_invalid(client, employee):
    response = client.post("/leaves/", json={**LEAVE, "end_date": "2025-01-20"}, headers=auth_headers(employee))
    assert response.status_code == 422


def test_department_manager_decides_own_department(client, db, manager, employee):
    leave = _request(client, employee)
    response = client.post(f"/leaves/{leave['id']}/approve", headers=auth_headers(manager))
    assert response.status_code == 200
    assert response.json()["status"] == "APPROVED"

    again = client.post(f"/leaves/{leave['id']}/reject", headers=auth_headers(manager))
    assert again.status_code == 400
    assert db.query(LeaveRequest).first().status == LeaveStatus.APPROVED


def test_other_department_manager_is_refused(client, interior_manager, employee):
    leave = _request(client, employee)
    assert client.post(f"/leaves/{leave['id']}/approve", headers=auth_headers(interior_manager)).status_code == 403


def test_admin_rejects_any_request(client, admin, interior_manager):
    leave = _request(client, interior_manager)
    response = client.post(f"/leaves/{leave['id']}/reject", headers=auth_headers(admin))
    assert response.json()["status"] == "REJECTED"


def test_unknown_request(client, admin):
    assert client.post("/leaves/999/approve", headers=auth_headers(admin)).status_code == 404


def test_leave_list_visibility(client, employee, make_employee, manager, admin):
    colleague = make_employee()
    _request(client, employee)
    _request(client, colleague)

    own = client.get("/leaves/", headers=auth_headers(employee)).json()
    assert [row["employee_id"] for row in own] == [employee.id]
    assert len(client.get("/leaves/", headers=auth_headers(manager)).json()) == 2
    assert len(client.get("/leaves/", headers=auth_headers(admin)).json()) == 2
