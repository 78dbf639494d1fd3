from datetime import date

import pytest

from takween.models import Employee, Role, Sprint, SprintStatus
from takween.services import sprint_lifecycle


def _sprint(status, end_date=date(2024, 5, 30)):
    return Sprint(id=1, name="Foundations", start_date=date(2024, 5, 1), end_date=end_date, status=status)


def _actor(role):
    return Employee(id=5, name=role.value, role=role, department_id="arch")


def test_activate_and_close():
    sprint = _sprint(SprintStatus.PLANNED)
    assert sprint_lifecycle.activate(sprint, _actor(Role.DEPT_MANAGER))
    assert sprint.status == SprintStatus.ACTIVE
    assert sprint_lifecycle.close(sprint, _actor(Role.DEPT_MANAGER))
    assert sprint.status == SprintStatus.CLOSED


def test_lower_roles_cannot_change_sprints():
    sprint = _sprint(SprintStatus.PLANNED)
    assert not sprint_lifecycle.activate(sprint, _actor(Role.TEAM_LEADER))
    assert sprint.status == SprintStatus.PLANNED


@pytest.mark.parametrize("role, allowed", [
    (Role.ADMIN, True),
    (Role.DEPT_MANAGER, False),
    (Role.TEAM_LEADER, False),
    (Role.EMPLOYEE, False),
])
def test_reopen_is_admin_only(role, allowed):
    sprint = _sprint(SprintStatus.CLOSED)
    assert sprint_lifecycle.reopen(sprint, _actor(role)) is allowed
    assert sprint.status == (SprintStatus.ACTIVE if allowed else SprintStatus.CLOSED)


def test_transitions_outside_the_table_are_ignored():
    planned = _sprint(SprintStatus.PLANNED)
    assert not sprint_lifecycle.close(planned, _actor(Role.ADMIN))
    assert planned.status == SprintStatus.PLANNED

    active = _sprint(SprintStatus.ACTIVE)
    assert not sprint_lifecycle.reopen(active, _actor(Role.ADMIN))
    assert not sprint_lifecycle.activate(active, _actor(Role.ADMIN))
    assert active.status == SprintStatus.ACTIVE


def test_extend_appends_one_entry():
    sprint = _sprint(SprintStatus.ACTIVE)
    sprint.extensions = []

    extension = sprint_lifecycle.extend(sprint, date(2024, 6, 10), "  client changes  ", _actor(Role.ADMIN))

    assert len(sprint.extensions) == 1
    assert sprint.extensions[0] is extension
    assert extension.old_end_date == date(2024, 5, 30)
    assert extension.new_end_date == date(2024, 6, 10)
    assert extension.reason == "client changes"
    assert extension.extended_by == 5
    assert sprint.end_date == date(2024, 6, 10)


def test_extend_twice_keeps_the_ledger_chained():
    sprint = _sprint(SprintStatus.ACTIVE)
    sprint.extensions = []
    admin = _actor(Role.ADMIN)

    sprint_lifecycle.extend(sprint, date(2024, 6, 10), "first", admin)
    sprint_lifecycle.extend(sprint, date(2024, 6, 20), "second", admin)

    assert [e.old_end_date for e in sprint.extensions] == [date(2024, 5, 30), date(2024, 6, 10)]
    assert sprint.end_date == date(2024, 6, 20)


@pytest.mark.parametrize("status, role, reason", [
    (SprintStatus.ACTIVE, Role.DEPT_MANAGER, "late"),
    (SprintStatus.PLANNED, Role.ADMIN, "late"),
    (SprintStatus.CLOSED, Role.ADMIN, "late"),
    (SprintStatus.ACTIVE, Role.ADMIN, "   "),
])
def test_extend_refusals_change_nothing(status, role, reason):
    sprint = _sprint(status)
    sprint.extensions = []

    assert sprint_lifecycle.extend(sprint, date(2024, 6, 10), reason, _actor(role)) is None
    assert sprint.extensions == []
    assert sprint.end_date == date(2024, 5, 30)


def test_days_remaining_and_expiry_window():
    sprint = _sprint(SprintStatus.ACTIVE, end_date=date(2024, 5, 30))

    assert sprint_lifecycle.days_remaining(sprint, date(2024, 5, 27)) == 3
    assert sprint_lifecycle.is_expiring_soon(sprint, date(2024, 5, 27))
    assert not sprint_lifecycle.is_expiring_soon(sprint, date(2024, 5, 26))
    assert not sprint_lifecycle.is_expiring_soon(sprint, date(2024, 5, 31))

    sprint.status = SprintStatus.PLANNED
    assert not sprint_lifecycle.is_expiring_soon(sprint, date(2024, 5, 29))
