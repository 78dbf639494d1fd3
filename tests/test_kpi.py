from takween.models import Department, Employee, Role, Task, TaskStatus
from takween.services import kpi


def _employee(id, kpi_score, department_id="arch"):
    return Employee(id=id, name=f"E{id}", role=Role.EMPLOYEE, department_id=department_id, kpi=kpi_score)


def _task(weight, status, assigned_to=None, points=0):
    return Task(title="t", weight=weight, status=status, assigned_to=assigned_to, kpi_points=points,
                estimated_hours=4, actual_hours=2)


def test_average_kpi_of_nobody_is_zero():
    assert kpi.average_kpi([]) == 0


def test_average_kpi_is_rounded_mean():
    assert kpi.average_kpi([_employee(1, 90), _employee(2, 85), _employee(3, 80)]) == 85
    assert kpi.average_kpi([_employee(1, 90), _employee(2, 85)]) == 87.5
    assert kpi.average_kpi([_employee(1, 70), _employee(2, 70), _employee(3, 71)]) == 70.3


def test_department_kpis_include_empty_departments():
    departments = [Department(id="arch", name="Arch", color="#000"), Department(id="hr", name="HR", color="#111")]
    result = kpi.department_kpis([_employee(1, 90), _employee(2, 70)], departments)

    assert result[0]["average_kpi"] == 80
    assert result[0]["employee_count"] == 2
    assert result[1]["average_kpi"] == 0
    assert result[1]["employee_count"] == 0


def test_top_performer_and_ranking():
    staff = [_employee(1, 70), _employee(2, 95), _employee(3, 95), _employee(4, 60)]
    assert kpi.top_performer(staff).id == 2
    assert [e.id for e in kpi.rank_by_kpi(staff)] == [2, 3, 1, 4]
    assert kpi.top_performer([]) is None


def test_project_progress_is_weighted():
    tasks = [
        _task(20, TaskStatus.COMPLETED),
        _task(30, TaskStatus.IN_PROGRESS),
        _task(50, TaskStatus.COMPLETED),
    ]
    assert kpi.project_progress(tasks) == 70
    assert kpi.weight_total(tasks) == 100


def test_project_progress_without_weight_is_zero():
    assert kpi.project_progress([]) == 0
    assert kpi.project_progress([_task(0, TaskStatus.COMPLETED)]) == 0


def test_unbalanced_weights_still_give_a_percentage():
    tasks = [_task(10, TaskStatus.COMPLETED), _task(20, TaskStatus.NEW)]
    assert kpi.weight_total(tasks) == 30
    assert kpi.project_progress(tasks) == 33


def test_employee_performance():
    employee = _employee(7, 80)
    tasks = [
        _task(10, TaskStatus.COMPLETED, assigned_to=7, points=50),
        _task(10, TaskStatus.REVIEW, assigned_to=7, points=30),
        _task(10, TaskStatus.COMPLETED, assigned_to=8, points=100),
    ]
    figures = kpi.employee_performance(employee, tasks)

    assert figures["total_tasks"] == 2
    assert figures["completed_tasks"] == 1
    assert figures["completion_rate"] == 50
    assert figures["earned_points"] == 50
    assert figures["estimated_hours"] == 8


def test_dashboard_summary_counts():
    departments = [Department(id="arch", name="Arch", color="#000")]
    tasks = [
        Task(title="a", status=TaskStatus.NEW, department_id="arch"),
        Task(title="b", status=TaskStatus.COMPLETED, department_id="arch"),
    ]
    summary = kpi.dashboard_summary(tasks, [_employee(1, 90)], departments)

    assert summary["total_tasks"] == 2
    assert summary["open_tasks"] == 1
    assert summary["status_breakdown"]["COMPLETED"] == 1
    assert summary["top_performer"]["id"] == 1
    assert summary["department_load"][0]["tasks"] == 2
