# takween/services/kpi.py
"""KPI and progress arithmetic, recomputed from scratch on every call"""
from collections import OrderedDict
from typing import Dict, Iterable, List, Optional

from takween.models.department import Department
from takween.models.employee import Employee
from takween.models.task import Task, TaskStatus


def average_kpi(employees: Iterable[Employee]) -> float:
    """Mean KPI rounded to one decimal, 0 for an empty list"""
    scores = [employee.kpi or 0 for employee in employees]
    if not scores:
        return 0
    return round(sum(scores) / len(scores), 1)


def group_by_department(employees: Iterable[Employee]) -> Dict[str, List[Employee]]:
    groups: Dict[str, List[Employee]] = OrderedDict()
    for employee in employees:
        groups.setdefault(employee.department_id, []).append(employee)
    return groups


def department_kpis(employees: Iterable[Employee], departments: Iterable[Department]) -> List[dict]:
    """Average KPI per department, in department order"""
    groups = group_by_department(employees)
    result = []
    for department in departments:
        members = groups.get(department.id, [])
        result.append({
            "department_id": department.id,
            "name": department.name,
            "color": department.color,
            "kpi_target": department.kpi_target,
            "employee_count": len(members),
            "average_kpi": average_kpi(members),
        })
    return result


def top_performer(employees: Iterable[Employee]) -> Optional[Employee]:
    best = None
    for employee in employees:
        if best is None or (employee.kpi or 0) > (best.kpi or 0):
            best = employee
    return best


def rank_by_kpi(employees: Iterable[Employee]) -> List[Employee]:
    # sorted() is stable, equal scores keep their input order
    return sorted(employees, key=lambda employee: employee.kpi or 0, reverse=True)


def employee_performance(employee: Employee, tasks: Iterable[Task]) -> dict:
    """Task-based figures for one employee"""
    own_tasks = [task for task in tasks if task.assigned_to == employee.id]
    completed = [task for task in own_tasks if task.status == TaskStatus.COMPLETED]
    completion_rate = round(len(completed) / len(own_tasks) * 100, 1) if own_tasks else 0
    return {
        "employee_id": employee.id,
        "kpi": employee.kpi,
        "kpi_target": employee.kpi_target,
        "total_tasks": len(own_tasks),
        "completed_tasks": len(completed),
        "completion_rate": completion_rate,
        "earned_points": sum(task.kpi_points or 0 for task in completed),
        "estimated_hours": sum(task.estimated_hours or 0 for task in own_tasks),
        "actual_hours": sum(task.actual_hours or 0 for task in own_tasks),
    }


def weight_total(tasks: Iterable[Task]) -> int:
    return sum(task.weight or 0 for task in tasks)


def project_progress(tasks: Iterable[Task]) -> int:
    """Completed weight as a whole percentage of total weight"""
    tasks = list(tasks)
    total = weight_total(tasks)
    if total == 0:
        return 0
    completed = weight_total(task for task in tasks if task.status == TaskStatus.COMPLETED)
    return round(completed / total * 100)


def status_breakdown(tasks: Iterable[Task]) -> Dict[str, int]:
    counts = OrderedDict((status.value, 0) for status in TaskStatus)
    for task in tasks:
        counts[TaskStatus(task.status).value] += 1
    return counts


def dashboard_summary(tasks: Iterable[Task], employees: Iterable[Employee], departments: Iterable[Department]) -> dict:
    """Figures shown on the landing dashboard"""
    tasks = list(tasks)
    employees = list(employees)
    departments = list(departments)
    best = top_performer(employees)

    per_department = []
    for department in departments:
        per_department.append({
            "department_id": department.id,
            "name": department.name,
            "tasks": len([task for task in tasks if task.department_id == department.id]),
            "employees": len([employee for employee in employees if employee.department_id == department.id]),
        })

    return {
        "total_tasks": len(tasks),
        "open_tasks": len([task for task in tasks if task.status != TaskStatus.COMPLETED]),
        "status_breakdown": status_breakdown(tasks),
        "average_kpi": average_kpi(employees),
        "top_performer": {"id": best.id, "name": best.name, "kpi": best.kpi} if best else None,
        "department_kpis": department_kpis(employees, departments),
        "department_load": per_department,
    }
