# takween/utils/visibility.py
"""Role-based visibility rules.

Everything here is a pure function over already loaded records: the acting
employee decides which slice of a collection is returned and which actions
are offered. ADMIN sees the whole company, every other role is scoped to its
own department.
"""
from typing import Iterable, List, Optional

from takween.models.employee import Employee, Role
from takween.models.project import Project
from takween.models.sprint import Sprint
from takween.models.task import Task

MANAGER_ROLES = {Role.ADMIN, Role.DEPT_MANAGER}

# Sections of the dashboard closed to the listed roles
SECTION_RESTRICTIONS = {
    "employees": {Role.EMPLOYEE},
    "departments": {Role.EMPLOYEE, Role.TEAM_LEADER},
    "analytics": {Role.EMPLOYEE},
    "activity": {Role.EMPLOYEE, Role.TEAM_LEADER},
}


def is_admin(user: Employee) -> bool:
    return user.role == Role.ADMIN


def is_manager(user: Employee) -> bool:
    return user.role in MANAGER_ROLES


def _department_scope(items: Iterable, user: Employee) -> List:
    items = list(items)
    if is_admin(user):
        return items
    return [item for item in items if item.department_id == user.department_id]


def filter_tasks(tasks: Iterable[Task], user: Employee, personal: bool = False) -> List[Task]:
    """Tasks visible to the user, optionally narrowed to the ones assigned to them"""
    pool = _department_scope(tasks, user)
    if personal:
        return [task for task in pool if task.assigned_to == user.id]
    return pool


def filter_projects(projects: Iterable[Project], user: Employee) -> List[Project]:
    return _department_scope(projects, user)


def filter_employees(employees: Iterable[Employee], user: Employee) -> List[Employee]:
    return _department_scope(employees, user)


def filter_sprints(sprints: Iterable[Sprint], projects: Iterable[Project], user: Employee) -> List[Sprint]:
    """Sprints whose project is visible to the user"""
    sprints = list(sprints)
    if is_admin(user):
        return sprints
    visible_project_ids = {project.id for project in filter_projects(projects, user)}
    return [sprint for sprint in sprints if sprint.project_id in visible_project_ids]


def filter_employee_records(records: Iterable, employees: Iterable[Employee], user: Employee) -> List:
    """Leave/attendance style records keyed by employee_id.

    ADMIN sees everything, department leads see their department, an
    EMPLOYEE sees only their own rows.
    """
    records = list(records)
    if is_admin(user):
        return records
    if user.role == Role.EMPLOYEE:
        return [record for record in records if record.employee_id == user.id]
    department_ids = {
        employee.id for employee in employees if employee.department_id == user.department_id
    }
    department_ids.add(user.id)
    return [record for record in records if record.employee_id in department_ids]


def can_view_task(user: Employee, task: Task) -> bool:
    return is_admin(user) or task.department_id == user.department_id


def can_view_project(user: Employee, project: Project) -> bool:
    return is_admin(user) or project.department_id == user.department_id


def can_access_section(role: Role, section: str) -> bool:
    return role not in SECTION_RESTRICTIONS.get(section, set())


def can_create_tasks(user: Employee) -> bool:
    return is_manager(user)


def can_edit_tasks(user: Employee) -> bool:
    return is_manager(user)


def can_delete_tasks(user: Employee) -> bool:
    return is_admin(user)


def can_manage_sprints(user: Employee) -> bool:
    return is_manager(user)


def can_approve_employees(user: Employee) -> bool:
    return is_manager(user)


def can_grant_role(user: Employee, role: Role) -> bool:
    """Only an ADMIN hands out the ADMIN role"""
    return is_admin(user) or role != Role.ADMIN


def can_manage_employee(user: Employee, target: Employee) -> bool:
    """Role edits: ADMIN on anyone, a department manager on the rest of their department"""
    if is_admin(user):
        return True
    if user.role != Role.DEPT_MANAGER or target.id == user.id:
        return False
    return target.department_id == user.department_id


def can_manage_kpi_rules(user: Employee) -> bool:
    return is_admin(user)


def can_manage_projects(user: Employee) -> bool:
    return is_admin(user)


def can_toggle_project_step(user: Employee, project: Project) -> bool:
    return is_admin(user) or user.id == project.manager_id


def can_decide_leave(user: Employee, requester: Optional[Employee]) -> bool:
    if is_admin(user):
        return True
    if user.role != Role.DEPT_MANAGER or requester is None:
        return False
    return requester.department_id == user.department_id
