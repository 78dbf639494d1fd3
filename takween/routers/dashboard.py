# takween/routers/dashboard.py
from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from takween.database import get_db
from takween.models import Department, Employee, Project, Sprint, Task
from takween.models.employee import EmployeeStatus
from takween.models.project import ProjectStatus
from takween.models.task import TaskStatus
from takween.services import kpi
from takween.services.sprint_lifecycle import is_expiring_soon
from takween.utils.auth import get_current_user
from takween.utils.visibility import filter_employees, filter_projects, filter_sprints, filter_tasks

router = APIRouter(prefix="/dashboard", tags=["dashboard"])

@router.get("/overview")
def get_dashboard_overview(
    db: Session = Depends(get_db),
    current_user: Employee = Depends(get_current_user)
):
    """Landing page figures scoped to what the caller can see"""
    tasks = filter_tasks(db.query(Task).all(), current_user)
    employees = filter_employees(
        db.query(Employee).filter(Employee.status == EmployeeStatus.ACTIVE).all(),
        current_user,
    )
    departments = db.query(Department).order_by(Department.name).all()
    projects = db.query(Project).all()
    sprints = filter_sprints(db.query(Sprint).all(), projects, current_user)

    summary = kpi.dashboard_summary(tasks, employees, departments)
    summary["my_open_tasks"] = len([
        task for task in filter_tasks(tasks, current_user, personal=True)
        if task.status != TaskStatus.COMPLETED
    ])
    summary["active_projects"] = len([
        project for project in filter_projects(projects, current_user)
        if project.status == ProjectStatus.ACTIVE
    ])
    summary["expiring_sprints"] = [
        {"id": sprint.id, "name": sprint.name, "end_date": sprint.end_date.isoformat()}
        for sprint in sprints if is_expiring_soon(sprint)
    ]
    return summary
