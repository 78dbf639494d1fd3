# takween/routers/snapshot.py
import logging

from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.orm import Session

from takween.database import get_db
from takween.models import Employee, KpiRule, Project, Sprint, Task
from takween.schemas.employee import EmployeeOut
from takween.schemas.kpi_rule import KpiRuleOut
from takween.schemas.sprint import SprintOut
from takween.schemas.task import TaskOut
from takween.services import kpi
from takween.services.sprint_lifecycle import sprint_summary
from takween.utils.auth import get_current_user
from takween.utils.visibility import is_admin

logger = logging.getLogger(__name__)

router = APIRouter()

@router.get("/")
def export_snapshot(
    db: Session = Depends(get_db),
    current_user: Employee = Depends(get_current_user)
):
    """Whole workspace as one JSON document per collection, ADMIN only"""
    if not is_admin(current_user):
        raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail="Only admins can export the workspace")

    tasks = db.query(Task).order_by(Task.id).all()
    projects = []
    for project in db.query(Project).order_by(Project.id).all():
        project_tasks = [task for task in tasks if task.project_id == project.id]
        projects.append({
            "id": project.id,
            "name": project.name,
            "client": project.client,
            "budget": project.budget,
            "status": project.status.value,
            "deadline": project.deadline.isoformat() if project.deadline else None,
            "manager_id": project.manager_id,
            "department_id": project.department_id,
            "progress": kpi.project_progress(project_tasks),
        })

    snapshot = {
        "takween_tasks": [TaskOut.model_validate(task).model_dump(mode="json") for task in tasks],
        "takween_employees": [
            EmployeeOut.model_validate(employee).model_dump(mode="json")
            for employee in db.query(Employee).order_by(Employee.id).all()
        ],
        "takween_projects": projects,
        "takween_sprints": [
            SprintOut.model_validate(sprint_summary(sprint), from_attributes=True).model_dump(mode="json")
            for sprint in db.query(Sprint).order_by(Sprint.id).all()
        ],
        "takween_kpi_rules": [
            KpiRuleOut.model_validate(rule).model_dump(mode="json")
            for rule in db.query(KpiRule).order_by(KpiRule.id).all()
        ],
    }
    logger.info(f"Workspace snapshot exported by {current_user.id}")
    return snapshot
