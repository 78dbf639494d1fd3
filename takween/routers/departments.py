# takween/routers/departments.py
from typing import List

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from takween.database import get_db
from takween.models import Department, Employee, Task
from takween.models.employee import EmployeeStatus
from takween.schemas.department import DepartmentOut
from takween.services import kpi
from takween.utils.auth import require_section
from takween.utils.visibility import is_admin

router = APIRouter()

@router.get("/", response_model=List[DepartmentOut])
def list_departments(
    db: Session = Depends(get_db),
    current_user: Employee = Depends(require_section("departments"))
):
    """Department cards: headcount, average KPI and task load"""
    departments = db.query(Department).order_by(Department.name).all()
    if not is_admin(current_user):
        departments = [department for department in departments if department.id == current_user.department_id]

    employees = db.query(Employee).filter(Employee.status == EmployeeStatus.ACTIVE).all()
    groups = kpi.group_by_department(employees)
    tasks = db.query(Task).all()

    return [
        {
            "id": department.id,
            "name": department.name,
            "color": department.color,
            "kpi_target": department.kpi_target,
            "employee_count": len(groups.get(department.id, [])),
            "average_kpi": kpi.average_kpi(groups.get(department.id, [])),
            "task_count": len([task for task in tasks if task.department_id == department.id]),
        }
        for department in departments
    ]
