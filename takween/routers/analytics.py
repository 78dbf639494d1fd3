# takween/routers/analytics.py
import logging

from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.orm import Session

from takween.database import get_db
from takween.integrations import insights
from takween.models.department import Department
from takween.models.employee import Employee, EmployeeStatus
from takween.models.task import Task
from takween.services import kpi
from takween.utils.auth import require_section
from takween.utils.visibility import filter_employees, filter_tasks

logger = logging.getLogger(__name__)

router = APIRouter()

def _visible_employee_or_404(db: Session, employee_id: int, current_user: Employee) -> Employee:
    employee = db.query(Employee).filter(Employee.id == employee_id).first()
    if not employee or not filter_employees([employee], current_user):
        raise HTTPException(status_code=404, detail="Employee not found")
    return employee

@router.get("/kpi")
def kpi_overview(
    db: Session = Depends(get_db),
    current_user: Employee = Depends(require_section("analytics"))
):
    """KPI ranking and per-department averages over the caller's employees"""
    employees = filter_employees(
        db.query(Employee).filter(Employee.status == EmployeeStatus.ACTIVE).order_by(Employee.id).all(),
        current_user,
    )
    departments = db.query(Department).order_by(Department.name).all()
    best = kpi.top_performer(employees)

    return {
        "average_kpi": kpi.average_kpi(employees),
        "top_performer": {"id": best.id, "name": best.name, "kpi": best.kpi} if best else None,
        "ranking": [
            {"id": employee.id, "name": employee.name, "department_id": employee.department_id, "kpi": employee.kpi}
            for employee in kpi.rank_by_kpi(employees)
        ],
        "departments": kpi.department_kpis(employees, departments),
    }

@router.get("/employees/{employee_id}")
def employee_analytics(
    employee_id: int,
    db: Session = Depends(get_db),
    current_user: Employee = Depends(require_section("analytics"))
):
    employee = _visible_employee_or_404(db, employee_id, current_user)
    tasks = db.query(Task).filter(Task.assigned_to == employee.id).all()
    return kpi.employee_performance(employee, tasks)

@router.get("/employees/{employee_id}/insight")
def employee_insight(
    employee_id: int,
    db: Session = Depends(get_db),
    current_user: Employee = Depends(require_section("analytics"))
):
    """Generated performance review; a fixed message when the service is unavailable"""
    employee = _visible_employee_or_404(db, employee_id, current_user)
    tasks = filter_tasks(db.query(Task).filter(Task.assigned_to == employee.id).all(), current_user)
    analysis = insights.analyze_performance(employee, tasks)
    return {
        "employee_id": employee.id,
        "analysis": analysis,
        "fallback": analysis == insights.FALLBACK_ANALYSIS,
    }
