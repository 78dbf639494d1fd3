# takween/routers/employees.py
import logging
from typing import List

from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.orm import Session

from takween.database import get_db
from takween.models.employee import Employee, EmployeeStatus, Role
from takween.schemas.employee import EmployeeOut, ApproveRequest, RoleUpdate
from takween.services.activity_log import record_activity
from takween.utils.auth import get_current_user, require_section
from takween.utils.visibility import (
    can_approve_employees, can_grant_role, can_manage_employee, filter_employees, is_admin,
)

logger = logging.getLogger(__name__)

router = APIRouter()

def _get_employee_or_404(db: Session, employee_id: int) -> Employee:
    employee = db.query(Employee).filter(Employee.id == employee_id).first()
    if not employee:
        raise HTTPException(status_code=404, detail="Employee not found")
    return employee

def _require_approver(current_user: Employee):
    if not can_approve_employees(current_user):
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Only admins and department managers can manage employees"
        )

def _require_grantable(current_user: Employee, role: Role):
    if not can_grant_role(current_user, role):
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Only admins can grant the ADMIN role"
        )

@router.get("/me", response_model=EmployeeOut)
def get_me(current_user: Employee = Depends(get_current_user)):
    return current_user

@router.get("/", response_model=List[EmployeeOut])
def list_employees(
    db: Session = Depends(get_db),
    current_user: Employee = Depends(require_section("employees"))
):
    """Active employees visible to the caller"""
    employees = db.query(Employee).filter(Employee.status == EmployeeStatus.ACTIVE).order_by(Employee.id).all()
    return filter_employees(employees, current_user)

@router.get("/pending", response_model=List[EmployeeOut])
def list_pending(
    db: Session = Depends(get_db),
    current_user: Employee = Depends(get_current_user)
):
    """Registration requests waiting for approval"""
    _require_approver(current_user)
    return db.query(Employee).filter(Employee.status == EmployeeStatus.PENDING).order_by(Employee.id.desc()).all()

@router.get("/{employee_id}", response_model=EmployeeOut)
def get_employee(
    employee_id: int,
    db: Session = Depends(get_db),
    current_user: Employee = Depends(get_current_user)
):
    employee = _get_employee_or_404(db, employee_id)
    if employee.id != current_user.id and not filter_employees([employee], current_user):
        raise HTTPException(status_code=404, detail="Employee not found")
    return employee

@router.post("/{employee_id}/approve", response_model=EmployeeOut)
def approve_employee(
    employee_id: int,
    approval: ApproveRequest,
    db: Session = Depends(get_db),
    current_user: Employee = Depends(get_current_user)
):
    """Activate a registration request and place it in a department"""
    _require_approver(current_user)
    _require_grantable(current_user, approval.role)
    if not is_admin(current_user) and approval.department_id != current_user.department_id:
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Department managers can only approve into their own department"
        )
    employee = _get_employee_or_404(db, employee_id)
    if employee.status != EmployeeStatus.PENDING:
        raise HTTPException(status_code=400, detail="Employee is already active")

    employee.status = EmployeeStatus.ACTIVE
    employee.role = approval.role
    employee.department_id = approval.department_id
    record_activity(db, current_user, "approved employee", employee.name)
    db.commit()
    db.refresh(employee)

    logger.info(f"Employee {employee.id} approved by {current_user.id} as {employee.role.value}")
    return employee

@router.patch("/{employee_id}/role", response_model=EmployeeOut)
def update_role(
    employee_id: int,
    update: RoleUpdate,
    db: Session = Depends(get_db),
    current_user: Employee = Depends(get_current_user)
):
    _require_approver(current_user)
    _require_grantable(current_user, update.role)
    employee = _get_employee_or_404(db, employee_id)
    if not can_manage_employee(current_user, employee):
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="You cannot change this employee's role"
        )

    employee.role = update.role
    record_activity(db, current_user, f"changed role to {update.role.value}", employee.name)
    db.commit()
    db.refresh(employee)
    return employee
