# takween/routers/leaves.py
import logging
from typing import List

from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.orm import Session

from takween.database import get_db
from takween.models.employee import Employee
from takween.models.leave import LeaveRequest, LeaveStatus
from takween.schemas.leave import LeaveCreate, LeaveOut
from takween.services.activity_log import record_activity
from takween.services.notification_service import NotificationService
from takween.utils.auth import get_current_user
from takween.utils.visibility import can_decide_leave, filter_employee_records

logger = logging.getLogger(__name__)

router = APIRouter()

@router.get("/", response_model=List[LeaveOut])
def list_leaves(
    db: Session = Depends(get_db),
    current_user: Employee = Depends(get_current_user)
):
    requests = db.query(LeaveRequest).order_by(LeaveRequest.created_at.desc(), LeaveRequest.id.desc()).all()
    return filter_employee_records(requests, db.query(Employee).all(), current_user)

@router.post("/", response_model=LeaveOut, status_code=status.HTTP_201_CREATED)
def request_leave(
    leave: LeaveCreate,
    db: Session = Depends(get_db),
    current_user: Employee = Depends(get_current_user)
):
    """Leave request for the caller, PENDING until decided"""
    db_leave = LeaveRequest(
        employee_id=current_user.id,
        type=leave.type,
        start_date=leave.start_date,
        end_date=leave.end_date,
        reason=leave.reason,
        attachment_url=leave.attachment_url,
        status=LeaveStatus.PENDING,
    )
    db.add(db_leave)
    record_activity(db, current_user, f"requested {leave.type.value} leave", f"{leave.start_date} to {leave.end_date}")
    db.commit()
    db.refresh(db_leave)
    return db_leave

async def _decide(db: Session, leave_id: int, decision: LeaveStatus, current_user: Employee) -> LeaveRequest:
    leave = db.query(LeaveRequest).filter(LeaveRequest.id == leave_id).first()
    if not leave:
        raise HTTPException(status_code=404, detail="Leave request not found")

    requester = db.query(Employee).filter(Employee.id == leave.employee_id).first()
    if not can_decide_leave(current_user, requester):
        raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail="You cannot decide this leave request")
    if leave.status != LeaveStatus.PENDING:
        raise HTTPException(status_code=400, detail="Leave request has already been decided")

    leave.status = decision
    record_activity(db, current_user, f"{decision.value.lower()} leave", requester.name if requester else str(leave.employee_id))
    db.commit()
    db.refresh(leave)

    logger.info(f"Leave {leave.id} {decision.value} by {current_user.id}")
    await NotificationService.send_toast(
        "success" if decision == LeaveStatus.APPROVED else "warning",
        "Leave request updated",
        f"Your leave request from {leave.start_date} to {leave.end_date} was {decision.value.lower()}",
        data={"leave_id": leave.id},
        employee_id=leave.employee_id,
    )
    return leave

@router.post("/{leave_id}/approve", response_model=LeaveOut)
async def approve_leave(
    leave_id: int,
    db: Session = Depends(get_db),
    current_user: Employee = Depends(get_current_user)
):
    return await _decide(db, leave_id, LeaveStatus.APPROVED, current_user)

@router.post("/{leave_id}/reject", response_model=LeaveOut)
async def reject_leave(
    leave_id: int,
    db: Session = Depends(get_db),
    current_user: Employee = Depends(get_current_user)
):
    return await _decide(db, leave_id, LeaveStatus.REJECTED, current_user)
