# takween/routers/attendance.py
import logging
from datetime import datetime
from typing import List

from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.orm import Session

from takween.database import get_db
from takween.models.attendance import AttendanceRecord
from takween.models.employee import Employee
from takween.schemas.attendance import AttendanceOut
from takween.services import attendance
from takween.utils.auth import get_current_user
from takween.utils.visibility import filter_employee_records

logger = logging.getLogger(__name__)

router = APIRouter()

@router.get("/", response_model=List[AttendanceOut])
def list_attendance(
    db: Session = Depends(get_db),
    current_user: Employee = Depends(get_current_user)
):
    records = db.query(AttendanceRecord).order_by(AttendanceRecord.date.desc(), AttendanceRecord.id.desc()).all()
    return filter_employee_records(records, db.query(Employee).all(), current_user)

@router.post("/check-in", response_model=AttendanceOut, status_code=status.HTTP_201_CREATED)
def check_in(
    db: Session = Depends(get_db),
    current_user: Employee = Depends(get_current_user)
):
    now = datetime.now()
    if attendance.todays_record(db, current_user.id, now.date()):
        raise HTTPException(status_code=400, detail="Already checked in today")

    record = attendance.check_in(current_user.id, now)
    db.add(record)
    db.commit()
    db.refresh(record)

    logger.info(f"Employee {current_user.id} checked in at {record.check_in} ({record.status.value})")
    return record

@router.post("/check-out", response_model=AttendanceOut)
def check_out(
    db: Session = Depends(get_db),
    current_user: Employee = Depends(get_current_user)
):
    now = datetime.now()
    record = attendance.todays_record(db, current_user.id, now.date())
    if not record:
        raise HTTPException(status_code=400, detail="No check-in recorded today")

    record.check_out = now.time().replace(microsecond=0)
    db.commit()
    db.refresh(record)
    return record
