# takween/services/attendance.py
from datetime import date, datetime, time
from typing import Optional

from sqlalchemy.orm import Session

from takween.config.settings import Settings
from takween.models.attendance import AttendanceRecord, AttendanceStatus


def arrival_status(check_in: time, workday_start: Optional[time] = None) -> AttendanceStatus:
    """LATE strictly after the workday start, PRESENT otherwise"""
    workday_start = workday_start or Settings.get_workday_start()
    return AttendanceStatus.LATE if check_in > workday_start else AttendanceStatus.PRESENT


def todays_record(db: Session, employee_id: int, today: Optional[date] = None) -> Optional[AttendanceRecord]:
    today = today or date.today()
    return db.query(AttendanceRecord).filter(
        AttendanceRecord.employee_id == employee_id,
        AttendanceRecord.date == today,
    ).first()


def check_in(employee_id: int, now: Optional[datetime] = None) -> AttendanceRecord:
    now = now or datetime.now()
    arrived = now.time().replace(microsecond=0)
    return AttendanceRecord(
        employee_id=employee_id,
        date=now.date(),
        check_in=arrived,
        status=arrival_status(arrived),
    )
