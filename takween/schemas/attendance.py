# takween/schemas/attendance.py
from pydantic import BaseModel
from typing import Optional
from datetime import date, time

from takween.models.attendance import AttendanceStatus

class AttendanceOut(BaseModel):
    id: int
    employee_id: int
    date: date
    check_in: time
    check_out: Optional[time] = None
    status: AttendanceStatus

    model_config = {
        "from_attributes": True
    }
