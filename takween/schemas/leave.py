# takween/schemas/leave.py
from pydantic import BaseModel, field_validator, ValidationInfo
from typing import Optional
from datetime import date, datetime

from takween.models.leave import LeaveType, LeaveStatus

class LeaveCreate(BaseModel):
    type: LeaveType
    start_date: date
    end_date: date
    reason: str
    attachment_url: Optional[str] = None

    @field_validator('end_date')
    @classmethod
    def end_date_not_before_start(cls, v, info: ValidationInfo):
        start = info.data.get('start_date')
        if start and v < start:
            raise ValueError('End date cannot be before start date')
        return v

class LeaveOut(BaseModel):
    id: int
    employee_id: int
    type: LeaveType
    start_date: date
    end_date: date
    reason: str
    status: LeaveStatus
    attachment_url: Optional[str] = None
    created_at: datetime

    model_config = {
        "from_attributes": True
    }
