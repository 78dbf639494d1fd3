# takween/schemas/sprint.py
from pydantic import BaseModel, field_validator
from typing import Optional, List
from datetime import date, datetime

from takween.models.sprint import SprintStatus

class SprintCreate(BaseModel):
    name: str
    project_id: int
    start_date: Optional[date] = None
    end_date: Optional[date] = None

    @field_validator('name')
    @classmethod
    def name_must_not_be_blank(cls, v):
        if not v.strip():
            raise ValueError('Sprint name cannot be empty')
        return v.strip()

class SprintExtendRequest(BaseModel):
    new_end_date: date
    reason: str

class SprintExtensionOut(BaseModel):
    id: int
    old_end_date: date
    new_end_date: date
    reason: str
    extended_at: datetime
    extended_by: Optional[int] = None

    model_config = {
        "from_attributes": True
    }

class SprintOut(BaseModel):
    id: int
    name: str
    start_date: date
    end_date: date
    status: SprintStatus
    project_id: Optional[int] = None
    extensions: List[SprintExtensionOut] = []
    days_remaining: int
    is_expiring_soon: bool

class SprintActionResult(BaseModel):
    applied: bool
    sprint: SprintOut
