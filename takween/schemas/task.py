# takween/schemas/task.py
from pydantic import BaseModel, Field, field_validator
from datetime import date, datetime
from typing import Dict, List, Optional

from takween.models.task import TaskStatus, TaskPriority, AttachmentType

class CommentCreate(BaseModel):
    text: str

    @field_validator('text')
    @classmethod
    def text_must_not_be_blank(cls, v):
        if not v.strip():
            raise ValueError('Comment text cannot be empty')
        return v.strip()

class CommentOut(BaseModel):
    id: int
    author_id: Optional[int] = None
    text: str
    created_at: datetime

    model_config = {
        "from_attributes": True
    }

class AttachmentIn(BaseModel):
    name: str = Field(min_length=1)
    url: str = Field(min_length=1)
    mime_type: Optional[str] = None

class AttachmentOut(BaseModel):
    id: int
    name: str
    url: str
    type: AttachmentType
    uploaded_at: datetime

    model_config = {
        "from_attributes": True
    }

class TaskCreate(BaseModel):
    # title may come from the KPI rule instead
    title: Optional[str] = None
    description: str = ""
    assigned_to: int
    department_id: Optional[str] = None
    project_id: Optional[int] = None
    priority: TaskPriority = TaskPriority.MEDIUM
    due_date: Optional[date] = None
    estimated_hours: Optional[float] = Field(default=None, ge=0)
    kpi_points: Optional[int] = Field(default=None, ge=0)
    weight: Optional[int] = Field(default=None, ge=0, le=100)
    attachments: List[AttachmentIn] = []
    kpi_rule_id: Optional[int] = None

class BulkTaskRow(BaseModel):
    title: str = ""
    description: str = ""
    priority: TaskPriority = TaskPriority.MEDIUM
    points: int = Field(default=25, ge=0)

class BulkTaskCreate(BaseModel):
    assigned_to: int
    project_id: Optional[int] = None
    due_date: Optional[date] = None
    estimated_hours: float = Field(default=8, ge=0)
    rows: List[BulkTaskRow] = Field(min_length=1)
    attachments: List[AttachmentIn] = []

class TaskUpdate(BaseModel):
    title: Optional[str] = None
    description: Optional[str] = None
    status: Optional[TaskStatus] = None
    priority: Optional[TaskPriority] = None
    assigned_to: Optional[int] = None
    department_id: Optional[str] = None
    project_id: Optional[int] = None
    due_date: Optional[date] = None
    estimated_hours: Optional[float] = Field(default=None, ge=0)
    actual_hours: Optional[float] = Field(default=None, ge=0)
    kpi_points: Optional[int] = Field(default=None, ge=0)
    weight: Optional[int] = Field(default=None, ge=0, le=100)

class TaskStatusUpdate(BaseModel):
    status: TaskStatus

class TaskOut(BaseModel):
    id: int
    title: str
    description: str
    status: TaskStatus
    priority: TaskPriority
    assigned_to: Optional[int] = None
    department_id: Optional[str] = None
    project_id: Optional[int] = None
    due_date: Optional[date] = None
    estimated_hours: float
    actual_hours: float
    kpi_points: int
    weight: int
    created_at: datetime
    updated_at: Optional[datetime] = None
    comments: List[CommentOut] = []
    attachments: List[AttachmentOut] = []

    model_config = {
        "from_attributes": True
    }

class BoardOut(BaseModel):
    columns: Dict[str, List[TaskOut]]
    total: int

class TaskRecordIn(BaseModel):
    """Loose task body accepted by the task store route"""
    title: str
    description: str = ""
    status: TaskStatus = TaskStatus.NEW
    priority: TaskPriority = TaskPriority.MEDIUM
    assigned_to: Optional[int] = None
    department_id: Optional[str] = None
    project_id: Optional[int] = None
    due_date: Optional[date] = None
    estimated_hours: float = 0
    actual_hours: float = 0
    kpi_points: int = 0
    weight: int = 10

class TaskSuggestionRequest(BaseModel):
    goal: str = Field(min_length=1)

class TaskSuggestion(BaseModel):
    title: str
    description: str
    priority: TaskPriority
