# takween/schemas/project.py
from pydantic import BaseModel, Field
from typing import Optional, List
from datetime import date, datetime

from takween.models.project import ProjectStatus
from .employee import EmployeeBasic
from .task import TaskOut

class ProjectStep(BaseModel):
    title: str = Field(min_length=1)
    weight: int = Field(default=10, ge=0, le=100)

class ProjectCreate(BaseModel):
    name: str = Field(min_length=1)
    client: str = ""
    budget: float = Field(default=0, ge=0)
    status: ProjectStatus = ProjectStatus.ACTIVE
    deadline: Optional[date] = None
    manager_id: int
    department_id: Optional[str] = None
    steps: List[ProjectStep] = []

class ProjectUpdate(BaseModel):
    name: Optional[str] = None
    client: Optional[str] = None
    budget: Optional[float] = Field(default=None, ge=0)
    status: Optional[ProjectStatus] = None
    deadline: Optional[date] = None
    manager_id: Optional[int] = None
    department_id: Optional[str] = None

class ProjectOut(BaseModel):
    id: int
    name: str
    client: str
    budget: float
    status: ProjectStatus
    deadline: Optional[date] = None
    manager_id: Optional[int] = None
    department_id: Optional[str] = None
    created_at: Optional[datetime] = None
    progress: int
    weight_total: int
    weights_balanced: bool
    task_count: int

    model_config = {
        "from_attributes": True
    }

class ProjectDetailOut(ProjectOut):
    manager: Optional[EmployeeBasic] = None
    tasks: List[TaskOut] = []
