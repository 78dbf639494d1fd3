# takween/schemas/department.py
from pydantic import BaseModel
from typing import Optional

class DepartmentOut(BaseModel):
    id: str
    name: str
    color: str
    kpi_target: Optional[float] = None
    employee_count: int
    average_kpi: float
    task_count: int
