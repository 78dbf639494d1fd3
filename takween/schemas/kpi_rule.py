# takween/schemas/kpi_rule.py
from pydantic import BaseModel, Field

class KpiRuleCreate(BaseModel):
    title: str = Field(min_length=1)
    category: str = "General"
    default_points: int = Field(default=20, ge=0)
    default_hours: float = Field(default=2, ge=0)

class KpiRuleOut(BaseModel):
    id: int
    title: str
    category: str
    default_points: int
    default_hours: float

    model_config = {
        "from_attributes": True
    }
