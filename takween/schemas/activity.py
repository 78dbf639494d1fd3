# takween/schemas/activity.py
from pydantic import BaseModel
from typing import Optional
from datetime import datetime

class ActivityOut(BaseModel):
    id: int
    user_id: Optional[int] = None
    action: str
    target: str
    timestamp: datetime

    model_config = {
        "from_attributes": True
    }
