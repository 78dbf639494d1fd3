# takween/routers/activity.py
from typing import List

from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from takween.database import get_db
from takween.models.employee import Employee
from takween.schemas.activity import ActivityOut
from takween.services.activity_log import recent_activities
from takween.utils.auth import require_section

router = APIRouter()

@router.get("/", response_model=List[ActivityOut])
def list_activity(
    limit: int = Query(default=100, ge=1, le=500),
    db: Session = Depends(get_db),
    current_user: Employee = Depends(require_section("activity"))
):
    """Newest first"""
    return recent_activities(db, limit=limit)
