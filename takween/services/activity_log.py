# takween/services/activity_log.py
from typing import List, Optional
from sqlalchemy.orm import Session

from takween.models.activity import Activity
from takween.models.employee import Employee


def record_activity(db: Session, actor: Optional[Employee], action: str, target: str) -> Activity:
    """Queue an activity row; the caller's commit persists it"""
    activity = Activity(user_id=actor.id if actor else None, action=action, target=target)
    db.add(activity)
    return activity


def recent_activities(db: Session, limit: int = 100) -> List[Activity]:
    return db.query(Activity).order_by(Activity.timestamp.desc(), Activity.id.desc()).limit(limit).all()
