# takween/routers/sprints.py
import logging
from datetime import date, timedelta
from typing import List

from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.orm import Session

from takween.config.settings import Settings
from takween.database import get_db
from takween.models.employee import Employee
from takween.models.project import Project
from takween.models.sprint import Sprint, SprintStatus
from takween.schemas.sprint import SprintActionResult, SprintCreate, SprintExtendRequest, SprintOut
from takween.services import sprint_lifecycle
from takween.services.activity_log import record_activity
from takween.services.notification_service import NotificationService
from takween.utils.auth import get_current_user
from takween.utils.visibility import can_manage_sprints, filter_sprints

logger = logging.getLogger(__name__)

router = APIRouter()

def _get_sprint_or_404(db: Session, sprint_id: int, current_user: Employee) -> Sprint:
    sprint = db.query(Sprint).filter(Sprint.id == sprint_id).first()
    if not sprint or not filter_sprints([sprint], db.query(Project).all(), current_user):
        raise HTTPException(status_code=404, detail="Sprint not found")
    return sprint

def _require_sprint_manager(current_user: Employee):
    if not can_manage_sprints(current_user):
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Only admins and department managers can manage sprints"
        )

async def _action_result(db: Session, sprint: Sprint, applied: bool, action: str, current_user: Employee) -> dict:
    """Commit and announce an applied transition; a refused one changes nothing"""
    if applied:
        record_activity(db, current_user, f"{action} sprint", sprint.name)
        db.commit()
        db.refresh(sprint)
        logger.info(f"Sprint {sprint.id} {action} by {current_user.id}")
        await NotificationService.sprint_updated(sprint, action, current_user)
    else:
        db.rollback()
    return {"applied": applied, "sprint": sprint_lifecycle.sprint_summary(sprint)}

@router.get("/", response_model=List[SprintOut])
def list_sprints(
    db: Session = Depends(get_db),
    current_user: Employee = Depends(get_current_user)
):
    sprints = db.query(Sprint).order_by(Sprint.start_date, Sprint.id).all()
    visible = filter_sprints(sprints, db.query(Project).all(), current_user)
    return [sprint_lifecycle.sprint_summary(sprint) for sprint in visible]

@router.post("/", response_model=SprintOut, status_code=status.HTTP_201_CREATED)
def create_sprint(
    payload: SprintCreate,
    db: Session = Depends(get_db),
    current_user: Employee = Depends(get_current_user)
):
    """New PLANNED sprint; dates default to today and the standard sprint length"""
    _require_sprint_manager(current_user)

    start_date = payload.start_date or date.today()
    end_date = payload.end_date or start_date + timedelta(days=Settings.DEFAULT_SPRINT_LENGTH_DAYS)
    if end_date < start_date:
        raise HTTPException(status_code=400, detail="Sprint cannot end before it starts")

    sprint = Sprint(
        name=payload.name,
        project_id=payload.project_id,
        start_date=start_date,
        end_date=end_date,
        status=SprintStatus.PLANNED,
    )
    db.add(sprint)
    record_activity(db, current_user, "created sprint", sprint.name)
    db.commit()
    db.refresh(sprint)
    return sprint_lifecycle.sprint_summary(sprint)

@router.delete("/{sprint_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_sprint(
    sprint_id: int,
    db: Session = Depends(get_db),
    current_user: Employee = Depends(get_current_user)
):
    _require_sprint_manager(current_user)
    sprint = _get_sprint_or_404(db, sprint_id, current_user)

    record_activity(db, current_user, "deleted sprint", sprint.name)
    db.delete(sprint)
    db.commit()

@router.post("/{sprint_id}/activate", response_model=SprintActionResult)
async def activate_sprint(
    sprint_id: int,
    db: Session = Depends(get_db),
    current_user: Employee = Depends(get_current_user)
):
    sprint = _get_sprint_or_404(db, sprint_id, current_user)
    applied = sprint_lifecycle.activate(sprint, current_user)
    return await _action_result(db, sprint, applied, "activated", current_user)

@router.post("/{sprint_id}/close", response_model=SprintActionResult)
async def close_sprint(
    sprint_id: int,
    db: Session = Depends(get_db),
    current_user: Employee = Depends(get_current_user)
):
    sprint = _get_sprint_or_404(db, sprint_id, current_user)
    applied = sprint_lifecycle.close(sprint, current_user)
    return await _action_result(db, sprint, applied, "closed", current_user)

@router.post("/{sprint_id}/reopen", response_model=SprintActionResult)
async def reopen_sprint(
    sprint_id: int,
    db: Session = Depends(get_db),
    current_user: Employee = Depends(get_current_user)
):
    """CLOSED back to ACTIVE, ADMIN only; anyone else gets applied=false"""
    sprint = _get_sprint_or_404(db, sprint_id, current_user)
    applied = sprint_lifecycle.reopen(sprint, current_user)
    return await _action_result(db, sprint, applied, "reopened", current_user)

@router.post("/{sprint_id}/extend", response_model=SprintActionResult)
async def extend_sprint(
    sprint_id: int,
    request: SprintExtendRequest,
    db: Session = Depends(get_db),
    current_user: Employee = Depends(get_current_user)
):
    """Move the end date of an ACTIVE sprint and record the reason"""
    sprint = _get_sprint_or_404(db, sprint_id, current_user)
    extension = sprint_lifecycle.extend(sprint, request.new_end_date, request.reason, current_user)
    return await _action_result(db, sprint, extension is not None, "extended", current_user)
