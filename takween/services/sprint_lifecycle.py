# takween/services/sprint_lifecycle.py
"""Sprint status transitions and the reschedule ledger.

Transitions the table below does not allow, or that the acting role may not
perform, leave the sprint untouched and report ``False``.
"""
import logging
from datetime import date, datetime
from typing import Optional

from takween.config.settings import Settings
from takween.models.employee import Employee, Role
from takween.models.sprint import Sprint, SprintExtension, SprintStatus

logger = logging.getLogger(__name__)

# (from, to) -> roles allowed to perform it
TRANSITIONS = {
    (SprintStatus.PLANNED, SprintStatus.ACTIVE): {Role.ADMIN, Role.DEPT_MANAGER},
    (SprintStatus.ACTIVE, SprintStatus.CLOSED): {Role.ADMIN, Role.DEPT_MANAGER},
    (SprintStatus.CLOSED, SprintStatus.ACTIVE): {Role.ADMIN},
}


def can_transition(sprint: Sprint, target: SprintStatus, actor: Employee) -> bool:
    allowed_roles = TRANSITIONS.get((SprintStatus(sprint.status), SprintStatus(target)))
    return bool(allowed_roles) and actor.role in allowed_roles


def change_status(sprint: Sprint, target: SprintStatus, actor: Employee) -> bool:
    """Apply a status transition when the table permits it for the actor"""
    if not can_transition(sprint, target, actor):
        logger.info(
            f"Sprint {sprint.id}: {actor.role.value} may not move {sprint.status.value} -> {SprintStatus(target).value}"
        )
        return False
    sprint.status = SprintStatus(target)
    return True


def activate(sprint: Sprint, actor: Employee) -> bool:
    if sprint.status != SprintStatus.PLANNED:
        return False
    return change_status(sprint, SprintStatus.ACTIVE, actor)


def close(sprint: Sprint, actor: Employee) -> bool:
    return change_status(sprint, SprintStatus.CLOSED, actor)


def reopen(sprint: Sprint, actor: Employee) -> bool:
    if sprint.status != SprintStatus.CLOSED:
        return False
    return change_status(sprint, SprintStatus.ACTIVE, actor)


def extend(sprint: Sprint, new_end_date: date, reason: str, actor: Employee) -> Optional[SprintExtension]:
    """Push the end date of an ACTIVE sprint and record the change.

    ADMIN only. Returns the appended ledger entry, or None when nothing was
    done.
    """
    if actor.role != Role.ADMIN or sprint.status != SprintStatus.ACTIVE:
        return None
    if not reason or not reason.strip():
        return None
    if new_end_date < sprint.end_date:
        logger.warning(f"Sprint {sprint.id} end date moved backwards: {sprint.end_date} -> {new_end_date}")

    extension = SprintExtension(
        old_end_date=sprint.end_date,
        new_end_date=new_end_date,
        reason=reason.strip(),
        extended_at=datetime.utcnow(),
        extended_by=actor.id,
    )
    sprint.extensions.append(extension)
    sprint.end_date = new_end_date
    return extension


def days_remaining(sprint: Sprint, today: Optional[date] = None) -> int:
    today = today or date.today()
    return (sprint.end_date - today).days


def is_expiring_soon(sprint: Sprint, today: Optional[date] = None) -> bool:
    if sprint.status != SprintStatus.ACTIVE:
        return False
    remaining = days_remaining(sprint, today)
    return 0 <= remaining <= Settings.SPRINT_EXPIRY_WARNING_DAYS


def sprint_summary(sprint: Sprint, today: Optional[date] = None) -> dict:
    """Sprint fields plus the derived countdown figures"""
    return {
        "id": sprint.id,
        "name": sprint.name,
        "start_date": sprint.start_date,
        "end_date": sprint.end_date,
        "status": sprint.status,
        "project_id": sprint.project_id,
        "extensions": sprint.extensions,
        "days_remaining": days_remaining(sprint, today),
        "is_expiring_soon": is_expiring_soon(sprint, today),
    }
