# takween/routers/tasks.py
import logging
from typing import List, Optional

from fastapi import APIRouter, Depends, HTTPException, Query, status
from sqlalchemy.orm import Session

from takween.database import get_db
from takween.integrations import insights
from takween.models.employee import Employee
from takween.models.kpi_rule import KpiRule
from takween.models.task import Task, TaskAttachment, TaskComment, TaskStatus
from takween.schemas.task import (
    AttachmentIn, AttachmentOut, BoardOut, BulkTaskCreate, CommentCreate, CommentOut,
    TaskCreate, TaskOut, TaskStatusUpdate, TaskSuggestion, TaskSuggestionRequest, TaskUpdate,
)
from takween.services import task_workflow
from takween.services.activity_log import record_activity
from takween.services.notification_service import NotificationService
from takween.utils.auth import get_current_user
from takween.utils.visibility import (
    can_create_tasks, can_delete_tasks, can_edit_tasks, can_view_task, filter_tasks,
)

logger = logging.getLogger(__name__)

router = APIRouter()

BULK_DEFAULT_DESCRIPTION = "Task created as part of a bulk assignment"

def _get_task_or_404(db: Session, task_id: int, current_user: Employee) -> Task:
    task = db.query(Task).filter(Task.id == task_id).first()
    # Tasks outside the caller's scope look the same as missing ones
    if not task or not can_view_task(current_user, task):
        raise HTTPException(status_code=404, detail="Task not found")
    return task

def _attachment_rows(attachments: List[AttachmentIn]) -> List[TaskAttachment]:
    return [
        TaskAttachment(
            name=attachment.name,
            url=attachment.url,
            type=task_workflow.classify_attachment(attachment.name, attachment.mime_type),
        )
        for attachment in attachments
    ]

def _require_creator(current_user: Employee):
    if not can_create_tasks(current_user):
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Only admins and department managers can assign tasks"
        )

@router.get("/", response_model=List[TaskOut])
def list_tasks(
    personal: bool = False,
    status_filter: Optional[TaskStatus] = Query(default=None, alias="status"),
    project_id: Optional[int] = None,
    db: Session = Depends(get_db),
    current_user: Employee = Depends(get_current_user)
):
    """Tasks in the caller's scope; personal=true keeps only the caller's own"""
    tasks = db.query(Task).order_by(Task.id.desc()).all()
    visible = filter_tasks(tasks, current_user, personal=personal)
    if status_filter is not None:
        visible = [task for task in visible if task.status == status_filter]
    if project_id is not None:
        visible = [task for task in visible if task.project_id == project_id]
    return visible

@router.get("/board", response_model=BoardOut)
def get_board(
    personal: bool = False,
    db: Session = Depends(get_db),
    current_user: Employee = Depends(get_current_user)
):
    """Kanban columns in board order"""
    tasks = filter_tasks(db.query(Task).order_by(Task.id.desc()).all(), current_user, personal=personal)
    return {"columns": task_workflow.build_board(tasks), "total": len(tasks)}

@router.post("/suggestions", response_model=List[TaskSuggestion])
def suggest_tasks(
    request: TaskSuggestionRequest,
    current_user: Employee = Depends(get_current_user)
):
    """Task ideas from the insights API; empty when it is unavailable"""
    _require_creator(current_user)
    return insights.suggest_tasks(request.goal)

@router.post("/", response_model=TaskOut, status_code=status.HTTP_201_CREATED)
async def create_task(
    payload: TaskCreate,
    db: Session = Depends(get_db),
    current_user: Employee = Depends(get_current_user)
):
    _require_creator(current_user)

    title = payload.title
    kpi_points = payload.kpi_points
    estimated_hours = payload.estimated_hours
    if payload.kpi_rule_id is not None:
        rule = db.query(KpiRule).filter(KpiRule.id == payload.kpi_rule_id).first()
        if not rule:
            raise HTTPException(status_code=404, detail="KPI rule not found")
        title = title or rule.title
        kpi_points = rule.default_points if kpi_points is None else kpi_points
        estimated_hours = rule.default_hours if estimated_hours is None else estimated_hours

    if not title or not title.strip():
        raise HTTPException(status_code=400, detail="Task title is required")

    department_id = payload.department_id
    if department_id is None:
        assignee = db.query(Employee).filter(Employee.id == payload.assigned_to).first()
        department_id = task_workflow.department_for(assignee)

    task = task_workflow.new_task(
        title=title.strip(),
        description=payload.description,
        assigned_to=payload.assigned_to,
        department_id=department_id,
        project_id=payload.project_id,
        priority=payload.priority,
        due_date=payload.due_date,
        estimated_hours=estimated_hours if estimated_hours is not None else 8,
        kpi_points=kpi_points if kpi_points is not None else 25,
        weight=payload.weight,
    )
    task.attachments = _attachment_rows(payload.attachments)

    db.add(task)
    db.flush()
    record_activity(db, current_user, "created task", task.title)
    db.commit()
    db.refresh(task)

    logger.info(f"Task {task.id} created by {current_user.id} for {task.assigned_to}")
    await NotificationService.task_assigned(task, task.assigned_to, current_user)
    return task

@router.post("/bulk", response_model=List[TaskOut], status_code=status.HTTP_201_CREATED)
async def create_tasks_bulk(
    payload: BulkTaskCreate,
    db: Session = Depends(get_db),
    current_user: Employee = Depends(get_current_user)
):
    """One task per non-blank row, all sharing assignee, project and due date"""
    _require_creator(current_user)

    assignee = db.query(Employee).filter(Employee.id == payload.assigned_to).first()
    department_id = task_workflow.department_for(assignee)

    created = []
    for row in payload.rows:
        if not row.title.strip():
            continue
        task = task_workflow.new_task(
            title=row.title.strip(),
            description=row.description or BULK_DEFAULT_DESCRIPTION,
            assigned_to=payload.assigned_to,
            department_id=department_id,
            project_id=payload.project_id,
            priority=row.priority,
            due_date=payload.due_date,
            estimated_hours=payload.estimated_hours,
            kpi_points=row.points,
        )
        task.attachments = _attachment_rows(payload.attachments)
        db.add(task)
        created.append(task)

    if not created:
        raise HTTPException(status_code=400, detail="At least one task needs a title")

    record_activity(db, current_user, f"created {len(created)} tasks", assignee.name if assignee else str(payload.assigned_to))
    db.commit()
    for task in created:
        db.refresh(task)

    for task in created:
        await NotificationService.task_assigned(task, task.assigned_to, current_user)
    return created

@router.get("/{task_id}", response_model=TaskOut)
def get_task(
    task_id: int,
    db: Session = Depends(get_db),
    current_user: Employee = Depends(get_current_user)
):
    return _get_task_or_404(db, task_id, current_user)

@router.patch("/{task_id}", response_model=TaskOut)
def update_task(
    task_id: int,
    update: TaskUpdate,
    db: Session = Depends(get_db),
    current_user: Employee = Depends(get_current_user)
):
    """Detail-modal edit"""
    if not can_edit_tasks(current_user):
        raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail="You cannot edit tasks")
    task = _get_task_or_404(db, task_id, current_user)

    for field, value in update.model_dump(exclude_unset=True, exclude_none=True).items():
        setattr(task, field, value)

    db.commit()
    db.refresh(task)
    return task

@router.patch("/{task_id}/status", response_model=TaskOut)
async def move_task(
    task_id: int,
    update: TaskStatusUpdate,
    db: Session = Depends(get_db),
    current_user: Employee = Depends(get_current_user)
):
    """Kanban drop: the task takes the destination column's status"""
    task = _get_task_or_404(db, task_id, current_user)

    event = task_workflow.move_task(task, update.status, current_user)
    record_activity(db, current_user, f"moved task to {update.status.value}", task.title)
    db.commit()
    db.refresh(task)

    await NotificationService.task_status_changed(event)
    return task

@router.post("/{task_id}/comments", response_model=CommentOut, status_code=status.HTTP_201_CREATED)
def add_comment(
    task_id: int,
    comment: CommentCreate,
    db: Session = Depends(get_db),
    current_user: Employee = Depends(get_current_user)
):
    task = _get_task_or_404(db, task_id, current_user)

    row = TaskComment(author_id=current_user.id, text=comment.text)
    task.comments.append(row)
    db.commit()
    db.refresh(row)
    return row

@router.post("/{task_id}/attachments", response_model=List[AttachmentOut], status_code=status.HTTP_201_CREATED)
def add_attachments(
    task_id: int,
    attachments: List[AttachmentIn],
    db: Session = Depends(get_db),
    current_user: Employee = Depends(get_current_user)
):
    """Attach file references (name and URL); nothing is uploaded"""
    task = _get_task_or_404(db, task_id, current_user)

    rows = _attachment_rows(attachments)
    task.attachments.extend(rows)
    db.commit()
    for row in rows:
        db.refresh(row)
    return rows

@router.delete("/{task_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_task(
    task_id: int,
    db: Session = Depends(get_db),
    current_user: Employee = Depends(get_current_user)
):
    if not can_delete_tasks(current_user):
        raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail="Only admins can delete tasks")
    task = _get_task_or_404(db, task_id, current_user)

    record_activity(db, current_user, "deleted task", task.title)
    db.delete(task)
    db.commit()
    logger.info(f"Task {task_id} deleted by {current_user.id}")
