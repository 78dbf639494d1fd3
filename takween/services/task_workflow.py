# takween/services/task_workflow.py
"""Task status moves and small task helpers.

Statuses are an unordered set: a task can be moved from any column to any
other, the same way the kanban board does it on drop.
"""
from collections import OrderedDict
from datetime import date, datetime
from typing import Dict, Iterable, List, Optional

from takween.config.settings import Settings
from takween.models.employee import Employee
from takween.models.task import AttachmentType, Task, TaskPriority, TaskStatus

# Column order of the kanban board
BOARD_COLUMNS = [
    TaskStatus.NEW,
    TaskStatus.IN_PROGRESS,
    TaskStatus.REVIEW,
    TaskStatus.PENDING,
    TaskStatus.COMPLETED,
]


def move_task(task: Task, destination: TaskStatus, actor: Employee) -> dict:
    """Set the task status to the destination column and describe the change.

    Only ``status`` is touched. The returned dict is the status-change event
    pushed to listeners.
    """
    previous = task.status
    task.status = TaskStatus(destination)
    return {
        "task_id": task.id,
        "title": task.title,
        "status": task.status.value,
        "previous_status": TaskStatus(previous).value if previous is not None else None,
        "actor_id": actor.id,
        "actor_name": actor.name,
        "timestamp": datetime.utcnow().isoformat(),
    }


def toggle_completion(task: Task) -> TaskStatus:
    """COMPLETED goes back to IN_PROGRESS, anything else becomes COMPLETED"""
    if task.status == TaskStatus.COMPLETED:
        task.status = TaskStatus.IN_PROGRESS
    else:
        task.status = TaskStatus.COMPLETED
    return task.status


def build_board(tasks: Iterable[Task]) -> Dict[str, List[Task]]:
    board = OrderedDict((status.value, []) for status in BOARD_COLUMNS)
    for task in tasks:
        board[TaskStatus(task.status).value].append(task)
    return board


def classify_attachment(name: str, mime_type: Optional[str] = None) -> AttachmentType:
    """Guess the attachment kind from the file name and MIME type"""
    lowered = name.lower()
    mime_type = (mime_type or "").lower()
    if lowered.endswith((".dwg", ".dxf")):
        return AttachmentType.AUTOCAD
    if lowered.endswith((".max", ".3ds")):
        return AttachmentType.MAX3D
    if mime_type.startswith("image/"):
        return AttachmentType.IMAGE
    if mime_type.startswith("video/"):
        return AttachmentType.VIDEO
    if mime_type == "application/pdf":
        return AttachmentType.PDF
    return AttachmentType.OTHER


def new_task(
    title: str,
    assigned_to: Optional[int],
    department_id: Optional[str],
    description: str = "",
    project_id: Optional[int] = None,
    priority: TaskPriority = TaskPriority.MEDIUM,
    due_date: Optional[date] = None,
    estimated_hours: float = 0,
    kpi_points: int = 0,
    weight: Optional[int] = None,
) -> Task:
    """A fresh NEW task with no hours logged, comments or attachments"""
    return Task(
        title=title,
        description=description,
        status=TaskStatus.NEW,
        priority=priority,
        assigned_to=assigned_to,
        department_id=department_id,
        project_id=project_id,
        due_date=due_date,
        estimated_hours=estimated_hours,
        actual_hours=0,
        kpi_points=kpi_points,
        weight=Settings.DEFAULT_TASK_WEIGHT if weight is None else weight,
    )


def department_for(employee: Optional[Employee]) -> str:
    """Department of the assignee, or the default department when unknown"""
    if employee is None or not employee.department_id:
        return Settings.DEFAULT_DEPARTMENT_ID
    return employee.department_id
