from datetime import datetime
from typing import Callable, List, Optional
import logging

from takween.models.employee import Employee
from takween.models.sprint import Sprint
from takween.models.task import Task
from takween.services.websocket_manager import websocket_manager

logger = logging.getLogger(__name__)

# In-process subscribers, called with (event_type, data)
_listeners: List[Callable[[str, dict], None]] = []

class NotificationService:
    """Pushes in-app notifications. Nothing here is persisted."""

    @staticmethod
    def subscribe(listener: Callable[[str, dict], None]) -> None:
        _listeners.append(listener)

    @staticmethod
    def unsubscribe(listener: Callable[[str, dict], None]) -> None:
        if listener in _listeners:
            _listeners.remove(listener)

    @staticmethod
    async def publish(
        event_type: str,
        data: dict,
        employee_id: Optional[int] = None,
        department_id: Optional[str] = None
    ) -> None:
        """Hand an event to local listeners and the WebSocket hub"""
        for listener in list(_listeners):
            try:
                listener(event_type, data)
            except Exception as e:
                logger.error(f"Notification listener failed for {event_type}: {e}")

        if employee_id is not None:
            await websocket_manager.send_to_employee(employee_id, event_type, data)
        elif department_id is not None:
            await websocket_manager.send_to_department(department_id, event_type, data)
        else:
            await websocket_manager.broadcast_to_all(event_type, data)

    @staticmethod
    async def task_status_changed(event: dict) -> None:
        """Broadcast a kanban move"""
        logger.info(f"Task {event['task_id']} moved to {event['status']} by {event['actor_name']}")
        await NotificationService.publish("task_status_changed", event)

    @staticmethod
    async def task_assigned(task: Task, assignee_id: Optional[int], creator: Employee) -> None:
        if assignee_id is None or assignee_id == creator.id:
            return
        await NotificationService.publish(
            "task_assigned",
            {
                "task_id": task.id,
                "title": "New Task Assigned",
                "message": f"You have been assigned a new task: '{task.title}' by {creator.name}",
                "category": "task",
            },
            employee_id=assignee_id,
        )

    @staticmethod
    async def sprint_updated(sprint: Sprint, action: str, actor: Employee) -> None:
        await NotificationService.publish(
            "sprint_updated",
            {
                "sprint_id": sprint.id,
                "name": sprint.name,
                "status": sprint.status.value,
                "end_date": sprint.end_date.isoformat(),
                "action": action,
                "actor_name": actor.name,
                "category": "project",
            },
        )

    @staticmethod
    async def send_toast(
        toast_type: str,
        title: str,
        message: str,
        data: Optional[dict] = None,
        employee_id: Optional[int] = None,
        department_id: Optional[str] = None
    ) -> None:
        """Structured toast; toast_type is success, error, warning or info"""
        await NotificationService.publish(
            "toast",
            {
                "toast_type": toast_type,
                "title": title,
                "message": message,
                "timestamp": datetime.now().isoformat(),
                "data": data or {},
            },
            employee_id=employee_id,
            department_id=department_id,
        )
