import asyncio
from datetime import date, timedelta

from takween.models import Sprint, SprintStatus, Task, TaskStatus
from takween.services import scheduler
from takween.services.notification_service import NotificationService


def _seed(db):
    today = date.today()
    db.add_all([
        Sprint(name="Ending", start_date=today - timedelta(days=10), end_date=today + timedelta(days=2),
               status=SprintStatus.ACTIVE),
        Sprint(name="Far", start_date=today, end_date=today + timedelta(days=20), status=SprintStatus.ACTIVE),
        Sprint(name="Planned", start_date=today, end_date=today + timedelta(days=1), status=SprintStatus.PLANNED),
        Task(title="Late", status=TaskStatus.IN_PROGRESS, assigned_to=1, due_date=today - timedelta(days=1)),
        Task(title="Late but done", status=TaskStatus.COMPLETED, assigned_to=1, due_date=today - timedelta(days=3)),
        Task(title="On time", status=TaskStatus.NEW, assigned_to=1, due_date=today + timedelta(days=3)),
        Task(title="No date", status=TaskStatus.NEW, assigned_to=1),
    ])
    db.commit()


def test_find_expiring_sprints(db):
    _seed(db)
    assert [sprint.name for sprint in scheduler.find_expiring_sprints(db)] == ["Ending"]


def test_find_overdue_tasks(db):
    _seed(db)
    assert [task.title for task in scheduler.find_overdue_tasks(db)] == ["Late"]


def test_jobs_publish_toasts(db):
    _seed(db)
    events = []

    def listener(event_type, data):
        events.append((event_type, data))

    NotificationService.subscribe(listener)
    try:
        task_scheduler = scheduler.TaskScheduler(session_factory=lambda: db)
        assert asyncio.run(task_scheduler.check_expiring_sprints()) == 1
        assert asyncio.run(task_scheduler.check_overdue_tasks()) == 1
    finally:
        NotificationService.unsubscribe(listener)

    assert [event_type for event_type, _ in events] == ["toast", "toast"]
    assert events[0][1]["data"]["days_remaining"] == 2
    assert events[1][1]["toast_type"] == "error"


def test_stopped_scheduler_status():
    assert scheduler.TaskScheduler().get_scheduler_status() == {"status": "stopped", "jobs": []}
