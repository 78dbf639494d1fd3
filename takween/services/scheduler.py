# takween/services/scheduler.py
"""
Scheduler for sprint expiry warnings and overdue task reminders
"""

from datetime import date
from typing import Any, Callable, Dict, List, Optional
import logging

from apscheduler.schedulers.asyncio import AsyncIOScheduler
from apscheduler.triggers.interval import IntervalTrigger
from apscheduler.triggers.cron import CronTrigger
from sqlalchemy.orm import Session

from takween.database import SessionLocal
from takween.models import Sprint, SprintStatus, Task, TaskStatus
from takween.services import sprint_lifecycle
from takween.services.notification_service import NotificationService

logger = logging.getLogger(__name__)


def find_expiring_sprints(db: Session, today: Optional[date] = None) -> List[Sprint]:
    """ACTIVE sprints ending within the warning window"""
    active = db.query(Sprint).filter(Sprint.status == SprintStatus.ACTIVE).all()
    return [sprint for sprint in active if sprint_lifecycle.is_expiring_soon(sprint, today)]


def find_overdue_tasks(db: Session, today: Optional[date] = None) -> List[Task]:
    """Open tasks whose due date has passed"""
    today = today or date.today()
    return db.query(Task).filter(
        Task.due_date.isnot(None),
        Task.due_date < today,
        Task.status != TaskStatus.COMPLETED,
    ).all()


class TaskScheduler:
    """Periodic checks that push warnings to connected clients"""

    def __init__(self, session_factory: Callable[[], Session] = SessionLocal):
        self.scheduler = AsyncIOScheduler()
        self.session_factory = session_factory
        self.is_running = False

    def start(self):
        """Start the scheduler"""
        if self.is_running:
            return

        self.scheduler.add_job(
            self.check_expiring_sprints,
            trigger=IntervalTrigger(hours=1),
            id='check_expiring_sprints',
            name='Check Expiring Sprints',
            replace_existing=True
        )

        self.scheduler.add_job(
            self.check_expiring_sprints,
            trigger=CronTrigger(hour=8, minute=0),
            id='daily_expiring_sprints',
            name='Daily Expiring Sprints Check',
            replace_existing=True
        )

        self.scheduler.add_job(
            self.check_overdue_tasks,
            trigger=CronTrigger(hour=9, minute=0),
            id='daily_overdue_tasks',
            name='Daily Overdue Tasks Check',
            replace_existing=True
        )

        self.scheduler.start()
        self.is_running = True
        logger.info("Scheduler started successfully")

    def stop(self):
        """Stop the scheduler"""
        if self.is_running:
            self.scheduler.shutdown()
            self.is_running = False
            logger.info("Scheduler stopped")

    async def check_expiring_sprints(self) -> int:
        """Warn every client about sprints close to their end date"""
        logger.info("Checking for expiring sprints...")
        db = self.session_factory()
        try:
            sprints = find_expiring_sprints(db)
            logger.info(f"Found {len(sprints)} expiring sprints")
            for sprint in sprints:
                remaining = sprint_lifecycle.days_remaining(sprint)
                await NotificationService.send_toast(
                    "warning",
                    "Sprint ending soon",
                    f"Sprint '{sprint.name}' ends in {remaining} day(s) on {sprint.end_date.isoformat()}",
                    data={"sprint_id": sprint.id, "days_remaining": remaining},
                )
            return len(sprints)
        except Exception as e:
            logger.error(f"Error checking expiring sprints: {e}")
            raise
        finally:
            db.close()

    async def check_overdue_tasks(self) -> int:
        """Remind assignees about their overdue tasks"""
        logger.info("Checking for overdue tasks...")
        db = self.session_factory()
        try:
            tasks = find_overdue_tasks(db)
            logger.info(f"Found {len(tasks)} overdue tasks")
            for task in tasks:
                if task.assigned_to is None:
                    continue
                await NotificationService.send_toast(
                    "error",
                    "Task overdue",
                    f"Task '{task.title}' was due on {task.due_date.isoformat()}",
                    data={"task_id": task.id},
                    employee_id=task.assigned_to,
                )
            return len(tasks)
        except Exception as e:
            logger.error(f"Error checking overdue tasks: {e}")
            raise
        finally:
            db.close()

    def get_scheduler_status(self) -> Dict[str, Any]:
        """Scheduler status and job information"""
        if not self.is_running:
            return {"status": "stopped", "jobs": []}

        jobs = []
        for job in self.scheduler.get_jobs():
            jobs.append({
                "id": job.id,
                "name": job.name,
                "next_run_time": job.next_run_time.isoformat() if job.next_run_time else None,
                "trigger": str(job.trigger)
            })

        return {
            "status": "running",
            "jobs": jobs
        }

# Global scheduler instance
task_scheduler = TaskScheduler()
