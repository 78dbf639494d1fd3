# takween/seed.py
"""Deterministic demo workspace: departments, KPI rules, staff, projects,
sprints and a starter task. Seeding is skipped when employees exist.
"""
import logging
from datetime import date, timedelta

from sqlalchemy.orm import Session

from takween.models import (
    Department, Employee, EmployeeStatus, KpiRule, Project, ProjectStatus, Role,
    Sprint, SprintStatus, Task, TaskPriority, TaskStatus,
)
from takween.utils.security import hash_password

logger = logging.getLogger(__name__)

DEMO_PASSWORD = "takween123"

DEMO_DEPARTMENTS = [
    {"id": "arch", "name": "Architecture", "color": "#2563eb"},
    {"id": "struct", "name": "Structural", "color": "#10b981"},
    {"id": "interior", "name": "Interior Design", "color": "#ec4899"},
    {"id": "market", "name": "Marketing", "color": "#8b5cf6"},
    {"id": "hr", "name": "Human Resources", "color": "#06b6d4"},
    {"id": "acc", "name": "Accounting", "color": "#ef4444"},
]

DEMO_KPI_RULES = [
    {"title": "Final drawings review", "category": "Design", "default_points": 50, "default_hours": 4},
    {"title": "Quantity take-off", "category": "Engineering", "default_points": 30, "default_hours": 8},
    {"title": "Site visit and inspection", "category": "Supervision", "default_points": 40, "default_hours": 3},
    {"title": "3D facade design", "category": "Architecture", "default_points": 100, "default_hours": 12},
    {"title": "Monthly financial report", "category": "Management", "default_points": 20, "default_hours": 2},
]

FIRST_NAMES = ["Omar", "Zainab", "Mohammed", "Layla", "Khaled", "Fatima", "Yassin", "Noor", "Youssef", "Maryam"]
LAST_NAMES = ["Al-Sayed", "Mansour", "Kamel", "Jalal", "Bassem", "Radi", "Hammad", "Abbas"]


def demo_employees():
    employees = [
        {
            "name": "Eng. Ahmed Mahmoud", "email": "admin@takween.com", "role": Role.ADMIN,
            "department_id": "arch", "kpi": 94, "joined_date": date(2023, 1, 15),
        },
        {
            "name": "Eng. Sara Khaled", "email": "sara@takween.com", "role": Role.DEPT_MANAGER,
            "department_id": "interior", "kpi": 88, "joined_date": date(2023, 3, 10),
        },
    ]
    for i in range(3, 25):
        employees.append({
            "name": f"Eng. {FIRST_NAMES[i % len(FIRST_NAMES)]} {LAST_NAMES[i % len(LAST_NAMES)]}",
            "email": f"user{i}@takween.com",
            "role": Role.TEAM_LEADER if i < 10 else Role.EMPLOYEE,
            "department_id": DEMO_DEPARTMENTS[i % len(DEMO_DEPARTMENTS)]["id"],
            # Spread scores over 60-99 without randomness
            "kpi": 60 + (i * 7) % 40,
            "joined_date": date(2023, 6, 1),
        })
    return employees


def seed_demo_data(db: Session) -> bool:
    """Populate an empty database. Returns False when data is already there."""
    if db.query(Employee).count() > 0:
        logger.info("Database already has employees, skipping demo seed")
        return False

    try:
        db.add_all(Department(**department) for department in DEMO_DEPARTMENTS)
        db.add_all(KpiRule(**rule) for rule in DEMO_KPI_RULES)

        password = hash_password(DEMO_PASSWORD)
        employees = []
        for data in demo_employees():
            employee = Employee(
                hashed_password=password,
                avatar=f"https://i.pravatar.cc/150?u={data['email']}",
                status=EmployeeStatus.ACTIVE,
                **data
            )
            db.add(employee)
            employees.append(employee)
        db.flush()
        admin, sara = employees[0], employees[1]

        today = date.today()
        tower = Project(
            name="Takween Residential Tower", client="Emaar Real Estate", budget=5000000,
            status=ProjectStatus.ACTIVE, deadline=today + timedelta(days=400),
            manager_id=admin.id, department_id="arch",
        )
        villa = Project(
            name="Royal Villa - Dubai", client="Private client", budget=1200000,
            status=ProjectStatus.ACTIVE, deadline=today + timedelta(days=120),
            manager_id=sara.id, department_id="interior",
        )
        campus = Project(
            name="Science Oasis Campus", client="University of Bahrain", budget=8500000,
            status=ProjectStatus.ON_HOLD, deadline=today + timedelta(days=600),
            manager_id=admin.id, department_id="struct",
        )
        db.add_all([tower, villa, campus])
        db.flush()

        db.add_all([
            Sprint(
                name="Foundation designs - phase 1", start_date=today - timedelta(days=12),
                end_date=today + timedelta(days=2), status=SprintStatus.ACTIVE, project_id=tower.id,
            ),
            Sprint(
                name="Interior - royal suite", start_date=today + timedelta(days=3),
                end_date=today + timedelta(days=17), status=SprintStatus.PLANNED, project_id=villa.id,
            ),
        ])

        db.add_all([
            Task(
                title="Administrative building facade design",
                description="Review the final drawings of the main building facade for the tower project.",
                status=TaskStatus.IN_PROGRESS, priority=TaskPriority.HIGH,
                assigned_to=admin.id, department_id="arch", project_id=tower.id,
                due_date=today + timedelta(days=2), estimated_hours=20, actual_hours=5,
                kpi_points=50, weight=20,
            ),
            Task(
                title="Royal suite material board",
                description="Finishes and lighting selection for the royal suite.",
                status=TaskStatus.NEW, priority=TaskPriority.MEDIUM,
                assigned_to=sara.id, department_id="interior", project_id=villa.id,
                due_date=today + timedelta(days=17), estimated_hours=8,
                kpi_points=40, weight=40,
            ),
        ])

        db.commit()
    except Exception as e:
        db.rollback()
        logger.error(f"Error seeding demo data: {e}")
        raise

    logger.info(f"Seeded {len(employees)} demo employees (password '{DEMO_PASSWORD}')")
    return True
