# takween/routers/projects.py
import logging
from typing import List

from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.orm import Session

from takween.database import get_db
from takween.models.employee import Employee
from takween.models.project import Project
from takween.models.task import Task
from takween.schemas.project import ProjectCreate, ProjectDetailOut, ProjectOut, ProjectStep, ProjectUpdate
from takween.schemas.task import TaskOut
from takween.services import kpi, task_workflow
from takween.services.activity_log import record_activity
from takween.utils.auth import get_current_user
from takween.utils.visibility import can_manage_projects, can_toggle_project_step, can_view_project, filter_projects

logger = logging.getLogger(__name__)

router = APIRouter()

STEP_ESTIMATED_HOURS = 8

def _project_out(project: Project, tasks: List[Task]) -> dict:
    total = kpi.weight_total(tasks)
    return {
        "id": project.id,
        "name": project.name,
        "client": project.client,
        "budget": project.budget,
        "status": project.status,
        "deadline": project.deadline,
        "manager_id": project.manager_id,
        "department_id": project.department_id,
        "created_at": project.created_at,
        "progress": kpi.project_progress(tasks),
        "weight_total": total,
        "weights_balanced": total == 100,
        "task_count": len(tasks),
    }

def _project_tasks(db: Session, project_id: int) -> List[Task]:
    return db.query(Task).filter(Task.project_id == project_id).order_by(Task.id).all()

def _get_project_or_404(db: Session, project_id: int, current_user: Employee) -> Project:
    project = db.query(Project).filter(Project.id == project_id).first()
    if not project or not can_view_project(current_user, project):
        raise HTTPException(status_code=404, detail="Project not found")
    return project

def _require_project_admin(current_user: Employee):
    if not can_manage_projects(current_user):
        raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail="Only admins can manage projects")

def _step_task(project: Project, step: ProjectStep, manager) -> Task:
    return task_workflow.new_task(
        title=step.title.strip(),
        description=f"Project step of {project.name}",
        assigned_to=project.manager_id,
        department_id=task_workflow.department_for(manager),
        project_id=project.id,
        due_date=project.deadline,
        estimated_hours=STEP_ESTIMATED_HOURS,
        kpi_points=step.weight * 2,
        weight=step.weight,
    )

@router.get("/", response_model=List[ProjectOut])
def list_projects(
    db: Session = Depends(get_db),
    current_user: Employee = Depends(get_current_user)
):
    """Projects visible to the caller with their weighted progress"""
    projects = filter_projects(db.query(Project).order_by(Project.id).all(), current_user)
    tasks = db.query(Task).filter(Task.project_id.isnot(None)).all()

    by_project = {}
    for task in tasks:
        by_project.setdefault(task.project_id, []).append(task)
    return [_project_out(project, by_project.get(project.id, [])) for project in projects]

@router.get("/{project_id}", response_model=ProjectDetailOut)
def get_project(
    project_id: int,
    db: Session = Depends(get_db),
    current_user: Employee = Depends(get_current_user)
):
    project = _get_project_or_404(db, project_id, current_user)
    tasks = _project_tasks(db, project.id)

    result = _project_out(project, tasks)
    # A manager that no longer exists renders as blank
    result["manager"] = db.query(Employee).filter(Employee.id == project.manager_id).first()
    result["tasks"] = tasks
    return result

@router.post("/", response_model=ProjectDetailOut, status_code=status.HTTP_201_CREATED)
def create_project(
    payload: ProjectCreate,
    db: Session = Depends(get_db),
    current_user: Employee = Depends(get_current_user)
):
    """Create a project and one task per step, assigned to the manager"""
    _require_project_admin(current_user)

    manager = db.query(Employee).filter(Employee.id == payload.manager_id).first()
    project = Project(
        name=payload.name.strip(),
        client=payload.client,
        budget=payload.budget,
        status=payload.status,
        deadline=payload.deadline,
        manager_id=payload.manager_id,
        department_id=payload.department_id or task_workflow.department_for(manager),
    )

    try:
        db.add(project)
        db.flush()
        tasks = [_step_task(project, step, manager) for step in payload.steps]
        db.add_all(tasks)
        record_activity(db, current_user, "created project", project.name)
        db.commit()
    except Exception as e:
        db.rollback()
        logger.error(f"Error creating project {payload.name}: {e}")
        raise

    db.refresh(project)
    tasks = _project_tasks(db, project.id)
    total = kpi.weight_total(tasks)
    if tasks and total != 100:
        logger.warning(f"Project {project.id} step weights add up to {total}, not 100")

    result = _project_out(project, tasks)
    result["manager"] = manager
    result["tasks"] = tasks
    return result

@router.patch("/{project_id}", response_model=ProjectOut)
def update_project(
    project_id: int,
    update: ProjectUpdate,
    db: Session = Depends(get_db),
    current_user: Employee = Depends(get_current_user)
):
    _require_project_admin(current_user)
    project = _get_project_or_404(db, project_id, current_user)

    for field, value in update.model_dump(exclude_unset=True, exclude_none=True).items():
        setattr(project, field, value)

    db.commit()
    db.refresh(project)
    return _project_out(project, _project_tasks(db, project.id))

@router.post("/{project_id}/steps", response_model=TaskOut, status_code=status.HTTP_201_CREATED)
def add_step(
    project_id: int,
    step: ProjectStep,
    db: Session = Depends(get_db),
    current_user: Employee = Depends(get_current_user)
):
    _require_project_admin(current_user)
    project = _get_project_or_404(db, project_id, current_user)

    manager = db.query(Employee).filter(Employee.id == project.manager_id).first()
    task = _step_task(project, step, manager)
    db.add(task)
    record_activity(db, current_user, "added project step", f"{project.name}: {task.title}")
    db.commit()
    db.refresh(task)
    return task

@router.delete("/{project_id}/steps/{task_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_step(
    project_id: int,
    task_id: int,
    db: Session = Depends(get_db),
    current_user: Employee = Depends(get_current_user)
):
    _require_project_admin(current_user)
    project = _get_project_or_404(db, project_id, current_user)

    task = db.query(Task).filter(Task.id == task_id, Task.project_id == project.id).first()
    if not task:
        raise HTTPException(status_code=404, detail="Step not found")

    record_activity(db, current_user, "removed project step", f"{project.name}: {task.title}")
    db.delete(task)
    db.commit()

@router.post("/{project_id}/steps/{task_id}/toggle", response_model=ProjectOut)
def toggle_step(
    project_id: int,
    task_id: int,
    db: Session = Depends(get_db),
    current_user: Employee = Depends(get_current_user)
):
    """Flip a step between COMPLETED and IN_PROGRESS and return the new progress"""
    project = _get_project_or_404(db, project_id, current_user)
    if not can_toggle_project_step(current_user, project):
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Only admins and the project manager can update steps"
        )

    task = db.query(Task).filter(Task.id == task_id, Task.project_id == project.id).first()
    if not task:
        raise HTTPException(status_code=404, detail="Step not found")

    new_status = task_workflow.toggle_completion(task)
    record_activity(db, current_user, f"marked step {new_status.value}", f"{project.name}: {task.title}")
    db.commit()
    return _project_out(project, _project_tasks(db, project.id))
