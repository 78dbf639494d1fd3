# takween/routers/task_store.py
# Bare task record endpoints kept for clients that sync raw records
import logging
from typing import List

from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.orm import Session

from takween.database import get_db
from takween.models.task import Task
from takween.schemas.task import TaskOut, TaskRecordIn

logger = logging.getLogger(__name__)

router = APIRouter()

@router.get("/tasks", response_model=List[TaskOut])
def read_task_records(db: Session = Depends(get_db)):
    return db.query(Task).order_by(Task.id).all()

@router.post("/tasks", response_model=TaskOut, status_code=status.HTTP_201_CREATED)
def create_task_record(record: TaskRecordIn, db: Session = Depends(get_db)):
    try:
        task = Task(**record.model_dump())
        db.add(task)
        db.commit()
        db.refresh(task)
        return task
    except Exception as e:
        db.rollback()
        logger.error(f"Error storing task record: {e}")
        raise HTTPException(status_code=400, detail="Task record could not be stored")
