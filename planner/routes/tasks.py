import logging
from typing import List

from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.orm import Session

from ..database import get_db
from ..models import Task, User
from ..schemas import TaskCreate, TaskUpdate, TaskOut, AutoScheduleResponse
from ..auth import get_current_user
from ..errors import DataAccessError
from ..services.scheduler_service import scheduler_service

logger = logging.getLogger(__name__)

router = APIRouter(tags=["tasks"])

def _get_owned_task(task_id: int, user: User, db: Session) -> Task:
    task = db.query(Task).filter(Task.id == task_id, Task.user_id == user.id).first()
    if not task:
        raise HTTPException(status_code=404, detail="Task not found")
    return task

@router.post("/auto-schedule", response_model=AutoScheduleResponse)
def auto_schedule_tasks(current_user: User = Depends(get_current_user), db: Session = Depends(get_db)):
    """Place pending tasks into free time over the next days"""
    try:
        events = scheduler_service.auto_schedule_tasks(current_user, db)
    except DataAccessError:
        logger.exception(f"Auto-scheduling failed for user {current_user.id}")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to auto-schedule tasks"
        )
    return {"success": True, "scheduled": len(events), "events": events}

@router.post("/", response_model=TaskOut)
def create_task(task: TaskCreate, current_user: User = Depends(get_current_user), db: Session = Depends(get_db)):
    db_task = Task(
        user_id=current_user.id,
        title=task.title,
        description=task.description,
        estimated_minutes=task.estimated_minutes,
        priority=task.priority,
        due_at=task.due_at,
    )
    db.add(db_task)
    db.commit()
    db.refresh(db_task)
    return db_task

@router.get("/", response_model=List[TaskOut])
def read_tasks(current_user: User = Depends(get_current_user), db: Session = Depends(get_db)):
    return db.query(Task).filter(Task.user_id == current_user.id).order_by(Task.created_at.desc()).all()

@router.get("/{task_id}", response_model=TaskOut)
def read_task(task_id: int, current_user: User = Depends(get_current_user), db: Session = Depends(get_db)):
    return _get_owned_task(task_id, current_user, db)

@router.put("/{task_id}", response_model=TaskOut)
def update_task(task_id: int, task_update: TaskUpdate, current_user: User = Depends(get_current_user), db: Session = Depends(get_db)):
    task = _get_owned_task(task_id, current_user, db)
    # Only the fields that were sent
    for field, value in task_update.model_dump(exclude_unset=True).items():
        setattr(task, field, value)
    db.commit()
    db.refresh(task)
    return task

@router.delete("/{task_id}")
def delete_task(task_id: int, current_user: User = Depends(get_current_user), db: Session = Depends(get_db)):
    task = _get_owned_task(task_id, current_user, db)
    db.delete(task)
    db.commit()
    return {"message": "Task deleted"}
