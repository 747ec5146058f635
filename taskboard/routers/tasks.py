# taskboard/routers/tasks.py
from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session, joinedload
from typing import Optional

from taskboard.database import get_db
from taskboard.models import Task, Comment, TaskRating, User
from taskboard.schemas import (
    TaskCreate,
    TaskUpdate,
    TaskEnvelope,
    TaskDetailEnvelope,
    TaskList,
    SuccessOut,
)
from taskboard.services.task_lifecycle import TaskLifecycle
from taskboard.utils.auth import get_current_user
from taskboard.utils.permissions import Action, authorize

router = APIRouter(prefix="/tasks", tags=["tasks"])


def _task_query(db: Session):
    return db.query(Task).options(
        joinedload(Task.creator),
        joinedload(Task.assignee),
        joinedload(Task.comments).joinedload(Comment.user),
    )


def _load_task(db: Session, task_id: int) -> Task:
    return _task_query(db).filter(Task.id == task_id).first()


@router.get("", response_model=TaskList)
def get_all_tasks(
    archived: Optional[bool] = None,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user)
):
    """List tasks, newest first.

    ``archived=true`` returns the archive; otherwise only live tasks.
    """
    authorize(Action.TASK_READ, current_user)
    tasks = _task_query(db).filter(
        Task.is_archived == bool(archived)
    ).order_by(Task.created_at.desc(), Task.id.desc()).all()
    return {"tasks": tasks}


@router.post("", response_model=TaskEnvelope, status_code=status.HTTP_201_CREATED)
def create_task(
    task_in: TaskCreate,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user)
):
    try:
        task = TaskLifecycle(db, current_user).create(task_in)
    except SQLAlchemyError:
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Error creating task"
        )
    return {"task": _load_task(db, task.id)}


@router.get("/{task_id}", response_model=TaskDetailEnvelope)
def get_task(
    task_id: int,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user)
):
    authorize(Action.TASK_READ, current_user)
    task = _task_query(db).options(
        joinedload(Task.ratings).joinedload(TaskRating.user)
    ).filter(Task.id == task_id).first()

    if not task:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Task not found"
        )
    return {"task": task}


@router.put("/{task_id}", response_model=TaskEnvelope)
def update_task(
    task_id: int,
    task_update: TaskUpdate,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user)
):
    try:
        task = TaskLifecycle(db, current_user).update(task_id, task_update)
    except SQLAlchemyError:
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Error updating task"
        )
    return {"task": _load_task(db, task.id)}


@router.delete("/{task_id}", response_model=SuccessOut)
def delete_task(
    task_id: int,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user)
):
    try:
        TaskLifecycle(db, current_user).delete(task_id)
    except SQLAlchemyError:
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Error deleting task"
        )
    return {"success": True}
