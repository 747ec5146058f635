# taskboard/routers/activity.py
import logging

from fastapi import APIRouter, Depends, HTTPException, Query, status
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session, joinedload
from typing import Optional

from taskboard.database import get_db
from taskboard.models import Activity, Task, User
from taskboard.schemas import ActivityCreate, ActivityEnvelope, ActivityList
from taskboard.utils.activity import record_activity
from taskboard.utils.auth import get_current_user

router = APIRouter(prefix="/activity", tags=["activity"])
logger = logging.getLogger(__name__)


@router.get("", response_model=ActivityList)
def get_activities(
    task_id: Optional[int] = Query(None, alias="taskId"),
    limit: int = Query(50, ge=1, le=500),
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user)
):
    """Activity log, newest first, optionally for a single task"""
    query = db.query(Activity).options(
        joinedload(Activity.user),
        joinedload(Activity.task),
    )
    if task_id:
        query = query.filter(Activity.task_id == task_id)

    activities = query.order_by(
        Activity.created_at.desc(), Activity.id.desc()
    ).limit(limit).all()
    return {"activities": activities}


@router.post("", response_model=ActivityEnvelope)
def create_activity(
    activity_in: ActivityCreate,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user)
):
    """Record a client-side action (e.g. an export) in the activity log"""
    if activity_in.task_id and not db.query(Task).filter(Task.id == activity_in.task_id).first():
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Task not found"
        )

    activity = record_activity(
        db,
        activity_in.action,
        activity_in.details,
        user_id=current_user.id,
        task_id=activity_in.task_id
    )
    try:
        db.commit()
    except SQLAlchemyError:
        db.rollback()
        logger.exception(f"Error recording activity for user {current_user.id}")
        raise HTTPException(status_code=500, detail="Error recording activity")
    db.refresh(activity)
    return {"activity": activity}
