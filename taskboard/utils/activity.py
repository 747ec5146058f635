# taskboard/utils/activity.py
from typing import Optional
from sqlalchemy.orm import Session
from taskboard.models import Activity, ActivityAction


def record_activity(
    db: Session,
    action: ActivityAction,
    details: str,
    user_id: Optional[int],
    task_id: Optional[int] = None
) -> Activity:
    """Add an audit row to the current transaction (no commit)"""
    activity = Activity(
        action=action,
        details=details,
        user_id=user_id,
        task_id=task_id
    )
    db.add(activity)
    return activity
