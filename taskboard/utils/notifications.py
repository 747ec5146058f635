# taskboard/utils/notifications.py
"""
Utility functions for creating notifications.

These helpers only add rows to the session; the calling handler owns the
transaction and commits once for the whole operation.
"""

from sqlalchemy.orm import Session
from taskboard.models import Notification
from typing import List
import logging

logger = logging.getLogger(__name__)


def notify(
    db: Session,
    user_id: int,
    title: str,
    message: str
) -> Notification:
    """
    Add a notification for a user to the current transaction

    Args:
        db: Database session
        user_id: ID of the user to notify
        title: Notification title
        message: Notification message

    Returns:
        The pending notification object
    """
    notification = Notification(
        user_id=user_id,
        title=title,
        message=message,
        is_read=False
    )
    db.add(notification)
    return notification


def notify_task_assigned(db: Session, assignee_id: int, task_title: str, assigned_by: str) -> Notification:
    return notify(
        db,
        user_id=assignee_id,
        title="New Task Assigned",
        message=f"Task '{task_title}' has been assigned to you by {assigned_by}"
    )


def notify_comment(db: Session, task, commenter) -> List[Notification]:
    """Tell the assignee and then the creator about a new comment, each at most once"""
    created = []
    seen = {commenter.id}
    if task.assignee_id is not None and task.assignee_id not in seen:
        seen.add(task.assignee_id)
        created.append(notify(
            db,
            user_id=task.assignee_id,
            title="New comment on your task",
            message=f"{commenter.name} commented on task '{task.title}'"
        ))
    if task.creator_id not in seen:
        created.append(notify(
            db,
            user_id=task.creator_id,
            title="New comment on a task you created",
            message=f"{commenter.name} commented on task '{task.title}'"
        ))
    logger.info(f"Comment on task {task.id}: {len(created)} notification(s) queued")
    return created
