# taskboard/services/task_lifecycle.py
"""
Task create/update/delete/comment pipeline.

Each operation writes the task row, its activity row and any notifications
in one transaction: either all of them are committed or none are.
"""

import logging
from datetime import datetime
from typing import Any, Dict, Optional, Tuple

from fastapi import HTTPException, status
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from taskboard.models import (
    ActivityAction,
    Comment,
    STATUS_LABELS,
    Task,
    TaskPriority,
    TaskStatus,
    User,
)
from taskboard.schemas.task import TaskCreate, TaskUpdate
from taskboard.utils.activity import record_activity
from taskboard.utils.notifications import notify_comment, notify_task_assigned
from taskboard.utils.permissions import Action, authorize

logger = logging.getLogger(__name__)

# Columns that cannot be cleared; an explicit null or empty string for them is ignored
NON_NULLABLE_FIELDS = ("title", "status", "priority", "department", "is_archived")


class TaskLifecycle:
    """Applies task mutations on behalf of one acting user"""

    def __init__(self, db: Session, actor: User):
        self.db = db
        self.actor = actor

    def _commit(self) -> None:
        try:
            self.db.commit()
        except SQLAlchemyError:
            self.db.rollback()
            logger.exception(f"Rolled back task transaction for user {self.actor.id}")
            raise

    def _get_task(self, task_id: int) -> Task:
        task = self.db.query(Task).filter(Task.id == task_id).first()
        if not task:
            raise HTTPException(
                status_code=status.HTTP_404_NOT_FOUND,
                detail="Task not found"
            )
        return task

    def _check_assignee(self, assignee_id: Optional[int]) -> None:
        if assignee_id is None:
            return
        assignee = self.db.query(User).filter(
            User.id == assignee_id,
            User.is_active == True
        ).first()
        if not assignee:
            raise HTTPException(
                status_code=status.HTTP_400_BAD_REQUEST,
                detail="Assigned user not found or inactive"
            )

    def create(self, payload: TaskCreate) -> Task:
        authorize(Action.TASK_CREATE, self.actor)

        if not payload.title or not payload.department:
            raise HTTPException(
                status_code=status.HTTP_400_BAD_REQUEST,
                detail="Title and department are required"
            )
        self._check_assignee(payload.assignee_id)

        task_status = payload.status or TaskStatus.TODO
        now = datetime.utcnow()
        task = Task(
            title=payload.title,
            description=payload.description,
            status=task_status,
            priority=payload.priority or TaskPriority.MEDIUM,
            department=payload.department,
            due_date=payload.due_date,
            creator_id=self.actor.id,
            assignee_id=payload.assignee_id,
            completed_at=now if task_status == TaskStatus.DONE else None,
        )
        self.db.add(task)
        self.db.flush()

        record_activity(
            self.db,
            ActivityAction.CREATE,
            f"Task created: {task.title}",
            user_id=self.actor.id,
            task_id=task.id
        )
        if task.assignee_id is not None and task.assignee_id != self.actor.id:
            notify_task_assigned(self.db, task.assignee_id, task.title, self.actor.name)

        self._commit()
        logger.info(f"Task {task.id} created by user {self.actor.id}")
        return task

    def update(self, task_id: int, changes: TaskUpdate) -> Task:
        authorize(Action.TASK_UPDATE, self.actor)
        task = self._get_task(task_id)

        requested = changes.model_dump(exclude_unset=True)
        for field in NON_NULLABLE_FIELDS:
            if field in requested and requested[field] in (None, ""):
                requested.pop(field)

        changed = diff_fields(task, requested)
        if "assignee_id" in changed:
            self._check_assignee(changed["assignee_id"])

        previous_status = task.status
        previous_assignee = task.assignee_id
        now = datetime.utcnow()

        for field, value in changed.items():
            setattr(task, field, value)

        if "status" in changed:
            if changed["status"] == TaskStatus.DONE:
                task.completed_at = now
            elif previous_status == TaskStatus.DONE:
                task.completed_at = None

        if "is_archived" in changed:
            task.archived_at = now if changed["is_archived"] else None

        action, details = describe_change(changed, previous_status)
        record_activity(self.db, action, details, user_id=self.actor.id, task_id=task.id)

        new_assignee = changed.get("assignee_id")
        if (
            new_assignee is not None
            and new_assignee != previous_assignee
            and new_assignee != self.actor.id
        ):
            notify_task_assigned(self.db, new_assignee, task.title, self.actor.name)

        self._commit()
        logger.info(f"Task {task.id} updated by user {self.actor.id}: {action.value}")
        return task

    def delete(self, task_id: int) -> None:
        authorize(Action.TASK_DELETE, self.actor)
        task = self._get_task(task_id)
        title = task.title

        self.db.delete(task)
        record_activity(
            self.db,
            ActivityAction.DELETE,
            f"Task deleted: {title}",
            user_id=self.actor.id,
            task_id=None
        )
        self._commit()
        logger.info(f"Task {task_id} deleted by user {self.actor.id}")

    def add_comment(self, task_id: int, content: str) -> Comment:
        authorize(Action.COMMENT_CREATE, self.actor)
        task = self._get_task(task_id)

        comment = Comment(task_id=task.id, user_id=self.actor.id, content=content)
        self.db.add(comment)
        record_activity(
            self.db,
            ActivityAction.COMMENT,
            f"Comment added to task: {task.title}",
            user_id=self.actor.id,
            task_id=task.id
        )
        notify_comment(self.db, task, self.actor)

        self._commit()
        return comment


def diff_fields(task: Task, requested: Dict[str, Any]) -> Dict[str, Any]:
    """Keep only the requested fields whose value differs from the stored one"""
    return {
        field: value
        for field, value in requested.items()
        if getattr(task, field) != value
    }


def describe_change(changed: Dict[str, Any], previous_status: TaskStatus) -> Tuple[ActivityAction, str]:
    """Pick the single activity entry for an update.

    Status change wins over assignment, which wins over archiving; anything
    else is a generic update.
    """
    if "status" in changed:
        old_label = STATUS_LABELS.get(previous_status, str(previous_status))
        new_label = STATUS_LABELS.get(changed["status"], str(changed["status"]))
        return ActivityAction.STATUS_CHANGE, f'Status changed from "{old_label}" to "{new_label}"'

    if changed.get("assignee_id") is not None:
        return ActivityAction.ASSIGN, "Task assigned"

    if "is_archived" in changed:
        if changed["is_archived"]:
            return ActivityAction.ARCHIVE, "Task archived"
        return ActivityAction.ARCHIVE, "Task restored from archive"

    return ActivityAction.UPDATE, "Task updated"
