# taskboard/services/ratings.py
import logging
from typing import List, Optional, Tuple

from fastapi import HTTPException, status
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session, joinedload

from taskboard.models import ActivityAction, Task, TaskRating, User
from taskboard.utils.activity import record_activity
from taskboard.utils.permissions import Action, authorize

logger = logging.getLogger(__name__)

MIN_RATING = 1
MAX_RATING = 5


def submit_rating(
    db: Session,
    actor: User,
    task_id: Optional[int],
    rating: Optional[int],
    comment: Optional[str] = None
) -> TaskRating:
    """Create or update the actor's rating of a task.

    A user holds at most one rating per task; resubmitting overwrites it.
    Only the first submission is recorded in the activity log.
    """
    authorize(Action.RATING_SUBMIT, actor)

    if not task_id or rating is None or not MIN_RATING <= rating <= MAX_RATING:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=f"A task and a rating between {MIN_RATING} and {MAX_RATING} are required"
        )

    task = db.query(Task).filter(Task.id == task_id).first()
    if not task:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Task not found"
        )

    existing = _find_rating(db, task_id, actor.id)
    if existing:
        return _overwrite(db, existing, rating, comment)

    new_rating = TaskRating(task_id=task_id, user_id=actor.id, rating=rating, comment=comment)
    db.add(new_rating)
    record_activity(
        db,
        ActivityAction.RATING,
        f"Rated {rating} stars",
        user_id=actor.id,
        task_id=task_id
    )
    try:
        db.commit()
    except IntegrityError:
        # A concurrent request inserted the same (task, user) pair first
        db.rollback()
        existing = _find_rating(db, task_id, actor.id)
        if existing is None:
            raise
        return _overwrite(db, existing, rating, comment)
    except SQLAlchemyError:
        db.rollback()
        logger.exception(f"Failed to store rating for task {task_id}")
        raise

    return new_rating


def _find_rating(db: Session, task_id: int, user_id: int) -> Optional[TaskRating]:
    return db.query(TaskRating).filter(
        TaskRating.task_id == task_id,
        TaskRating.user_id == user_id
    ).first()


def _overwrite(db: Session, existing: TaskRating, rating: int, comment: Optional[str]) -> TaskRating:
    existing.rating = rating
    existing.comment = comment
    try:
        db.commit()
    except SQLAlchemyError:
        db.rollback()
        logger.exception(f"Failed to update rating {existing.id}")
        raise
    return existing


def ratings_for_task(db: Session, task_id: int) -> Tuple[List[TaskRating], float]:
    """All ratings of a task, newest first, with their arithmetic mean (0 when unrated)"""
    ratings = db.query(TaskRating).options(
        joinedload(TaskRating.user)
    ).filter(
        TaskRating.task_id == task_id
    ).order_by(TaskRating.created_at.desc(), TaskRating.id.desc()).all()

    return ratings, average_rating(ratings)


def average_rating(ratings: List[TaskRating]) -> float:
    if not ratings:
        return 0
    return sum(r.rating for r in ratings) / len(ratings)
