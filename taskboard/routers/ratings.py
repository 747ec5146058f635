from fastapi import APIRouter, Depends, HTTPException, Query, status
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session
from typing import Optional

from taskboard.database import get_db
from taskboard.models import User
from taskboard.schemas import RatingCreate, RatingEnvelope, RatingList
from taskboard.services.ratings import submit_rating, ratings_for_task
from taskboard.utils.auth import get_current_user

router = APIRouter(prefix="/ratings", tags=["ratings"])


@router.get("", response_model=RatingList)
def get_ratings(
    task_id: Optional[int] = Query(None, alias="taskId"),
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user)
):
    """Ratings of one task with their average"""
    if not task_id:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="taskId is required"
        )

    ratings, avg_rating = ratings_for_task(db, task_id)
    return {"ratings": ratings, "avg_rating": avg_rating}


@router.post("", response_model=RatingEnvelope)
def rate_task(
    rating_in: RatingCreate,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user)
):
    try:
        rating = submit_rating(db, current_user, rating_in.task_id, rating_in.rating, rating_in.comment)
    except SQLAlchemyError:
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Error saving rating"
        )
    return {"rating": rating}
