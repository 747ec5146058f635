from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from taskboard.database import get_db
from taskboard.models import User
from taskboard.schemas import CommentCreate, CommentEnvelope
from taskboard.services.task_lifecycle import TaskLifecycle
from taskboard.utils.auth import get_current_user

router = APIRouter(prefix="/comments", tags=["comments"])


@router.post("", response_model=CommentEnvelope, status_code=status.HTTP_201_CREATED)
def create_comment(
    comment_in: CommentCreate,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user)
):
    """Add a comment and notify the task's assignee and creator"""
    if not comment_in.task_id or not comment_in.content:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Task and content are required"
        )

    try:
        comment = TaskLifecycle(db, current_user).add_comment(comment_in.task_id, comment_in.content)
    except SQLAlchemyError:
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Error adding comment"
        )
    return {"comment": comment}
