# taskboard/routers/notifications.py
import logging

from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy import desc
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from taskboard.database import get_db
from taskboard.models import Notification, User
from taskboard.schemas import NotificationList, SuccessOut
from taskboard.utils.auth import get_current_user

router = APIRouter(prefix="/notifications", tags=["notifications"])
logger = logging.getLogger(__name__)

NOTIFICATION_PAGE_SIZE = 50


def _commit(db: Session, error_message: str) -> None:
    try:
        db.commit()
    except SQLAlchemyError:
        db.rollback()
        logger.exception(error_message)
        raise HTTPException(status_code=500, detail="Error updating notifications")


@router.get("", response_model=NotificationList)
def get_user_notifications(
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user)
):
    """Latest notifications for the current user with the unread count"""
    base_query = db.query(Notification).filter(Notification.user_id == current_user.id)

    notifications = base_query.order_by(
        desc(Notification.created_at), desc(Notification.id)
    ).limit(NOTIFICATION_PAGE_SIZE).all()

    unread_count = base_query.filter(Notification.is_read == False).count()

    return {"notifications": notifications, "unread_count": unread_count}


@router.post("/read-all", response_model=SuccessOut)
def mark_all_notifications_read(
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user)
):
    """Mark all of the current user's notifications as read"""
    db.query(Notification).filter(
        Notification.user_id == current_user.id,
        Notification.is_read == False
    ).update({"is_read": True}, synchronize_session=False)
    _commit(db, f"Error marking notifications read for user {current_user.id}")

    return {"success": True}


@router.post("/{notification_id}/read", response_model=SuccessOut)
def mark_notification_read(
    notification_id: int,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user)
):
    """Mark a specific notification as read"""
    notification = db.query(Notification).filter(
        Notification.id == notification_id,
        Notification.user_id == current_user.id
    ).first()

    if not notification:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Notification not found"
        )

    if not notification.is_read:
        notification.is_read = True
        _commit(db, f"Error marking notification {notification_id} read")

    return {"success": True}
