# taskboard/routers/messages.py
import logging

from fastapi import APIRouter, Depends, HTTPException, Query, status
from sqlalchemy import or_, and_
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session, joinedload
from typing import Optional

from taskboard.database import get_db
from taskboard.models import Message, User
from taskboard.schemas import MessageCreate, MessageMarkRead, MessageEnvelope, MessageList, SuccessOut
from taskboard.utils.auth import get_current_user

router = APIRouter(prefix="/messages", tags=["messages"])
logger = logging.getLogger(__name__)


@router.get("", response_model=MessageList)
def get_messages(
    user_id: Optional[int] = Query(None, alias="userId"),
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user)
):
    """Conversation with ``userId`` (oldest first), or every own message (newest first)"""
    query = db.query(Message).options(joinedload(Message.sender))

    if user_id:
        messages = query.filter(
            or_(
                and_(Message.sender_id == current_user.id, Message.receiver_id == user_id),
                and_(Message.sender_id == user_id, Message.receiver_id == current_user.id),
            )
        ).order_by(Message.created_at.asc(), Message.id.asc()).all()
    else:
        messages = query.filter(
            or_(
                Message.sender_id == current_user.id,
                Message.receiver_id == current_user.id,
            )
        ).order_by(Message.created_at.desc(), Message.id.desc()).all()

    unread_count = db.query(Message).filter(
        Message.receiver_id == current_user.id,
        Message.is_read == False
    ).count()

    return {"messages": messages, "unread_count": unread_count}


@router.post("", response_model=MessageEnvelope)
def send_message(
    message_in: MessageCreate,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user)
):
    if not message_in.receiver_id or not message_in.content:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Receiver and content are required"
        )

    receiver = db.query(User).filter(User.id == message_in.receiver_id).first()
    if not receiver:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Receiver not found"
        )

    message = Message(
        content=message_in.content,
        sender_id=current_user.id,
        receiver_id=receiver.id,
    )
    db.add(message)
    try:
        db.commit()
    except SQLAlchemyError:
        db.rollback()
        logger.exception(f"Error sending message from user {current_user.id}")
        raise HTTPException(status_code=500, detail="Error sending message")
    db.refresh(message)

    return {"message": message}


@router.put("", response_model=SuccessOut)
def mark_messages_read(
    mark_in: MessageMarkRead,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user)
):
    """Mark every unread message from ``senderId`` to the current user as read"""
    if not mark_in.sender_id:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="senderId is required"
        )

    db.query(Message).filter(
        Message.receiver_id == current_user.id,
        Message.sender_id == mark_in.sender_id,
        Message.is_read == False
    ).update({"is_read": True}, synchronize_session=False)
    try:
        db.commit()
    except SQLAlchemyError:
        db.rollback()
        logger.exception(f"Error marking messages read for user {current_user.id}")
        raise HTTPException(status_code=500, detail="Error updating messages")

    return {"success": True}
