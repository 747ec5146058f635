from datetime import datetime
from typing import Optional, List
from taskboard.schemas.common import CamelModel
from taskboard.schemas.user import UserBasic


class MessageCreate(CamelModel):
    receiver_id: Optional[int] = None
    content: Optional[str] = None


class MessageMarkRead(CamelModel):
    sender_id: Optional[int] = None


class MessageOut(CamelModel):
    id: int
    content: str
    sender_id: int
    receiver_id: int
    is_read: bool
    created_at: datetime
    sender: UserBasic


class MessageEnvelope(CamelModel):
    message: MessageOut


class MessageList(CamelModel):
    messages: List[MessageOut]
    unread_count: int
