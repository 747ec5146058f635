# taskboard/schemas/notification.py
from datetime import datetime
from typing import List
from taskboard.schemas.common import CamelModel


class NotificationOut(CamelModel):
    id: int
    user_id: int
    title: str
    message: str
    is_read: bool
    created_at: datetime


class NotificationList(CamelModel):
    notifications: List[NotificationOut]
    unread_count: int
