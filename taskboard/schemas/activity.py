from datetime import datetime
from typing import Optional, List
from taskboard.models.activity import ActivityAction
from taskboard.schemas.common import CamelModel
from taskboard.schemas.user import UserBasic


class ActivityCreate(CamelModel):
    action: ActivityAction
    details: Optional[str] = None
    task_id: Optional[int] = None


class TaskRef(CamelModel):
    id: int
    title: str


class ActivityOut(CamelModel):
    id: int
    action: ActivityAction
    details: Optional[str] = None
    user_id: Optional[int] = None
    task_id: Optional[int] = None
    created_at: datetime
    user: Optional[UserBasic] = None
    task: Optional[TaskRef] = None


class ActivityEnvelope(CamelModel):
    activity: ActivityOut


class ActivityList(CamelModel):
    activities: List[ActivityOut]
