# taskboard/schemas/task.py
from datetime import datetime, timezone
from typing import Optional, List
from pydantic import field_validator
from taskboard.models.task import TaskStatus, TaskPriority
from taskboard.models.user import Department
from taskboard.schemas.common import CamelModel
from taskboard.schemas.user import UserBasic


def _naive_utc(value: Optional[datetime]) -> Optional[datetime]:
    # Timestamps are stored as naive UTC
    if value is not None and value.tzinfo is not None:
        return value.astimezone(timezone.utc).replace(tzinfo=None)
    return value


class TaskCreate(CamelModel):
    # title and department are checked by the handler so a missing value is a 400
    title: Optional[str] = None
    department: Optional[Department] = None
    description: Optional[str] = None
    status: Optional[TaskStatus] = None
    priority: Optional[TaskPriority] = None
    due_date: Optional[datetime] = None
    assignee_id: Optional[int] = None

    @field_validator("due_date")
    @classmethod
    def due_date_to_utc(cls, v):
        return _naive_utc(v)


class TaskUpdate(CamelModel):
    title: Optional[str] = None
    description: Optional[str] = None
    status: Optional[TaskStatus] = None
    priority: Optional[TaskPriority] = None
    department: Optional[Department] = None
    due_date: Optional[datetime] = None
    assignee_id: Optional[int] = None
    is_archived: Optional[bool] = None

    @field_validator("due_date")
    @classmethod
    def due_date_to_utc(cls, v):
        return _naive_utc(v)


class CommentCreate(CamelModel):
    task_id: Optional[int] = None
    content: Optional[str] = None


class CommentOut(CamelModel):
    id: int
    task_id: int
    user_id: int
    content: str
    created_at: datetime
    user: UserBasic


class RatingCreate(CamelModel):
    task_id: Optional[int] = None
    rating: Optional[int] = None
    comment: Optional[str] = None


class RatingOut(CamelModel):
    id: int
    task_id: int
    user_id: int
    rating: int
    comment: Optional[str] = None
    created_at: datetime
    updated_at: Optional[datetime] = None
    user: UserBasic


class TaskOut(CamelModel):
    id: int
    title: str
    description: Optional[str] = None
    status: TaskStatus
    priority: TaskPriority
    department: Department
    due_date: Optional[datetime] = None
    creator_id: int
    assignee_id: Optional[int] = None
    completed_at: Optional[datetime] = None
    is_archived: bool
    archived_at: Optional[datetime] = None
    created_at: datetime
    updated_at: Optional[datetime] = None

    # Related objects
    creator: UserBasic
    assignee: Optional[UserBasic] = None
    comments: List[CommentOut] = []


class TaskDetailOut(TaskOut):
    ratings: List[RatingOut] = []


class TaskEnvelope(CamelModel):
    task: TaskOut


class TaskDetailEnvelope(CamelModel):
    task: TaskDetailOut


class TaskList(CamelModel):
    tasks: List[TaskOut]


class CommentEnvelope(CamelModel):
    comment: CommentOut


class RatingEnvelope(CamelModel):
    rating: RatingOut


class RatingList(CamelModel):
    ratings: List[RatingOut]
    avg_rating: float
