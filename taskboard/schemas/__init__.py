from .common import CamelModel, SuccessOut
from .user import LoginRequest, UserCreate, UserUpdate, UserBasic, UserOut, UserEnvelope, UserList
from .task import (
    TaskCreate, TaskUpdate, TaskOut, TaskDetailOut, TaskEnvelope, TaskDetailEnvelope, TaskList,
    CommentCreate, CommentOut, CommentEnvelope, RatingCreate, RatingOut, RatingEnvelope, RatingList,
)
from .notification import NotificationOut, NotificationList
from .message import MessageCreate, MessageMarkRead, MessageOut, MessageEnvelope, MessageList
from .activity import ActivityCreate, ActivityOut, ActivityEnvelope, ActivityList
from .reports import AssigneeStats, ReportSummary
