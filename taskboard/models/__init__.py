from .user import User, UserRole, Department
from .session import AuthSession
from .task import Task, TaskStatus, TaskPriority, Comment, TaskRating, STATUS_LABELS
from .activity import Activity, ActivityAction
from .notification import Notification
from .message import Message
