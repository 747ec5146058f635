# taskboard/models/activity.py
from sqlalchemy import Column, Integer, Text, DateTime, ForeignKey, Enum
from sqlalchemy.orm import relationship
from datetime import datetime
from taskboard.database import Base
import enum


class ActivityAction(str, enum.Enum):
    CREATE = "CREATE"
    UPDATE = "UPDATE"
    DELETE = "DELETE"
    STATUS_CHANGE = "STATUS_CHANGE"
    ASSIGN = "ASSIGN"
    ARCHIVE = "ARCHIVE"
    RATING = "RATING"
    COMMENT = "COMMENT"


class Activity(Base):
    """Append-only audit record"""
    __tablename__ = "activities"

    id = Column(Integer, primary_key=True, index=True)
    action = Column(Enum(ActivityAction), nullable=False)
    details = Column(Text, nullable=True)
    user_id = Column(Integer, ForeignKey("users.id", ondelete="SET NULL"), nullable=True, index=True)
    task_id = Column(Integer, ForeignKey("tasks.id", ondelete="SET NULL"), nullable=True, index=True)
    created_at = Column(DateTime, default=datetime.utcnow, nullable=False)

    user = relationship("User", back_populates="activities")
    task = relationship("Task", back_populates="activities")

    def __repr__(self):
        return f"<Activity(id={self.id}, action='{self.action}', task_id={self.task_id})>"
