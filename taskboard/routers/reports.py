# taskboard/routers/reports.py
from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session
from typing import Optional

from taskboard.database import get_db
from taskboard.models import Department, User
from taskboard.schemas import ReportSummary
from taskboard.services.reports import build_summary
from taskboard.utils.auth import get_current_user
from taskboard.utils.permissions import Action, authorize

router = APIRouter(prefix="/reports", tags=["reports"])


@router.get("/summary", response_model=ReportSummary)
def get_summary(
    department: Optional[Department] = None,
    user_id: Optional[int] = Query(None, alias="userId"),
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user)
):
    """Task statistics by status, priority, department and assignee"""
    authorize(Action.REPORT_VIEW, current_user)
    return build_summary(db, department=department, user_id=user_id)
