# taskboard/services/reports.py
"""
Aggregate task statistics for the reports page
"""

from datetime import datetime
from typing import Any, Dict, List, Optional

from sqlalchemy.orm import Session, joinedload

from taskboard.models import Department, Task, TaskPriority, TaskStatus, User
from taskboard.services.ratings import average_rating


def _count_by(tasks: List[Task], attribute: str, values) -> Dict[str, int]:
    counts = {value.value: 0 for value in values}
    for task in tasks:
        key = getattr(task, attribute)
        if key is not None:
            counts[key.value] = counts.get(key.value, 0) + 1
    return counts


def _completion_rate(completed: int, total: int) -> float:
    return round(completed / total * 100, 1) if total else 0.0


def _is_overdue(task: Task, now: datetime) -> bool:
    return task.due_date is not None and task.due_date < now and task.status != TaskStatus.DONE


def build_summary(
    db: Session,
    department: Optional[Department] = None,
    user_id: Optional[int] = None,
    now: Optional[datetime] = None
) -> Dict[str, Any]:
    """Status/priority/department breakdown plus per-assignee statistics.

    Archived tasks are excluded from every figure except ``archived_tasks``.
    """
    now = now or datetime.utcnow()

    query = db.query(Task).options(joinedload(Task.ratings))
    if department:
        query = query.filter(Task.department == department)
    all_tasks = query.all()

    tasks = [t for t in all_tasks if not t.is_archived]
    completed = sum(1 for t in tasks if t.status == TaskStatus.DONE)

    users_query = db.query(User).filter(User.is_active == True)
    if user_id:
        users_query = users_query.filter(User.id == user_id)

    assignees = []
    for user in users_query.order_by(User.name).all():
        user_tasks = [t for t in tasks if t.assignee_id == user.id]
        user_completed = sum(1 for t in user_tasks if t.status == TaskStatus.DONE)
        rated = [average_rating(t.ratings) for t in user_tasks if t.ratings]
        assignees.append({
            "user_id": user.id,
            "user_name": user.name,
            "department": user.department.value if user.department else None,
            "role": user.role.value,
            "total_tasks": len(user_tasks),
            "completed_tasks": user_completed,
            "in_progress_tasks": sum(1 for t in user_tasks if t.status == TaskStatus.IN_PROGRESS),
            "todo_tasks": sum(1 for t in user_tasks if t.status == TaskStatus.TODO),
            "completion_rate": _completion_rate(user_completed, len(user_tasks)),
            "avg_rating": round(sum(rated) / len(rated), 1) if rated else 0.0,
        })

    return {
        "total_tasks": len(tasks),
        "completed_tasks": completed,
        "overdue_tasks": sum(1 for t in tasks if _is_overdue(t, now)),
        "archived_tasks": len(all_tasks) - len(tasks),
        "completion_rate": _completion_rate(completed, len(tasks)),
        "by_status": _count_by(tasks, "status", TaskStatus),
        "by_priority": _count_by(tasks, "priority", TaskPriority),
        "by_department": _count_by(tasks, "department", Department),
        "assignees": assignees,
    }
