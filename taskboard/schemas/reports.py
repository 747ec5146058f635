from typing import Dict, List, Optional
from taskboard.schemas.common import CamelModel


class AssigneeStats(CamelModel):
    user_id: int
    user_name: str
    department: Optional[str] = None
    role: str
    total_tasks: int
    completed_tasks: int
    in_progress_tasks: int
    todo_tasks: int
    completion_rate: float
    avg_rating: float


class ReportSummary(CamelModel):
    total_tasks: int
    completed_tasks: int
    overdue_tasks: int
    archived_tasks: int
    completion_rate: float
    by_status: Dict[str, int]
    by_priority: Dict[str, int]
    by_department: Dict[str, int]
    assignees: List[AssigneeStats]
