from __future__ import annotations

import os
from datetime import date, timedelta
from typing import Dict, List, Optional

from core.exceptions import ValidationError
from core.interfaces import DependencyRepository, TaskRepository
from core.models import TaskPriority, TaskStatus
from core.services.reporting.models import LookAheadReport, LookAheadRow

DEFAULT_LOOKAHEAD_WEEKS = 3

_PRIORITY_RANK = {
    TaskPriority.CRITICAL: 0,
    TaskPriority.HIGH: 1,
    TaskPriority.NORMAL: 2,
    TaskPriority.LOW: 3,
}


def default_lookahead_weeks() -> int:
    raw = os.getenv("PM_LOOKAHEAD_WEEKS", "").strip()
    if not raw:
        return DEFAULT_LOOKAHEAD_WEEKS
    try:
        weeks = int(raw)
    except ValueError as exc:
        raise ValidationError(
            f"PM_LOOKAHEAD_WEEKS must be a whole number, got '{raw}'.",
            code="LOOKAHEAD_WEEKS_INVALID",
        ) from exc
    return weeks


def week_start(day: date) -> date:
    """Sunday on or before the given day."""
    return day - timedelta(days=(day.weekday() + 1) % 7)


class ReportingLookAheadMixin:
    _task_repo: TaskRepository
    _dependency_repo: DependencyRepository

    def get_look_ahead(
        self,
        project_id: str,
        weeks: Optional[int] = None,
        as_of: Optional[date] = None,
    ) -> LookAheadReport:
        self._require_project(project_id)
        if weeks is None:
            weeks = default_lookahead_weeks()
        if isinstance(weeks, bool) or not isinstance(weeks, int) or weeks < 1:
            raise ValidationError("Look-ahead weeks must be at least 1.", code="LOOKAHEAD_WEEKS_INVALID")

        today = as_of or date.today()
        end_date = today + timedelta(days=7 * weeks)

        window = [
            t
            for t in self._task_repo.list_by_project(project_id)
            if t.planned_start_date is not None
            and today <= t.planned_start_date <= end_date
            and t.status != TaskStatus.COMPLETED
        ]
        window.sort(key=lambda t: (t.planned_start_date, _PRIORITY_RANK.get(t.priority, 99), t.name))

        tasks_by_week: Dict[str, List[LookAheadRow]] = {}
        for t in window:
            key = week_start(t.planned_start_date).isoformat()
            tasks_by_week.setdefault(key, []).append(
                LookAheadRow(
                    task_id=t.id,
                    task_code=t.task_code,
                    name=t.name,
                    planned_start_date=t.planned_start_date,
                    planned_end_date=t.planned_end_date,
                    status=t.status.value,
                    priority=t.priority.value,
                    is_critical=bool(t.is_critical),
                    assigned_to=t.assigned_to,
                    percent_complete=int(t.percent_complete or 0),
                    predecessor_count=len(self._dependency_repo.list_predecessors(t.id)),
                )
            )

        return LookAheadReport(
            project_id=project_id,
            as_of=today,
            weeks=weeks,
            end_date=end_date,
            tasks_by_week=tasks_by_week,
        )


__all__ = ["ReportingLookAheadMixin", "week_start", "default_lookahead_weeks", "DEFAULT_LOOKAHEAD_WEEKS"]
