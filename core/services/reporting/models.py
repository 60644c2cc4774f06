from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date
from typing import Any, Dict, List, Optional

from core.models import BaselineSummary, VarianceStatus


def _iso(value: Optional[date]) -> Optional[str]:
    return value.isoformat() if value else None


def _value(member: Any) -> Any:
    return getattr(member, "value", member)


@dataclass
class VarianceRow:
    task_id: str
    task_name: str
    status: VarianceStatus
    variance_days: Optional[int] = None
    task_code: Optional[str] = None
    baseline_start: Optional[date] = None
    baseline_end: Optional[date] = None
    current_start: Optional[date] = None
    current_end: Optional[date] = None
    is_critical: bool = False

    def to_dict(self) -> dict[str, Any]:
        return {
            "task_id": self.task_id,
            "task_name": self.task_name,
            "task_code": self.task_code,
            "baseline_start": _iso(self.baseline_start),
            "baseline_end": _iso(self.baseline_end),
            "current_start": _iso(self.current_start),
            "current_end": _iso(self.current_end),
            "variance_days": self.variance_days,
            "status": self.status.value,
            "is_critical": self.is_critical,
        }


@dataclass
class VarianceSummary:
    total_tasks: int = 0
    tasks_delayed: int = 0
    tasks_ahead: int = 0
    tasks_on_track: int = 0
    new_tasks: int = 0
    tasks_not_comparable: int = 0
    avg_variance_days: float = 0.0
    critical_tasks_delayed: int = 0

    def to_dict(self) -> dict[str, Any]:
        return {
            "total_tasks": self.total_tasks,
            "tasks_delayed": self.tasks_delayed,
            "tasks_ahead": self.tasks_ahead,
            "tasks_on_track": self.tasks_on_track,
            "new_tasks": self.new_tasks,
            "tasks_not_comparable": self.tasks_not_comparable,
            "avg_variance_days": self.avg_variance_days,
            "critical_tasks_delayed": self.critical_tasks_delayed,
        }


@dataclass
class VarianceReport:
    baseline: BaselineSummary
    summary: VarianceSummary
    variances: List[VarianceRow] = field(default_factory=list)

    def to_dict(self) -> dict[str, Any]:
        return {
            "baseline": {
                "id": self.baseline.id,
                "name": self.baseline.name,
                "baseline_type": self.baseline.baseline_type.value,
                "baseline_date": _iso(self.baseline.baseline_date),
            },
            "summary": self.summary.to_dict(),
            "variances": [row.to_dict() for row in self.variances],
        }


@dataclass
class GanttTaskBar:
    task_id: str
    name: str
    start: Optional[date]
    end: Optional[date]
    duration_days: int
    status: str
    percent_complete: int
    is_critical: bool
    parent_task_id: Optional[str] = None
    task_code: Optional[str] = None
    priority: Optional[str] = None
    task_type: Optional[str] = None
    assigned_to: Optional[str] = None

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.task_id,
            "task_code": self.task_code,
            "name": self.name,
            "parent_task_id": self.parent_task_id,
            "start_date": _iso(self.start),
            "end_date": _iso(self.end),
            "duration": self.duration_days,
            "status": self.status,
            "percent_complete": self.percent_complete,
            "is_critical": self.is_critical,
            "priority": self.priority,
            "task_type": self.task_type,
            "assigned_to": self.assigned_to,
        }


@dataclass
class GanttLink:
    dependency_id: str
    source: str
    target: str
    dependency_type: str
    lag_days: int

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.dependency_id,
            "source": self.source,
            "target": self.target,
            "type": self.dependency_type,
            "lag": self.lag_days,
        }


@dataclass
class GanttMilestoneMarker:
    milestone_id: str
    name: str
    target_date: date
    milestone_type: str
    status: str
    is_critical: bool

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.milestone_id,
            "name": self.name,
            "date": _iso(self.target_date),
            "milestone_type": self.milestone_type,
            "status": self.status,
            "is_critical": self.is_critical,
        }


@dataclass
class GanttData:
    project_id: str
    tasks: List[GanttTaskBar] = field(default_factory=list)
    dependencies: List[GanttLink] = field(default_factory=list)
    milestones: List[GanttMilestoneMarker] = field(default_factory=list)

    def to_dict(self) -> dict[str, Any]:
        return {
            "tasks": [t.to_dict() for t in self.tasks],
            "dependencies": [d.to_dict() for d in self.dependencies],
            "milestones": [m.to_dict() for m in self.milestones],
        }


@dataclass
class LookAheadRow:
    task_id: str
    name: str
    planned_start_date: date
    planned_end_date: Optional[date]
    status: str
    priority: str
    is_critical: bool
    predecessor_count: int
    task_code: Optional[str] = None
    assigned_to: Optional[str] = None
    percent_complete: int = 0

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.task_id,
            "task_code": self.task_code,
            "name": self.name,
            "planned_start_date": _iso(self.planned_start_date),
            "planned_end_date": _iso(self.planned_end_date),
            "status": self.status,
            "priority": self.priority,
            "is_critical": self.is_critical,
            "assigned_to": self.assigned_to,
            "percent_complete": self.percent_complete,
            "predecessor_count": self.predecessor_count,
        }


@dataclass
class LookAheadReport:
    project_id: str
    as_of: date
    weeks: int
    end_date: date
    tasks_by_week: Dict[str, List[LookAheadRow]] = field(default_factory=dict)

    @property
    def total_tasks(self) -> int:
        return sum(len(rows) for rows in self.tasks_by_week.values())

    def to_dict(self) -> dict[str, Any]:
        return {
            "weeks": self.weeks,
            "as_of": _iso(self.as_of),
            "end_date": _iso(self.end_date),
            "tasks_by_week": {
                week: [row.to_dict() for row in rows] for week, rows in self.tasks_by_week.items()
            },
            "total_tasks": self.total_tasks,
        }


@dataclass
class ScheduleSummary:
    project_id: str
    as_of: date
    total_tasks: int = 0
    tasks_by_status: Dict[str, int] = field(default_factory=dict)
    critical_tasks: int = 0
    avg_completion: float = 0.0
    project_start: Optional[date] = None
    project_end: Optional[date] = None
    total_milestones: int = 0
    achieved_milestones: int = 0
    missed_milestones: int = 0
    at_risk_milestones: int = 0
    total_budgeted: float = 0.0
    total_actual: float = 0.0
    budget_variance: float = 0.0
    upcoming_tasks: int = 0
    overdue_tasks: int = 0

    def count(self, status: Any) -> int:
        return self.tasks_by_status.get(_value(status), 0)

    def to_dict(self) -> dict[str, Any]:
        data: dict[str, Any] = {
            "total_tasks": self.total_tasks,
            "critical_tasks": self.critical_tasks,
            "avg_completion": self.avg_completion,
            "project_start": _iso(self.project_start),
            "project_end": _iso(self.project_end),
            "total_milestones": self.total_milestones,
            "achieved_milestones": self.achieved_milestones,
            "missed_milestones": self.missed_milestones,
            "at_risk_milestones": self.at_risk_milestones,
            "total_budgeted": self.total_budgeted,
            "total_actual": self.total_actual,
            "variance": self.budget_variance,
            "upcoming_tasks": self.upcoming_tasks,
            "overdue_tasks": self.overdue_tasks,
        }
        for status, count in self.tasks_by_status.items():
            data[f"{status}_tasks"] = count
        return data


__all__ = [
    "VarianceRow",
    "VarianceSummary",
    "VarianceReport",
    "GanttTaskBar",
    "GanttLink",
    "GanttMilestoneMarker",
    "GanttData",
    "LookAheadRow",
    "LookAheadReport",
    "ScheduleSummary",
]
