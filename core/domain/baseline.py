from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date, datetime
from typing import Any, Optional

from core.domain.enums import BaselineType
from core.domain.identifiers import generate_id
from core.domain.task import ScheduleTask


def _iso(value: Optional[date]) -> Optional[str]:
    return value.isoformat() if value else None


def _parse(value: Any) -> Optional[date]:
    if value in (None, ""):
        return None
    if isinstance(value, date):
        return value
    return date.fromisoformat(str(value)[:10])


@dataclass(frozen=True)
class BaselineTaskSnapshot:
    """Value copy of a task as it looked when a baseline was captured."""

    task_id: str
    name: str
    task_code: Optional[str]
    parent_task_id: Optional[str]
    planned_start_date: Optional[date]
    planned_end_date: Optional[date]
    duration_days: int
    status: str
    percent_complete: int
    is_critical: bool
    total_float_days: Optional[int]
    budgeted_cost: Optional[float]

    @staticmethod
    def from_task(task: ScheduleTask) -> "BaselineTaskSnapshot":
        return BaselineTaskSnapshot(
            task_id=task.id,
            name=task.name,
            task_code=task.task_code,
            parent_task_id=task.parent_task_id,
            planned_start_date=task.planned_start_date,
            planned_end_date=task.planned_end_date,
            duration_days=int(task.duration_days or 0),
            status=getattr(task.status, "value", task.status),
            percent_complete=int(task.percent_complete or 0),
            is_critical=bool(task.is_critical),
            total_float_days=task.total_float_days,
            budgeted_cost=task.budgeted_cost,
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.task_id,
            "name": self.name,
            "task_code": self.task_code,
            "parent_task_id": self.parent_task_id,
            "planned_start_date": _iso(self.planned_start_date),
            "planned_end_date": _iso(self.planned_end_date),
            "duration_days": self.duration_days,
            "status": self.status,
            "percent_complete": self.percent_complete,
            "is_critical": self.is_critical,
            "total_float_days": self.total_float_days,
            "budgeted_cost": self.budgeted_cost,
        }

    @staticmethod
    def from_dict(data: dict[str, Any]) -> "BaselineTaskSnapshot":
        return BaselineTaskSnapshot(
            task_id=str(data["id"]),
            name=data.get("name") or "",
            task_code=data.get("task_code"),
            parent_task_id=data.get("parent_task_id"),
            planned_start_date=_parse(data.get("planned_start_date")),
            planned_end_date=_parse(data.get("planned_end_date")),
            duration_days=int(data.get("duration_days") or 0),
            status=data.get("status") or "",
            percent_complete=int(data.get("percent_complete") or 0),
            is_critical=bool(data.get("is_critical", False)),
            total_float_days=data.get("total_float_days"),
            budgeted_cost=data.get("budgeted_cost"),
        )


@dataclass
class ScheduleBaseline:
    id: str
    project_id: str
    name: str
    description: str = ""
    baseline_type: BaselineType = BaselineType.APPROVED
    baseline_date: date = field(default_factory=date.today)
    start_date: Optional[date] = None
    finish_date: Optional[date] = None
    is_active: bool = False
    created_at: datetime = field(default_factory=datetime.now)
    task_snapshot: tuple[BaselineTaskSnapshot, ...] = ()

    @staticmethod
    def capture(
        project_id: str,
        name: str,
        tasks: list[ScheduleTask],
        description: str = "",
        baseline_type: BaselineType = BaselineType.APPROVED,
    ) -> "ScheduleBaseline":
        snapshot = tuple(BaselineTaskSnapshot.from_task(t) for t in tasks)
        starts = [s.planned_start_date for s in snapshot if s.planned_start_date]
        ends = [s.planned_end_date for s in snapshot if s.planned_end_date]
        return ScheduleBaseline(
            id=generate_id(),
            project_id=project_id,
            name=name.strip(),
            description=description,
            baseline_type=baseline_type,
            start_date=min(starts) if starts else None,
            finish_date=max(ends) if ends else None,
            is_active=baseline_type.activates,
            task_snapshot=snapshot,
        )

    def snapshot_by_task_id(self) -> dict[str, BaselineTaskSnapshot]:
        return {row.task_id: row for row in self.task_snapshot}


@dataclass(frozen=True)
class BaselineSummary:
    """Baseline row for list views; the snapshot payload is left out."""

    id: str
    project_id: str
    name: str
    description: str
    baseline_type: BaselineType
    baseline_date: date
    start_date: Optional[date]
    finish_date: Optional[date]
    is_active: bool
    created_at: datetime
    task_count: int

    @staticmethod
    def of(baseline: ScheduleBaseline) -> "BaselineSummary":
        return BaselineSummary(
            id=baseline.id,
            project_id=baseline.project_id,
            name=baseline.name,
            description=baseline.description,
            baseline_type=baseline.baseline_type,
            baseline_date=baseline.baseline_date,
            start_date=baseline.start_date,
            finish_date=baseline.finish_date,
            is_active=baseline.is_active,
            created_at=baseline.created_at,
            task_count=len(baseline.task_snapshot),
        )


__all__ = ["BaselineTaskSnapshot", "ScheduleBaseline", "BaselineSummary"]
