from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date
from typing import Any, Dict, List, Optional

from core.models import ScheduleTask


def _iso(value: Optional[date]) -> Optional[str]:
    return value.isoformat() if value else None


@dataclass
class CPMTaskInfo:
    task: ScheduleTask
    early_start: Optional[date]
    early_finish: Optional[date]
    late_start: Optional[date]
    late_finish: Optional[date]
    total_float_days: Optional[int]
    is_critical: bool


@dataclass(frozen=True)
class CriticalTaskRow:
    id: str
    name: str
    task_code: Optional[str]
    duration_days: int
    early_start: Optional[date]
    early_finish: Optional[date]
    total_float: int

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "name": self.name,
            "task_code": self.task_code,
            "duration_days": self.duration_days,
            "early_start": _iso(self.early_start),
            "early_finish": _iso(self.early_finish),
            "total_float": self.total_float,
        }


@dataclass
class CriticalPathResult:
    project_id: str
    tasks: Dict[str, CPMTaskInfo] = field(default_factory=dict)
    critical_path: List[CriticalTaskRow] = field(default_factory=list)
    project_start: Optional[date] = None
    project_end: Optional[date] = None
    project_duration: int = 0

    @property
    def critical_task_count(self) -> int:
        return len(self.critical_path)

    @property
    def total_task_count(self) -> int:
        return len(self.tasks)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "project_id": self.project_id,
            "critical_path": [row.to_dict() for row in self.critical_path],
            "project_start": _iso(self.project_start),
            "project_end": _iso(self.project_end),
            "project_duration": self.project_duration,
            "critical_task_count": self.critical_task_count,
            "total_task_count": self.total_task_count,
        }
