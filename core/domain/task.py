from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from typing import Optional

from core.domain.enums import ConstraintType, DependencyType, TaskPriority, TaskStatus, TaskType
from core.domain.identifiers import generate_id


# Fields owned by the critical path engine; user edits never touch them.
SCHEDULE_FIELDS = (
    "early_start",
    "early_finish",
    "late_start",
    "late_finish",
    "total_float_days",
    "is_critical",
)


@dataclass
class ScheduleTask:
    id: str
    project_id: str
    name: str
    description: str = ""
    parent_task_id: Optional[str] = None
    task_code: Optional[str] = None

    planned_start_date: Optional[date] = None
    planned_end_date: Optional[date] = None
    duration_days: int = 0
    status: TaskStatus = TaskStatus.NOT_STARTED
    priority: TaskPriority = TaskPriority.NORMAL
    task_type: TaskType = TaskType.TASK
    constraint_type: Optional[ConstraintType] = None
    constraint_date: Optional[date] = None

    actual_start_date: Optional[date] = None
    actual_end_date: Optional[date] = None
    percent_complete: int = 0
    budgeted_cost: Optional[float] = None
    actual_cost: Optional[float] = None
    assigned_to: Optional[str] = None

    early_start: Optional[date] = None
    early_finish: Optional[date] = None
    late_start: Optional[date] = None
    late_finish: Optional[date] = None
    total_float_days: Optional[int] = None
    is_critical: bool = False

    @staticmethod
    def create(project_id: str, name: str, description: str = "", **extra) -> "ScheduleTask":
        return ScheduleTask(
            id=generate_id(),
            project_id=project_id,
            name=name,
            description=description,
            **extra,
        )


@dataclass
class TaskDependency:
    id: str
    predecessor_task_id: str
    successor_task_id: str
    dependency_type: DependencyType = DependencyType.FINISH_TO_START
    lag_days: int = 0

    @staticmethod
    def create(
        predecessor_id: str,
        successor_id: str,
        dependency_type: DependencyType = DependencyType.FINISH_TO_START,
        lag_days: int = 0,
    ) -> "TaskDependency":
        return TaskDependency(
            id=generate_id(),
            predecessor_task_id=predecessor_id,
            successor_task_id=successor_id,
            dependency_type=dependency_type,
            lag_days=lag_days,
        )


__all__ = ["SCHEDULE_FIELDS", "ScheduleTask", "TaskDependency"]
