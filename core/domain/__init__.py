from core.domain.baseline import BaselineSummary, BaselineTaskSnapshot, ScheduleBaseline
from core.domain.enums import (
    BaselineType,
    ConstraintType,
    DependencyType,
    MilestoneStatus,
    MilestoneType,
    TaskPriority,
    TaskStatus,
    TaskType,
    VarianceStatus,
)
from core.domain.identifiers import generate_id
from core.domain.milestone import Milestone
from core.domain.project import Project
from core.domain.task import SCHEDULE_FIELDS, ScheduleTask, TaskDependency

__all__ = [
    "generate_id",
    "TaskStatus",
    "TaskPriority",
    "TaskType",
    "ConstraintType",
    "DependencyType",
    "MilestoneType",
    "MilestoneStatus",
    "BaselineType",
    "VarianceStatus",
    "Project",
    "ScheduleTask",
    "TaskDependency",
    "SCHEDULE_FIELDS",
    "Milestone",
    "ScheduleBaseline",
    "BaselineTaskSnapshot",
    "BaselineSummary",
]
