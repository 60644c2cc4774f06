from __future__ import annotations

from enum import Enum


class TaskStatus(str, Enum):
    NOT_STARTED = "not_started"
    IN_PROGRESS = "in_progress"
    COMPLETED = "completed"
    ON_HOLD = "on_hold"
    CANCELLED = "cancelled"
    DELAYED = "delayed"


class TaskPriority(str, Enum):
    LOW = "low"
    NORMAL = "normal"
    HIGH = "high"
    CRITICAL = "critical"


class TaskType(str, Enum):
    TASK = "task"
    PHASE = "phase"
    WORK_PACKAGE = "work_package"
    SUMMARY = "summary"


class ConstraintType(str, Enum):
    ASAP = "asap"
    ALAP = "alap"
    START_NO_EARLIER_THAN = "snet"
    START_NO_LATER_THAN = "snlt"
    FINISH_NO_EARLIER_THAN = "fnet"
    FINISH_NO_LATER_THAN = "fnlt"
    MUST_START_ON = "mso"
    MUST_FINISH_ON = "mfo"


class DependencyType(str, Enum):
    FINISH_TO_START = "FS"
    FINISH_TO_FINISH = "FF"
    START_TO_START = "SS"
    START_TO_FINISH = "SF"


class MilestoneType(str, Enum):
    PROJECT = "project"
    DELIVERABLE = "deliverable"
    PHASE = "phase"
    PAYMENT = "payment"
    INSPECTION = "inspection"
    REGULATORY = "regulatory"


class MilestoneStatus(str, Enum):
    PENDING = "pending"
    ON_TRACK = "on_track"
    AT_RISK = "at_risk"
    ACHIEVED = "achieved"
    MISSED = "missed"


class BaselineType(str, Enum):
    ORIGINAL = "original"
    APPROVED = "approved"
    WHAT_IF = "what_if"
    FORECAST = "forecast"

    @property
    def activates(self) -> bool:
        return self in (BaselineType.ORIGINAL, BaselineType.APPROVED)


class VarianceStatus(str, Enum):
    DELAYED = "delayed"
    AHEAD = "ahead"
    ON_TRACK = "on_track"
    NEW_TASK = "new_task"
    NOT_COMPARABLE = "not_comparable"


__all__ = [
    "TaskStatus",
    "TaskPriority",
    "TaskType",
    "ConstraintType",
    "DependencyType",
    "MilestoneType",
    "MilestoneStatus",
    "BaselineType",
    "VarianceStatus",
]
