# infra/db/models.py
from __future__ import annotations

from datetime import date, datetime
from typing import Any, Optional

from sqlalchemy import (
    JSON,
    Boolean,
    CheckConstraint,
    Date,
    DateTime,
    Enum as SAEnum,
    Float,
    ForeignKey,
    Index,
    Integer,
    String,
    Text,
    UniqueConstraint,
)
from sqlalchemy.orm import Mapped, mapped_column

from core.models import (
    BaselineType,
    ConstraintType,
    DependencyType,
    MilestoneStatus,
    MilestoneType,
    TaskPriority,
    TaskStatus,
    TaskType,
)
from infra.db.base import Base


def _enum(enum_cls) -> SAEnum:
    return SAEnum(enum_cls, native_enum=False, length=32)


class ProjectORM(Base):
    __tablename__ = "projects"

    id: Mapped[str] = mapped_column(String, primary_key=True)
    name: Mapped[str] = mapped_column(String, nullable=False)
    description: Mapped[str] = mapped_column(Text, default="")
    start_date: Mapped[Optional[date]] = mapped_column(Date, nullable=True)
    end_date: Mapped[Optional[date]] = mapped_column(Date, nullable=True)


class ScheduleTaskORM(Base):
    __tablename__ = "schedule_tasks"
    __table_args__ = (
        CheckConstraint("duration_days >= 0", name="ck_task_duration_non_negative"),
        CheckConstraint(
            "percent_complete >= 0 AND percent_complete <= 100",
            name="ck_task_percent_complete_range",
        ),
    )

    id: Mapped[str] = mapped_column(String, primary_key=True)
    project_id: Mapped[str] = mapped_column(
        String,
        ForeignKey("projects.id", ondelete="CASCADE"),
        nullable=False,
    )
    parent_task_id: Mapped[Optional[str]] = mapped_column(
        String,
        ForeignKey("schedule_tasks.id", ondelete="CASCADE"),
        nullable=True,
    )
    task_code: Mapped[Optional[str]] = mapped_column(String(50), nullable=True)
    name: Mapped[str] = mapped_column(String(500), nullable=False)
    description: Mapped[str] = mapped_column(Text, default="")

    planned_start_date: Mapped[Optional[date]] = mapped_column(Date, nullable=True)
    planned_end_date: Mapped[Optional[date]] = mapped_column(Date, nullable=True)
    duration_days: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    status: Mapped[TaskStatus] = mapped_column(
        _enum(TaskStatus), default=TaskStatus.NOT_STARTED, nullable=False
    )
    priority: Mapped[TaskPriority] = mapped_column(
        _enum(TaskPriority), default=TaskPriority.NORMAL, nullable=False
    )
    task_type: Mapped[TaskType] = mapped_column(_enum(TaskType), default=TaskType.TASK, nullable=False)
    constraint_type: Mapped[Optional[ConstraintType]] = mapped_column(_enum(ConstraintType), nullable=True)
    constraint_date: Mapped[Optional[date]] = mapped_column(Date, nullable=True)

    actual_start_date: Mapped[Optional[date]] = mapped_column(Date, nullable=True)
    actual_end_date: Mapped[Optional[date]] = mapped_column(Date, nullable=True)
    percent_complete: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    budgeted_cost: Mapped[Optional[float]] = mapped_column(Float, nullable=True)
    actual_cost: Mapped[Optional[float]] = mapped_column(Float, nullable=True)
    assigned_to: Mapped[Optional[str]] = mapped_column(String, nullable=True)

    # written by the critical path engine only
    early_start_date: Mapped[Optional[date]] = mapped_column(Date, nullable=True)
    early_finish_date: Mapped[Optional[date]] = mapped_column(Date, nullable=True)
    late_start_date: Mapped[Optional[date]] = mapped_column(Date, nullable=True)
    late_finish_date: Mapped[Optional[date]] = mapped_column(Date, nullable=True)
    total_float_days: Mapped[Optional[int]] = mapped_column(Integer, nullable=True)
    is_critical: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)

Index("idx_schedule_tasks_project", ScheduleTaskORM.project_id)
Index("idx_schedule_tasks_parent", ScheduleTaskORM.parent_task_id)
Index("idx_schedule_tasks_dates", ScheduleTaskORM.planned_start_date, ScheduleTaskORM.planned_end_date)
Index("idx_schedule_tasks_status", ScheduleTaskORM.status)


class TaskDependencyORM(Base):
    __tablename__ = "task_dependencies"
    __table_args__ = (
        CheckConstraint("predecessor_task_id != successor_task_id", name="ck_no_self_dependency"),
        UniqueConstraint("predecessor_task_id", "successor_task_id", name="ux_dependency_pair"),
    )

    id: Mapped[str] = mapped_column(String, primary_key=True)
    predecessor_task_id: Mapped[str] = mapped_column(
        String, ForeignKey("schedule_tasks.id", ondelete="CASCADE"), nullable=False
    )
    successor_task_id: Mapped[str] = mapped_column(
        String, ForeignKey("schedule_tasks.id", ondelete="CASCADE"), nullable=False
    )
    dependency_type: Mapped[DependencyType] = mapped_column(
        _enum(DependencyType), default=DependencyType.FINISH_TO_START, nullable=False
    )
    lag_days: Mapped[int] = mapped_column(Integer, nullable=False, default=0)

Index("idx_dep_predecessor", TaskDependencyORM.predecessor_task_id)
Index("idx_dep_successor", TaskDependencyORM.successor_task_id)


class MilestoneORM(Base):
    __tablename__ = "schedule_milestones"

    id: Mapped[str] = mapped_column(String, primary_key=True)
    project_id: Mapped[str] = mapped_column(
        String, ForeignKey("projects.id", ondelete="CASCADE"), nullable=False
    )
    name: Mapped[str] = mapped_column(String(500), nullable=False)
    description: Mapped[str] = mapped_column(Text, default="")
    milestone_type: Mapped[MilestoneType] = mapped_column(
        _enum(MilestoneType), default=MilestoneType.PROJECT, nullable=False
    )
    target_date: Mapped[date] = mapped_column(Date, nullable=False)
    forecast_date: Mapped[Optional[date]] = mapped_column(Date, nullable=True)
    actual_date: Mapped[Optional[date]] = mapped_column(Date, nullable=True)
    status: Mapped[MilestoneStatus] = mapped_column(
        _enum(MilestoneStatus), default=MilestoneStatus.PENDING, nullable=False
    )
    is_critical: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    related_task_id: Mapped[Optional[str]] = mapped_column(
        String, ForeignKey("schedule_tasks.id", ondelete="SET NULL"), nullable=True
    )

Index("idx_milestones_project", MilestoneORM.project_id)
Index("idx_milestones_date", MilestoneORM.target_date)


class ScheduleBaselineORM(Base):
    __tablename__ = "schedule_baselines"

    id: Mapped[str] = mapped_column(String, primary_key=True)
    project_id: Mapped[str] = mapped_column(
        String, ForeignKey("projects.id", ondelete="CASCADE"), nullable=False
    )
    name: Mapped[str] = mapped_column(String(200), nullable=False)
    description: Mapped[str] = mapped_column(Text, default="")
    baseline_type: Mapped[BaselineType] = mapped_column(
        _enum(BaselineType), default=BaselineType.APPROVED, nullable=False
    )
    baseline_date: Mapped[date] = mapped_column(Date, nullable=False)
    start_date: Mapped[Optional[date]] = mapped_column(Date, nullable=True)
    finish_date: Mapped[Optional[date]] = mapped_column(Date, nullable=True)
    is_active: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    created_at: Mapped[datetime] = mapped_column(DateTime, nullable=False)
    task_snapshot: Mapped[list[dict[str, Any]]] = mapped_column(JSON, nullable=False, default=list)

Index("idx_baselines_project", ScheduleBaselineORM.project_id)
Index("idx_baselines_active", ScheduleBaselineORM.project_id, ScheduleBaselineORM.is_active)
