from __future__ import annotations

import logging
from datetime import date, timedelta
from typing import Any, Optional

from sqlalchemy.orm import Session

from core.events.domain_events import domain_events
from core.exceptions import ValidationError
from core.interfaces import DependencyRepository, MilestoneRepository, TaskRepository
from core.models import (
    SCHEDULE_FIELDS,
    ConstraintType,
    ScheduleTask,
    TaskPriority,
    TaskStatus,
    TaskType,
)
from core.services.common.values import coerce_date, coerce_enum, coerce_int


logger = logging.getLogger(__name__)

EDITABLE_FIELDS = (
    "name",
    "description",
    "task_code",
    "parent_task_id",
    "planned_start_date",
    "planned_end_date",
    "duration_days",
    "status",
    "priority",
    "task_type",
    "constraint_type",
    "constraint_date",
    "actual_start_date",
    "actual_end_date",
    "percent_complete",
    "budgeted_cost",
    "actual_cost",
    "assigned_to",
)
_READ_ONLY_FIELDS = ("id", "project_id") + SCHEDULE_FIELDS
_ENUM_FIELDS = {
    "status": TaskStatus,
    "priority": TaskPriority,
    "task_type": TaskType,
    "constraint_type": ConstraintType,
}
_INT_FIELDS = ("duration_days", "percent_complete")
_DATE_FIELDS = (
    "planned_start_date",
    "planned_end_date",
    "constraint_date",
    "actual_start_date",
    "actual_end_date",
)


def _planned_end(start: date | None, duration_days: int | None) -> date | None:
    if start is None or duration_days is None:
        return None
    return start + timedelta(days=int(duration_days))


def _apply_progress_status(task: ScheduleTask) -> None:
    if task.percent_complete == 100:
        task.status = TaskStatus.COMPLETED
    elif task.percent_complete > 0 and task.status == TaskStatus.NOT_STARTED:
        task.status = TaskStatus.IN_PROGRESS


class TaskLifecycleMixin:
    _session: Session
    _task_repo: TaskRepository
    _dependency_repo: DependencyRepository
    _milestone_repo: MilestoneRepository | None

    def create_task(
        self,
        project_id: str,
        name: str,
        description: str = "",
        planned_start_date: Optional[date] = None,
        planned_end_date: Optional[date] = None,
        duration_days: Optional[int] = None,
        status: TaskStatus | str = TaskStatus.NOT_STARTED,
        priority: TaskPriority | str = TaskPriority.NORMAL,
        task_type: TaskType | str = TaskType.TASK,
        parent_task_id: Optional[str] = None,
        task_code: Optional[str] = None,
        constraint_type: ConstraintType | str | None = None,
        constraint_date: Optional[date] = None,
        budgeted_cost: Optional[float] = None,
        assigned_to: Optional[str] = None,
    ) -> ScheduleTask:
        self._require_project(project_id)
        self._validate_task_name(name)
        planned_start_date = coerce_date(planned_start_date, "planned_start_date")
        planned_end_date = coerce_date(planned_end_date, "planned_end_date")
        duration_days = coerce_int(duration_days, "duration_days")

        if duration_days is None:
            if planned_start_date and planned_end_date:
                duration_days = (planned_end_date - planned_start_date).days
            else:
                duration_days = 0
        self._validate_dates(planned_start_date, planned_end_date, duration_days)
        if planned_end_date is None:
            planned_end_date = _planned_end(planned_start_date, duration_days)
        self._validate_parent(None, project_id, parent_task_id)

        task = ScheduleTask.create(
            project_id=project_id,
            name=name.strip(),
            description=description,
            parent_task_id=parent_task_id,
            task_code=task_code,
            planned_start_date=planned_start_date,
            planned_end_date=planned_end_date,
            duration_days=int(duration_days),
            status=coerce_enum(TaskStatus, status, "status"),
            priority=coerce_enum(TaskPriority, priority, "priority"),
            task_type=coerce_enum(TaskType, task_type, "task_type"),
            constraint_type=(
                coerce_enum(ConstraintType, constraint_type, "constraint_type")
                if constraint_type is not None
                else None
            ),
            constraint_date=coerce_date(constraint_date, "constraint_date"),
            budgeted_cost=budgeted_cost,
            assigned_to=assigned_to,
        )

        try:
            self._task_repo.add(task)
            self._session.commit()
            logger.info("Created task %s - %s for project %s", task.id, task.name, project_id)
        except Exception as exc:
            self._session.rollback()
            logger.error("Error creating task: %s", exc)
            raise
        domain_events.tasks_changed.emit(project_id)
        return task

    def update_task(self, task_id: str, **changes: Any) -> ScheduleTask:
        """
        Apply user edits. Fields written by the critical path engine are
        read-only here; so are id and project_id.
        """
        for field_name in changes:
            if field_name in _READ_ONLY_FIELDS:
                raise ValidationError(
                    f"Field '{field_name}' is computed and cannot be edited.",
                    code="TASK_FIELD_READ_ONLY",
                )
            if field_name not in EDITABLE_FIELDS:
                raise ValidationError(f"Unknown task field '{field_name}'.", code="TASK_FIELD_UNKNOWN")

        task = self._require_task(task_id)
        values = dict(changes)
        for field_name, enum_cls in _ENUM_FIELDS.items():
            if field_name not in values:
                continue
            if values[field_name] is None and field_name == "constraint_type":
                continue
            values[field_name] = coerce_enum(enum_cls, values[field_name], field_name)
        for field_name in _DATE_FIELDS:
            if field_name in values:
                values[field_name] = coerce_date(values[field_name], field_name)
        for field_name in _INT_FIELDS:
            if field_name not in values:
                continue
            values[field_name] = coerce_int(values[field_name], field_name)
            if values[field_name] is None:
                raise ValidationError(f"Task {field_name} cannot be empty.", code="FIELD_VALUE_INVALID")

        if "name" in values:
            self._validate_task_name(values["name"])
            values["name"] = values["name"].strip()
        if "percent_complete" in values:
            self._validate_percent(values["percent_complete"])
        if "parent_task_id" in values:
            self._validate_parent(task.id, task.project_id, values["parent_task_id"])

        for field_name, value in values.items():
            setattr(task, field_name, value)
        if "percent_complete" in values and "status" not in values:
            _apply_progress_status(task)

        if "planned_end_date" not in values and (
            "planned_start_date" in values or "duration_days" in values
        ):
            derived = _planned_end(task.planned_start_date, task.duration_days)
            if derived is not None:
                task.planned_end_date = derived
        self._validate_dates(task.planned_start_date, task.planned_end_date, task.duration_days)

        try:
            self._task_repo.update(task)
            self._session.commit()
        except Exception as exc:
            self._session.rollback()
            logger.error("Error updating task %s: %s", task_id, exc)
            raise
        domain_events.tasks_changed.emit(task.project_id)
        return task

    def set_status(self, task_id: str, status: TaskStatus | str) -> ScheduleTask:
        task = self._require_task(task_id)
        task.status = coerce_enum(TaskStatus, status, "status")
        try:
            self._task_repo.update(task)
            self._session.commit()
        except Exception:
            self._session.rollback()
            raise
        domain_events.tasks_changed.emit(task.project_id)
        return task

    def update_progress(self, task_id: str, percent_complete: int) -> ScheduleTask:
        percent_complete = coerce_int(percent_complete, "percent_complete")
        self._validate_percent(percent_complete)
        task = self._require_task(task_id)
        task.percent_complete = percent_complete
        _apply_progress_status(task)
        try:
            self._task_repo.update(task)
            self._session.commit()
        except Exception:
            self._session.rollback()
            raise
        domain_events.tasks_changed.emit(task.project_id)
        return task

    def _collect_subtree(self, task_id: str) -> list[str]:
        """Task id followed by all descendant ids, parents before children."""
        ordered = [task_id]
        idx = 0
        while idx < len(ordered):
            for child in self._task_repo.list_children(ordered[idx]):
                if child.id not in ordered:
                    ordered.append(child.id)
            idx += 1
        return ordered

    def delete_task(self, task_id: str) -> None:
        task = self._require_task(task_id)
        doomed = self._collect_subtree(task_id)

        try:
            for tid in reversed(doomed):
                self._dependency_repo.delete_for_task(tid)
                if self._milestone_repo is not None:
                    self._milestone_repo.clear_related_task(tid)
                self._task_repo.delete(tid)
            self._session.commit()
        except Exception as exc:
            self._session.rollback()
            logger.error("Error deleting task %s: %s", task_id, exc)
            raise
        logger.info("Deleted task %s and %d subtasks", task_id, len(doomed) - 1)
        domain_events.tasks_changed.emit(task.project_id)


__all__ = ["TaskLifecycleMixin", "EDITABLE_FIELDS"]
