from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date
from typing import List, Optional

from core.interfaces import DependencyRepository, TaskRepository
from core.models import ScheduleTask, TaskDependency, TaskPriority, TaskStatus
from core.services.common.values import coerce_enum


@dataclass
class TaskDetail:
    task: ScheduleTask
    subtasks: List[ScheduleTask] = field(default_factory=list)
    predecessors: List[TaskDependency] = field(default_factory=list)
    successors: List[TaskDependency] = field(default_factory=list)


def _by_start_then_code(task: ScheduleTask):
    return (
        task.planned_start_date is None,
        task.planned_start_date or date.min,
        task.task_code or "",
        task.name,
    )


class TaskQueryMixin:
    _task_repo: TaskRepository
    _dependency_repo: DependencyRepository

    def get_task(self, task_id: str) -> ScheduleTask:
        return self._require_task(task_id)

    def list_tasks_for_project(
        self,
        project_id: str,
        status: TaskStatus | str | None = None,
        priority: TaskPriority | str | None = None,
        assigned_to: Optional[str] = None,
        parent_only: bool = False,
    ) -> List[ScheduleTask]:
        tasks = self._task_repo.list_by_project(project_id)

        if status is not None:
            wanted_status = coerce_enum(TaskStatus, status, "status")
            tasks = [t for t in tasks if t.status == wanted_status]
        if priority is not None:
            wanted_priority = coerce_enum(TaskPriority, priority, "priority")
            tasks = [t for t in tasks if t.priority == wanted_priority]
        if assigned_to:
            tasks = [t for t in tasks if t.assigned_to == assigned_to]
        if parent_only:
            tasks = [t for t in tasks if t.parent_task_id is None]

        return sorted(tasks, key=_by_start_then_code)

    def list_subtasks(self, task_id: str) -> List[ScheduleTask]:
        self._require_task(task_id)
        return sorted(self._task_repo.list_children(task_id), key=_by_start_then_code)

    def get_task_detail(self, task_id: str) -> TaskDetail:
        task = self._require_task(task_id)
        return TaskDetail(
            task=task,
            subtasks=sorted(self._task_repo.list_children(task_id), key=_by_start_then_code),
            predecessors=self._dependency_repo.list_predecessors(task_id),
            successors=self._dependency_repo.list_successors(task_id),
        )


__all__ = ["TaskQueryMixin", "TaskDetail"]
