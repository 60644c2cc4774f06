from __future__ import annotations

from datetime import date

from core.exceptions import BusinessRuleError, NotFoundError, ValidationError
from core.interfaces import DependencyRepository, ProjectRepository, TaskRepository
from core.models import ScheduleTask


class TaskValidationMixin:
    _task_repo: TaskRepository
    _dependency_repo: DependencyRepository
    _project_repo: ProjectRepository | None

    def _require_project(self, project_id: str) -> None:
        if self._project_repo is None:
            return
        if not self._project_repo.get(project_id):
            raise NotFoundError("Project not found.", code="PROJECT_NOT_FOUND")

    def _require_task(self, task_id: str) -> ScheduleTask:
        task = self._task_repo.get(task_id)
        if not task:
            raise NotFoundError("Task not found.", code="TASK_NOT_FOUND")
        return task

    def _validate_task_name(self, name: str) -> None:
        if not name or not name.strip():
            raise ValidationError("Task name cannot be empty.", code="TASK_NAME_EMPTY")
        if len(name.strip()) > 500:
            raise ValidationError("Task name must be at most 500 characters.", code="TASK_NAME_TOO_LONG")

    def _validate_dates(
        self,
        start_date: date | None,
        end_date: date | None,
        duration_days: int | None,
    ) -> None:
        if start_date and end_date and end_date < start_date:
            raise ValidationError(
                f"Task end date ({end_date}) cannot be before its start date ({start_date}).",
                code="TASK_INVALID_DATE",
            )
        if duration_days is not None and int(duration_days) < 0:
            raise ValidationError("Task duration_days cannot be negative.", code="TASK_DURATION_INVALID")

    def _validate_percent(self, percent_complete: int) -> None:
        if percent_complete is None or not 0 <= int(percent_complete) <= 100:
            raise ValidationError(
                "percent_complete must be between 0 and 100.",
                code="TASK_PROGRESS_INVALID",
            )

    def _validate_parent(self, task_id: str | None, project_id: str, parent_task_id: str | None) -> None:
        if parent_task_id is None:
            return
        if parent_task_id == task_id:
            raise ValidationError("A task cannot be its own parent.", code="TASK_PARENT_INVALID")
        parent = self._task_repo.get(parent_task_id)
        if not parent or parent.project_id != project_id:
            raise ValidationError(
                "Parent task must exist in the same project.",
                code="TASK_PARENT_INVALID",
            )
        # walk up: the new parent must not sit below this task
        seen: set[str] = set()
        current = parent
        while current is not None and current.parent_task_id and current.id not in seen:
            seen.add(current.id)
            if current.parent_task_id == task_id:
                raise ValidationError(
                    "Parent task cannot be one of the task's own subtasks.",
                    code="TASK_PARENT_INVALID",
                )
            current = self._task_repo.get(current.parent_task_id)

    def _check_no_circular_dependency(
        self, project_id: str, predecessor_id: str, successor_id: str
    ) -> None:
        deps = self._dependency_repo.list_by_project(project_id)
        project_task = {t.id for t in self._task_repo.list_by_project(project_id)}
        deps = [
            d
            for d in deps
            if d.predecessor_task_id in project_task and d.successor_task_id in project_task
        ]

        graph: dict[str, list[str]] = {}
        for d in deps:
            graph.setdefault(d.predecessor_task_id, []).append(d.successor_task_id)
        graph.setdefault(predecessor_id, []).append(successor_id)

        target = predecessor_id
        stack = [successor_id]
        visited = set()

        while stack:
            cur = stack.pop()
            if cur == target:
                raise BusinessRuleError(
                    "Adding this dependency would create a circular dependency.",
                    code="DEPENDENCY_CYCLE",
                )
            if cur in visited:
                continue
            visited.add(cur)
            for nxt in graph.get(cur, []):
                if nxt not in visited:
                    stack.append(nxt)


__all__ = ["TaskValidationMixin"]
