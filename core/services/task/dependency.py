from __future__ import annotations

import logging
from typing import List, Tuple

from sqlalchemy.orm import Session

from core.events.domain_events import domain_events
from core.exceptions import NotFoundError, ValidationError
from core.interfaces import DependencyRepository, TaskRepository
from core.models import DependencyType, TaskDependency
from core.services.common.values import coerce_enum

logger = logging.getLogger(__name__)


class TaskDependencyMixin:
    _session: Session
    _task_repo: TaskRepository
    _dependency_repo: DependencyRepository

    def add_dependency(
        self,
        predecessor_id: str,
        successor_id: str,
        dependency_type: DependencyType | str = DependencyType.FINISH_TO_START,
        lag_days: int = 0,
    ) -> TaskDependency:
        if predecessor_id == successor_id:
            raise ValidationError("A task cannot depend on itself.", code="DEPENDENCY_SELF")

        pred = self._task_repo.get(predecessor_id)
        if not pred:
            raise NotFoundError("Predecessor task not found.", code="TASK_NOT_FOUND")
        succ = self._task_repo.get(successor_id)
        if not succ:
            raise NotFoundError("Successor task not found.", code="TASK_NOT_FOUND")
        if pred.project_id != succ.project_id:
            raise ValidationError(
                "Dependencies can only link tasks of the same project.",
                code="DEPENDENCY_CROSS_PROJECT",
            )

        dependency_type = coerce_enum(DependencyType, dependency_type, "dependency_type")
        try:
            lag = int(lag_days or 0)
        except (TypeError, ValueError) as exc:
            raise ValidationError("lag_days must be a whole number of days.", code="DEPENDENCY_LAG_INVALID") from exc

        for existing in self._dependency_repo.list_successors(predecessor_id):
            if existing.successor_task_id == successor_id:
                raise ValidationError(
                    "This dependency already exists.",
                    code="DEPENDENCY_DUPLICATE",
                )
        self._check_no_circular_dependency(pred.project_id, predecessor_id, successor_id)

        dep = TaskDependency.create(predecessor_id, successor_id, dependency_type, lag)
        try:
            self._dependency_repo.add(dep)
            self._session.commit()
        except Exception as exc:
            self._session.rollback()
            logger.error("Error adding dependency %s -> %s: %s", predecessor_id, successor_id, exc)
            raise
        logger.info(
            "Added %s dependency %s -> %s (lag %d)",
            dep.dependency_type.value,
            predecessor_id,
            successor_id,
            dep.lag_days,
        )
        domain_events.tasks_changed.emit(pred.project_id)
        return dep

    def remove_dependency(self, dep_id: str) -> None:
        dep = self._dependency_repo.get(dep_id)
        if not dep:
            raise NotFoundError("Dependency not found.", code="DEPENDENCY_NOT_FOUND")
        succ = self._task_repo.get(dep.successor_task_id)
        try:
            self._dependency_repo.delete(dep_id)
            self._session.commit()
        except Exception:
            self._session.rollback()
            raise
        if succ is not None:
            domain_events.tasks_changed.emit(succ.project_id)

    def list_dependencies_for_task(self, task_id: str) -> Tuple[List[TaskDependency], List[TaskDependency]]:
        """(predecessor links, successor links) of a task."""
        self._require_task(task_id)
        return (
            self._dependency_repo.list_predecessors(task_id),
            self._dependency_repo.list_successors(task_id),
        )


__all__ = ["TaskDependencyMixin"]
