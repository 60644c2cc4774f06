# core/services/baseline/service.py
from __future__ import annotations

import logging
from typing import List, Optional

from sqlalchemy.orm import Session

from core.events.domain_events import domain_events
from core.exceptions import NotFoundError, ValidationError
from core.interfaces import BaselineRepository, ProjectRepository, TaskRepository
from core.models import BaselineSummary, BaselineType, ScheduleBaseline
from core.services.common.values import coerce_enum

logger = logging.getLogger(__name__)


class BaselineService:
    """
    Named, immutable snapshots of a project's tasks.
    At most one baseline per project is active; variance reports compare
    the live schedule against it.
    """

    def __init__(
        self,
        session: Session,
        project_repo: ProjectRepository,
        task_repo: TaskRepository,
        baseline_repo: BaselineRepository,
    ):
        self._session: Session = session
        self._projects: ProjectRepository = project_repo
        self._tasks: TaskRepository = task_repo
        self._baselines: BaselineRepository = baseline_repo

    def create_baseline(
        self,
        project_id: str,
        name: str,
        description: str = "",
        baseline_type: BaselineType | str = BaselineType.APPROVED,
    ) -> ScheduleBaseline:
        project = self._projects.get(project_id)
        if not project:
            raise NotFoundError("Project not found.", code="PROJECT_NOT_FOUND")
        if not name or not name.strip():
            raise ValidationError("Baseline name cannot be empty.", code="BASELINE_NAME_EMPTY")
        baseline_type = coerce_enum(BaselineType, baseline_type, "baseline_type")

        tasks = self._tasks.list_by_project(project_id)
        baseline = ScheduleBaseline.capture(
            project_id=project_id,
            name=name,
            tasks=tasks,
            description=description,
            baseline_type=baseline_type,
        )

        try:
            if baseline.is_active:
                self._baselines.deactivate_all(project_id)
            self._baselines.add(baseline)
            self._session.commit()
        except Exception as exc:
            self._session.rollback()
            logger.error("Error creating baseline for project %s: %s", project_id, exc)
            raise

        logger.info(
            "Captured %s baseline %s (%d tasks) for project %s",
            baseline.baseline_type.value,
            baseline.id,
            len(baseline.task_snapshot),
            project_id,
        )
        domain_events.baseline_changed.emit(project_id)
        return baseline

    def list_baselines(self, project_id: str) -> List[BaselineSummary]:
        return [BaselineSummary.of(b) for b in self._baselines.list_for_project(project_id)]

    def get_baseline(self, baseline_id: str) -> ScheduleBaseline:
        baseline = self._baselines.get(baseline_id)
        if not baseline:
            raise NotFoundError("Baseline not found.", code="BASELINE_NOT_FOUND")
        return baseline

    def get_active_baseline(self, project_id: str) -> Optional[ScheduleBaseline]:
        return self._baselines.get_active_for_project(project_id)

    def set_active_baseline(self, baseline_id: str) -> ScheduleBaseline:
        baseline = self.get_baseline(baseline_id)
        try:
            self._baselines.deactivate_all(baseline.project_id)
            self._baselines.set_active(baseline_id, True)
            self._session.commit()
        except Exception:
            self._session.rollback()
            raise
        baseline.is_active = True
        domain_events.baseline_changed.emit(baseline.project_id)
        return baseline

    def delete_baseline(self, baseline_id: str) -> None:
        baseline = self.get_baseline(baseline_id)
        try:
            self._baselines.delete(baseline_id)
            self._session.commit()
        except Exception:
            self._session.rollback()
            raise
        domain_events.baseline_changed.emit(baseline.project_id)


__all__ = ["BaselineService"]
