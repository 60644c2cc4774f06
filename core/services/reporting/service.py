from __future__ import annotations

from sqlalchemy.orm import Session

from core.exceptions import NotFoundError
from core.interfaces import (
    BaselineRepository,
    DependencyRepository,
    MilestoneRepository,
    ProjectRepository,
    TaskRepository,
)

from .gantt import ReportingGanttMixin
from .lookahead import ReportingLookAheadMixin
from .summary import ReportingSummaryMixin
from .variance import ReportingVarianceMixin


class ReportingService(
    ReportingVarianceMixin,
    ReportingGanttMixin,
    ReportingLookAheadMixin,
    ReportingSummaryMixin,
):
    """Read-only schedule projections; nothing here recomputes or writes."""

    def __init__(
        self,
        session: Session,
        project_repo: ProjectRepository,
        task_repo: TaskRepository,
        dependency_repo: DependencyRepository,
        milestone_repo: MilestoneRepository,
        baseline_repo: BaselineRepository,
    ):
        self._session: Session = session
        self._project_repo: ProjectRepository = project_repo
        self._task_repo: TaskRepository = task_repo
        self._dependency_repo: DependencyRepository = dependency_repo
        self._milestone_repo: MilestoneRepository = milestone_repo
        self._baseline_repo: BaselineRepository = baseline_repo

    def _require_project(self, project_id: str) -> None:
        if not self._project_repo.get(project_id):
            raise NotFoundError("Project not found.", code="PROJECT_NOT_FOUND")


__all__ = ["ReportingService"]
