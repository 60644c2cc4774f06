from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from sqlalchemy.orm import Session

from core.services.baseline import BaselineService
from core.services.milestone import MilestoneService
from core.services.project import ProjectService
from core.services.reporting import ReportingService
from core.services.scheduling import DependencyMode, SchedulingEngine
from core.services.task import TaskService
from infra.db.repositories import (
    SqlAlchemyBaselineRepository,
    SqlAlchemyDependencyRepository,
    SqlAlchemyMilestoneRepository,
    SqlAlchemyProjectRepository,
    SqlAlchemyTaskRepository,
)


@dataclass(frozen=True)
class ServiceGraph:
    session: Session
    project_service: ProjectService
    task_service: TaskService
    milestone_service: MilestoneService
    scheduling_engine: SchedulingEngine
    baseline_service: BaselineService
    reporting_service: ReportingService

    def as_dict(self) -> dict[str, Any]:
        return {
            "session": self.session,
            "project_service": self.project_service,
            "task_service": self.task_service,
            "milestone_service": self.milestone_service,
            "scheduling_engine": self.scheduling_engine,
            "baseline_service": self.baseline_service,
            "reporting_service": self.reporting_service,
        }


def build_service_graph(
    session: Session,
    dependency_mode: DependencyMode | str | None = None,
) -> ServiceGraph:
    """Wire repositories and services around one session (one unit of work)."""
    project_repo = SqlAlchemyProjectRepository(session)
    task_repo = SqlAlchemyTaskRepository(session)
    dependency_repo = SqlAlchemyDependencyRepository(session)
    milestone_repo = SqlAlchemyMilestoneRepository(session)
    baseline_repo = SqlAlchemyBaselineRepository(session)

    project_service = ProjectService(session, project_repo)
    task_service = TaskService(
        session,
        task_repo,
        dependency_repo,
        project_repo=project_repo,
        milestone_repo=milestone_repo,
    )
    milestone_service = MilestoneService(session, milestone_repo, task_repo, project_repo=project_repo)
    scheduling_engine = SchedulingEngine(
        session,
        task_repo,
        dependency_repo,
        project_repo=project_repo,
        dependency_mode=dependency_mode,
    )
    baseline_service = BaselineService(session, project_repo, task_repo, baseline_repo)
    reporting_service = ReportingService(
        session,
        project_repo,
        task_repo,
        dependency_repo,
        milestone_repo,
        baseline_repo,
    )

    return ServiceGraph(
        session=session,
        project_service=project_service,
        task_service=task_service,
        milestone_service=milestone_service,
        scheduling_engine=scheduling_engine,
        baseline_service=baseline_service,
        reporting_service=reporting_service,
    )


__all__ = ["ServiceGraph", "build_service_graph"]
