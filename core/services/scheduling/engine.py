# core/services/scheduling/engine.py
from __future__ import annotations

import logging
from typing import Dict, List, Optional

from sqlalchemy.orm import Session

from core.events.domain_events import domain_events
from core.exceptions import NotFoundError, PersistenceError
from core.interfaces import DependencyRepository, ProjectRepository, TaskRepository
from core.models import ScheduleTask, TaskDependency
from core.services.scheduling.date_compute import DependencyMode, resolve_dependency_mode
from core.services.scheduling.graph import build_dependency_graph, validate_schedule_inputs
from core.services.scheduling.models import CriticalPathResult
from core.services.scheduling.passes import run_backward_pass, run_forward_pass
from core.services.scheduling.results import build_schedule_result


logger = logging.getLogger(__name__)


def analyze_schedule(
    project_id: str,
    tasks: List[ScheduleTask],
    dependencies: List[TaskDependency],
    mode: DependencyMode = DependencyMode.UNIFORM,
) -> CriticalPathResult:
    """
    Pure CPM computation over already-loaded tasks and links.
    Computed fields are written onto the given task objects.
    """
    if not tasks:
        return CriticalPathResult(project_id=project_id)

    tasks_by_id: Dict[str, ScheduleTask] = {t.id: t for t in tasks}
    deps = validate_schedule_inputs(tasks_by_id, dependencies)
    graph = build_dependency_graph(tasks_by_id, deps)

    es, ef, project_end = run_forward_pass(tasks_by_id, graph, mode)
    if project_end is None:
        ls: Dict = {task_id: None for task_id in tasks_by_id}
        lf: Dict = dict(ls)
    else:
        ls, lf = run_backward_pass(tasks_by_id, graph, project_end, mode)

    return build_schedule_result(project_id, tasks_by_id, es, ef, ls, lf, project_end)


class SchedulingEngine:
    """
    CPM engine for one project:
    - Forward pass: ES/EF from planned starts and predecessor links
    - Backward pass: LS/LF from the project end
    - Total float and criticality per task
    - Computed fields written back in a single transaction
    """

    def __init__(
        self,
        session: Session,
        task_repo: TaskRepository,
        dependency_repo: DependencyRepository,
        project_repo: Optional[ProjectRepository] = None,
        dependency_mode: DependencyMode | str | None = None,
    ):
        self._session: Session = session
        self._task_repo: TaskRepository = task_repo
        self._dependency_repo: DependencyRepository = dependency_repo
        self._project_repo: Optional[ProjectRepository] = project_repo
        self._mode: DependencyMode = resolve_dependency_mode(dependency_mode)

    @property
    def dependency_mode(self) -> DependencyMode:
        return self._mode

    def compute_critical_path(self, project_id: str) -> CriticalPathResult:
        if self._project_repo is not None and self._project_repo.get(project_id) is None:
            raise NotFoundError("Project not found.", code="PROJECT_NOT_FOUND")

        tasks = self._task_repo.list_by_project(project_id)
        if not tasks:
            logger.info("Critical path requested for project %s with no tasks", project_id)
            return CriticalPathResult(project_id=project_id)

        deps = self._dependency_repo.list_by_project(project_id)
        result = analyze_schedule(project_id, tasks, deps, self._mode)

        try:
            self._task_repo.update_schedule_fields([info.task for info in result.tasks.values()])
            self._session.commit()
        except Exception as exc:
            self._session.rollback()
            logger.error("Saving computed schedule for project %s failed: %s", project_id, exc)
            raise PersistenceError(
                "Could not save the computed schedule; no task was updated.",
                code="SCHEDULE_PERSIST_FAILED",
            ) from exc

        logger.info(
            "Critical path for project %s: %d tasks, %d critical, %d days (%s mode)",
            project_id,
            result.total_task_count,
            result.critical_task_count,
            result.project_duration,
            self._mode.value,
        )
        domain_events.schedule_recalculated.emit(project_id)
        return result


__all__ = ["SchedulingEngine", "analyze_schedule"]
