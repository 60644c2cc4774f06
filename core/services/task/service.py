from __future__ import annotations

from sqlalchemy.orm import Session

from core.interfaces import (
    DependencyRepository,
    MilestoneRepository,
    ProjectRepository,
    TaskRepository,
)
from core.services.task.dependency import TaskDependencyMixin
from core.services.task.lifecycle import TaskLifecycleMixin
from core.services.task.query import TaskQueryMixin
from core.services.task.validation import TaskValidationMixin


class TaskService(
    TaskLifecycleMixin,
    TaskDependencyMixin,
    TaskQueryMixin,
    TaskValidationMixin,
):
    def __init__(
        self,
        session: Session,
        task_repo: TaskRepository,
        dependency_repo: DependencyRepository,
        project_repo: ProjectRepository | None = None,
        milestone_repo: MilestoneRepository | None = None,
    ):
        self._session: Session = session
        self._task_repo: TaskRepository = task_repo
        self._dependency_repo: DependencyRepository = dependency_repo
        self._project_repo: ProjectRepository | None = project_repo
        self._milestone_repo: MilestoneRepository | None = milestone_repo


__all__ = ["TaskService"]
