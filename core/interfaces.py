# core/interfaces.py
from __future__ import annotations

from abc import ABC, abstractmethod
from typing import List, Optional

from core.models import Milestone, Project, ScheduleBaseline, ScheduleTask, TaskDependency


class ProjectRepository(ABC):
    @abstractmethod
    def add(self, project: Project) -> None: ...

    @abstractmethod
    def get(self, project_id: str) -> Optional[Project]: ...

    @abstractmethod
    def delete(self, project_id: str) -> None: ...

    @abstractmethod
    def list_all(self) -> List[Project]: ...


class TaskRepository(ABC):
    @abstractmethod
    def add(self, task: ScheduleTask) -> None: ...

    @abstractmethod
    def update(self, task: ScheduleTask) -> None: ...

    @abstractmethod
    def delete(self, task_id: str) -> None: ...

    @abstractmethod
    def get(self, task_id: str) -> Optional[ScheduleTask]: ...

    @abstractmethod
    def list_by_project(self, project_id: str) -> List[ScheduleTask]: ...

    @abstractmethod
    def list_children(self, parent_task_id: str) -> List[ScheduleTask]: ...

    @abstractmethod
    def update_schedule_fields(self, tasks: List[ScheduleTask]) -> None:
        """Write only the CPM-computed columns of the given tasks."""


class DependencyRepository(ABC):
    @abstractmethod
    def add(self, dependency: TaskDependency) -> None: ...

    @abstractmethod
    def get(self, dependency_id: str) -> Optional[TaskDependency]: ...

    @abstractmethod
    def list_by_project(self, project_id: str) -> List[TaskDependency]: ...

    @abstractmethod
    def list_predecessors(self, task_id: str) -> List[TaskDependency]: ...

    @abstractmethod
    def list_successors(self, task_id: str) -> List[TaskDependency]: ...

    @abstractmethod
    def delete(self, dependency_id: str) -> None: ...

    @abstractmethod
    def delete_for_task(self, task_id: str) -> None: ...


class MilestoneRepository(ABC):
    @abstractmethod
    def add(self, milestone: Milestone) -> None: ...

    @abstractmethod
    def update(self, milestone: Milestone) -> None: ...

    @abstractmethod
    def get(self, milestone_id: str) -> Optional[Milestone]: ...

    @abstractmethod
    def delete(self, milestone_id: str) -> None: ...

    @abstractmethod
    def list_by_project(self, project_id: str) -> List[Milestone]: ...

    @abstractmethod
    def clear_related_task(self, task_id: str) -> None: ...


class BaselineRepository(ABC):
    @abstractmethod
    def add(self, baseline: ScheduleBaseline) -> None: ...

    @abstractmethod
    def get(self, baseline_id: str) -> Optional[ScheduleBaseline]: ...

    @abstractmethod
    def list_for_project(self, project_id: str) -> List[ScheduleBaseline]: ...

    @abstractmethod
    def get_active_for_project(self, project_id: str) -> Optional[ScheduleBaseline]: ...

    @abstractmethod
    def deactivate_all(self, project_id: str) -> None: ...

    @abstractmethod
    def set_active(self, baseline_id: str, is_active: bool) -> None: ...

    @abstractmethod
    def delete(self, baseline_id: str) -> None: ...


__all__ = [
    "ProjectRepository",
    "TaskRepository",
    "DependencyRepository",
    "MilestoneRepository",
    "BaselineRepository",
]
