from __future__ import annotations

from core.interfaces import DependencyRepository, MilestoneRepository, TaskRepository
from core.services.reporting.models import (
    GanttData,
    GanttLink,
    GanttMilestoneMarker,
    GanttTaskBar,
)


class ReportingGanttMixin:
    _task_repo: TaskRepository
    _dependency_repo: DependencyRepository
    _milestone_repo: MilestoneRepository

    def get_gantt_data(self, project_id: str) -> GanttData:
        """
        Persisted state as-is; critical flags are whatever the last
        critical path run left behind.
        """
        self._require_project(project_id)
        tasks = self._task_repo.list_by_project(project_id)
        task_ids = {t.id for t in tasks}

        bars = [
            GanttTaskBar(
                task_id=t.id,
                task_code=t.task_code,
                name=t.name,
                parent_task_id=t.parent_task_id,
                start=t.planned_start_date,
                end=t.planned_end_date,
                duration_days=int(t.duration_days or 0),
                status=t.status.value,
                percent_complete=int(t.percent_complete or 0),
                is_critical=bool(t.is_critical),
                priority=t.priority.value,
                task_type=t.task_type.value,
                assigned_to=t.assigned_to,
            )
            for t in tasks
        ]

        links = [
            GanttLink(
                dependency_id=d.id,
                source=d.predecessor_task_id,
                target=d.successor_task_id,
                dependency_type=d.dependency_type.value,
                lag_days=int(d.lag_days or 0),
            )
            for d in self._dependency_repo.list_by_project(project_id)
            if d.predecessor_task_id in task_ids
        ]

        markers = [
            GanttMilestoneMarker(
                milestone_id=m.id,
                name=m.name,
                target_date=m.target_date,
                milestone_type=m.milestone_type.value,
                status=m.status.value,
                is_critical=bool(m.is_critical),
            )
            for m in self._milestone_repo.list_by_project(project_id)
        ]

        return GanttData(project_id=project_id, tasks=bars, dependencies=links, milestones=markers)


__all__ = ["ReportingGanttMixin"]
