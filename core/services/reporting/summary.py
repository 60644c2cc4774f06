from __future__ import annotations

from datetime import date, timedelta
from typing import Optional

from core.interfaces import MilestoneRepository, TaskRepository
from core.models import MilestoneStatus, TaskStatus
from core.services.reporting.models import ScheduleSummary


class ReportingSummaryMixin:
    _task_repo: TaskRepository
    _milestone_repo: MilestoneRepository

    def get_schedule_summary(self, project_id: str, as_of: Optional[date] = None) -> ScheduleSummary:
        self._require_project(project_id)
        today = as_of or date.today()
        tasks = self._task_repo.list_by_project(project_id)
        milestones = self._milestone_repo.list_by_project(project_id)

        by_status = {status.value: 0 for status in TaskStatus}
        for t in tasks:
            by_status[t.status.value] += 1

        starts = [t.planned_start_date for t in tasks if t.planned_start_date]
        ends = [t.planned_end_date for t in tasks if t.planned_end_date]
        budgeted = sum(float(t.budgeted_cost or 0.0) for t in tasks)
        actual = sum(float(t.actual_cost or 0.0) for t in tasks)
        upcoming_until = today + timedelta(days=7)

        return ScheduleSummary(
            project_id=project_id,
            as_of=today,
            total_tasks=len(tasks),
            tasks_by_status=by_status,
            critical_tasks=sum(1 for t in tasks if t.is_critical),
            avg_completion=(
                sum(int(t.percent_complete or 0) for t in tasks) / len(tasks) if tasks else 0.0
            ),
            project_start=min(starts) if starts else None,
            project_end=max(ends) if ends else None,
            total_milestones=len(milestones),
            achieved_milestones=sum(1 for m in milestones if m.status == MilestoneStatus.ACHIEVED),
            missed_milestones=sum(1 for m in milestones if m.status == MilestoneStatus.MISSED),
            at_risk_milestones=sum(1 for m in milestones if m.status == MilestoneStatus.AT_RISK),
            total_budgeted=budgeted,
            total_actual=actual,
            budget_variance=actual - budgeted,
            upcoming_tasks=sum(
                1
                for t in tasks
                if t.planned_start_date
                and today <= t.planned_start_date <= upcoming_until
                and t.status == TaskStatus.NOT_STARTED
            ),
            overdue_tasks=sum(
                1
                for t in tasks
                if t.planned_end_date and t.planned_end_date < today and t.status != TaskStatus.COMPLETED
            ),
        )


__all__ = ["ReportingSummaryMixin"]
