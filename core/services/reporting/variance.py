from __future__ import annotations

import logging
from typing import List

from core.exceptions import NotFoundError
from core.interfaces import BaselineRepository, TaskRepository
from core.models import BaselineSummary, VarianceStatus
from core.services.reporting.models import VarianceReport, VarianceRow, VarianceSummary

logger = logging.getLogger(__name__)


def _classify(variance_days: int) -> VarianceStatus:
    if variance_days > 0:
        return VarianceStatus.DELAYED
    if variance_days < 0:
        return VarianceStatus.AHEAD
    return VarianceStatus.ON_TRACK


def _sort_key(row: VarianceRow):
    # largest slip (either direction) first; rows without a variance last
    if row.variance_days is None:
        return (1, 0, row.task_name)
    return (0, -abs(row.variance_days), row.task_name)


class ReportingVarianceMixin:
    _task_repo: TaskRepository
    _baseline_repo: BaselineRepository

    def get_variance_report(self, project_id: str) -> VarianceReport:
        """
        Compare every current task's planned finish against the project's
        active baseline snapshot.
        """
        baseline = self._baseline_repo.get_active_for_project(project_id)
        if baseline is None:
            raise NotFoundError(
                "No active baseline found for this project.",
                code="ACTIVE_BASELINE_NOT_FOUND",
            )

        snapshot = baseline.snapshot_by_task_id()
        rows: List[VarianceRow] = []

        for task in self._task_repo.list_by_project(project_id):
            base = snapshot.get(task.id)
            if base is None:
                rows.append(
                    VarianceRow(
                        task_id=task.id,
                        task_name=task.name,
                        task_code=task.task_code,
                        current_start=task.planned_start_date,
                        current_end=task.planned_end_date,
                        status=VarianceStatus.NEW_TASK,
                        is_critical=bool(task.is_critical),
                    )
                )
                continue

            variance_days = None
            status = VarianceStatus.NOT_COMPARABLE
            if base.planned_end_date and task.planned_end_date:
                variance_days = (task.planned_end_date - base.planned_end_date).days
                status = _classify(variance_days)
            elif base.planned_end_date is None and task.planned_end_date is None:
                # undated then and now: nothing moved
                variance_days = 0
                status = VarianceStatus.ON_TRACK

            rows.append(
                VarianceRow(
                    task_id=task.id,
                    task_name=task.name,
                    task_code=task.task_code,
                    baseline_start=base.planned_start_date,
                    baseline_end=base.planned_end_date,
                    current_start=task.planned_start_date,
                    current_end=task.planned_end_date,
                    variance_days=variance_days,
                    status=status,
                    is_critical=bool(task.is_critical),
                )
            )

        comparable = [r.variance_days for r in rows if r.variance_days is not None]
        summary = VarianceSummary(
            total_tasks=len(rows),
            tasks_delayed=sum(1 for r in rows if r.status == VarianceStatus.DELAYED),
            tasks_ahead=sum(1 for r in rows if r.status == VarianceStatus.AHEAD),
            tasks_on_track=sum(1 for r in rows if r.status == VarianceStatus.ON_TRACK),
            new_tasks=sum(1 for r in rows if r.status == VarianceStatus.NEW_TASK),
            tasks_not_comparable=sum(1 for r in rows if r.status == VarianceStatus.NOT_COMPARABLE),
            avg_variance_days=(sum(comparable) / len(comparable)) if comparable else 0.0,
            critical_tasks_delayed=sum(
                1 for r in rows if r.is_critical and r.status == VarianceStatus.DELAYED
            ),
        )

        rows.sort(key=_sort_key)
        logger.debug(
            "Variance for project %s against baseline %s: %d delayed, %d ahead",
            project_id,
            baseline.id,
            summary.tasks_delayed,
            summary.tasks_ahead,
        )
        return VarianceReport(baseline=BaselineSummary.of(baseline), summary=summary, variances=rows)


__all__ = ["ReportingVarianceMixin"]
