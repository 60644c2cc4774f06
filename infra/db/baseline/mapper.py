from __future__ import annotations

from core.models import BaselineTaskSnapshot, ScheduleBaseline
from infra.db.models import ScheduleBaselineORM


def baseline_from_orm(obj: ScheduleBaselineORM) -> ScheduleBaseline:
    return ScheduleBaseline(
        id=obj.id,
        project_id=obj.project_id,
        name=obj.name,
        description=obj.description or "",
        baseline_type=obj.baseline_type,
        baseline_date=obj.baseline_date,
        start_date=obj.start_date,
        finish_date=obj.finish_date,
        is_active=bool(obj.is_active),
        created_at=obj.created_at,
        task_snapshot=tuple(BaselineTaskSnapshot.from_dict(row) for row in (obj.task_snapshot or [])),
    )


def baseline_to_orm(baseline: ScheduleBaseline) -> ScheduleBaselineORM:
    return ScheduleBaselineORM(
        id=baseline.id,
        project_id=baseline.project_id,
        name=baseline.name,
        description=baseline.description,
        baseline_type=baseline.baseline_type,
        baseline_date=baseline.baseline_date,
        start_date=baseline.start_date,
        finish_date=baseline.finish_date,
        is_active=baseline.is_active,
        created_at=baseline.created_at,
        task_snapshot=[row.to_dict() for row in baseline.task_snapshot],
    )


__all__ = ["baseline_from_orm", "baseline_to_orm"]
