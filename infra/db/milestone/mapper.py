from __future__ import annotations

from core.models import Milestone
from infra.db.models import MilestoneORM


def milestone_to_orm(milestone: Milestone) -> MilestoneORM:
    return MilestoneORM(
        id=milestone.id,
        project_id=milestone.project_id,
        name=milestone.name,
        description=milestone.description,
        milestone_type=milestone.milestone_type,
        target_date=milestone.target_date,
        forecast_date=milestone.forecast_date,
        actual_date=milestone.actual_date,
        status=milestone.status,
        is_critical=milestone.is_critical,
        related_task_id=milestone.related_task_id,
    )


def milestone_from_orm(obj: MilestoneORM) -> Milestone:
    return Milestone(
        id=obj.id,
        project_id=obj.project_id,
        name=obj.name,
        description=obj.description or "",
        milestone_type=obj.milestone_type,
        target_date=obj.target_date,
        forecast_date=obj.forecast_date,
        actual_date=obj.actual_date,
        status=obj.status,
        is_critical=bool(obj.is_critical),
        related_task_id=obj.related_task_id,
    )


__all__ = ["milestone_to_orm", "milestone_from_orm"]
