from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from typing import Optional

from core.domain.enums import MilestoneStatus, MilestoneType
from core.domain.identifiers import generate_id


@dataclass
class Milestone:
    id: str
    project_id: str
    name: str
    target_date: date
    description: str = ""
    milestone_type: MilestoneType = MilestoneType.PROJECT
    forecast_date: Optional[date] = None
    actual_date: Optional[date] = None
    status: MilestoneStatus = MilestoneStatus.PENDING
    is_critical: bool = False
    related_task_id: Optional[str] = None

    @staticmethod
    def create(project_id: str, name: str, target_date: date, **extra) -> "Milestone":
        return Milestone(
            id=generate_id(),
            project_id=project_id,
            name=name,
            target_date=target_date,
            **extra,
        )


__all__ = ["Milestone"]
