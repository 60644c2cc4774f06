from __future__ import annotations

from typing import List, Optional

from sqlalchemy import select, update
from sqlalchemy.orm import Session

from core.interfaces import MilestoneRepository
from core.models import Milestone
from infra.db.milestone.mapper import milestone_from_orm, milestone_to_orm
from infra.db.models import MilestoneORM


class SqlAlchemyMilestoneRepository(MilestoneRepository):
    def __init__(self, session: Session):
        self.session = session

    def add(self, milestone: Milestone) -> None:
        self.session.add(milestone_to_orm(milestone))

    def update(self, milestone: Milestone) -> None:
        self.session.merge(milestone_to_orm(milestone))

    def get(self, milestone_id: str) -> Optional[Milestone]:
        obj = self.session.get(MilestoneORM, milestone_id)
        return milestone_from_orm(obj) if obj else None

    def delete(self, milestone_id: str) -> None:
        self.session.query(MilestoneORM).filter_by(id=milestone_id).delete()

    def list_by_project(self, project_id: str) -> List[Milestone]:
        stmt = (
            select(MilestoneORM)
            .where(MilestoneORM.project_id == project_id)
            .order_by(MilestoneORM.target_date, MilestoneORM.name)
        )
        rows = self.session.execute(stmt).scalars().all()
        return [milestone_from_orm(row) for row in rows]

    def clear_related_task(self, task_id: str) -> None:
        stmt = (
            update(MilestoneORM)
            .where(MilestoneORM.related_task_id == task_id)
            .values(related_task_id=None)
            .execution_options(synchronize_session=False)
        )
        self.session.execute(stmt)


__all__ = ["SqlAlchemyMilestoneRepository"]
