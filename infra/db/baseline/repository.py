from __future__ import annotations

from typing import List, Optional

from sqlalchemy import select, update
from sqlalchemy.orm import Session

from core.interfaces import BaselineRepository
from core.models import ScheduleBaseline
from infra.db.baseline.mapper import baseline_from_orm, baseline_to_orm
from infra.db.models import ScheduleBaselineORM


class SqlAlchemyBaselineRepository(BaselineRepository):
    def __init__(self, session: Session):
        self.session = session

    def add(self, baseline: ScheduleBaseline) -> None:
        self.session.add(baseline_to_orm(baseline))

    def get(self, baseline_id: str) -> Optional[ScheduleBaseline]:
        row = self.session.get(ScheduleBaselineORM, baseline_id)
        return baseline_from_orm(row) if row else None

    def list_for_project(self, project_id: str) -> List[ScheduleBaseline]:
        stmt = (
            select(ScheduleBaselineORM)
            .where(ScheduleBaselineORM.project_id == project_id)
            .order_by(ScheduleBaselineORM.created_at.desc())
        )
        rows = self.session.execute(stmt).scalars().all()
        return [baseline_from_orm(row) for row in rows]

    def get_active_for_project(self, project_id: str) -> Optional[ScheduleBaseline]:
        stmt = (
            select(ScheduleBaselineORM)
            .where(
                ScheduleBaselineORM.project_id == project_id,
                ScheduleBaselineORM.is_active.is_(True),
            )
            .order_by(ScheduleBaselineORM.created_at.desc())
        )
        row = self.session.execute(stmt).scalars().first()
        return baseline_from_orm(row) if row else None

    def deactivate_all(self, project_id: str) -> None:
        stmt = (
            update(ScheduleBaselineORM)
            .where(ScheduleBaselineORM.project_id == project_id)
            .values(is_active=False)
            .execution_options(synchronize_session=False)
        )
        self.session.execute(stmt)

    def set_active(self, baseline_id: str, is_active: bool) -> None:
        stmt = (
            update(ScheduleBaselineORM)
            .where(ScheduleBaselineORM.id == baseline_id)
            .values(is_active=is_active)
            .execution_options(synchronize_session=False)
        )
        self.session.execute(stmt)

    def delete(self, baseline_id: str) -> None:
        row = self.session.get(ScheduleBaselineORM, baseline_id)
        if row:
            self.session.delete(row)


__all__ = ["SqlAlchemyBaselineRepository"]
