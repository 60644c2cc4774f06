from __future__ import annotations

from typing import List, Optional

from sqlalchemy import delete, or_, select, update
from sqlalchemy.orm import Session

from core.interfaces import DependencyRepository, TaskRepository
from core.models import ScheduleTask, TaskDependency
from infra.db.models import ScheduleTaskORM, TaskDependencyORM
from infra.db.task.mapper import (
    dependency_from_orm,
    dependency_to_orm,
    task_from_orm,
    task_to_orm,
)


class SqlAlchemyTaskRepository(TaskRepository):
    def __init__(self, session: Session):
        self.session = session

    def add(self, task: ScheduleTask) -> None:
        self.session.add(task_to_orm(task))

    def update(self, task: ScheduleTask) -> None:
        self.session.merge(task_to_orm(task))

    def delete(self, task_id: str) -> None:
        self.session.query(ScheduleTaskORM).filter_by(id=task_id).delete()

    def get(self, task_id: str) -> Optional[ScheduleTask]:
        obj = self.session.get(ScheduleTaskORM, task_id)
        return task_from_orm(obj) if obj else None

    def list_by_project(self, project_id: str) -> List[ScheduleTask]:
        stmt = (
            select(ScheduleTaskORM)
            .where(ScheduleTaskORM.project_id == project_id)
            .order_by(
                ScheduleTaskORM.planned_start_date.is_(None),
                ScheduleTaskORM.planned_start_date,
                ScheduleTaskORM.task_code,
                ScheduleTaskORM.name,
            )
        )
        rows = self.session.execute(stmt).scalars().all()
        return [task_from_orm(row) for row in rows]

    def list_children(self, parent_task_id: str) -> List[ScheduleTask]:
        stmt = (
            select(ScheduleTaskORM)
            .where(ScheduleTaskORM.parent_task_id == parent_task_id)
            .order_by(ScheduleTaskORM.planned_start_date, ScheduleTaskORM.task_code)
        )
        rows = self.session.execute(stmt).scalars().all()
        return [task_from_orm(row) for row in rows]

    def update_schedule_fields(self, tasks: List[ScheduleTask]) -> None:
        if not tasks:
            return
        self.session.execute(
            update(ScheduleTaskORM),
            [
                {
                    "id": task.id,
                    "early_start_date": task.early_start,
                    "early_finish_date": task.early_finish,
                    "late_start_date": task.late_start,
                    "late_finish_date": task.late_finish,
                    "total_float_days": task.total_float_days,
                    "is_critical": bool(task.is_critical),
                }
                for task in tasks
            ],
        )


class SqlAlchemyDependencyRepository(DependencyRepository):
    def __init__(self, session: Session):
        self.session = session

    def add(self, dependency: TaskDependency) -> None:
        self.session.add(dependency_to_orm(dependency))

    def get(self, dependency_id: str) -> Optional[TaskDependency]:
        obj = self.session.get(TaskDependencyORM, dependency_id)
        return dependency_from_orm(obj) if obj else None

    def list_by_project(self, project_id: str) -> List[TaskDependency]:
        # links whose successor is in the project; the engine drops cross-project ones
        stmt = (
            select(TaskDependencyORM)
            .join(ScheduleTaskORM, TaskDependencyORM.successor_task_id == ScheduleTaskORM.id)
            .where(ScheduleTaskORM.project_id == project_id)
        )
        rows = self.session.execute(stmt).scalars().all()
        return [dependency_from_orm(row) for row in rows]

    def list_predecessors(self, task_id: str) -> List[TaskDependency]:
        stmt = select(TaskDependencyORM).where(TaskDependencyORM.successor_task_id == task_id)
        rows = self.session.execute(stmt).scalars().all()
        return [dependency_from_orm(row) for row in rows]

    def list_successors(self, task_id: str) -> List[TaskDependency]:
        stmt = select(TaskDependencyORM).where(TaskDependencyORM.predecessor_task_id == task_id)
        rows = self.session.execute(stmt).scalars().all()
        return [dependency_from_orm(row) for row in rows]

    def delete(self, dependency_id: str) -> None:
        self.session.query(TaskDependencyORM).filter_by(id=dependency_id).delete()

    def delete_for_task(self, task_id: str) -> None:
        stmt = delete(TaskDependencyORM).where(
            or_(
                TaskDependencyORM.predecessor_task_id == task_id,
                TaskDependencyORM.successor_task_id == task_id,
            )
        )
        self.session.execute(stmt)


__all__ = ["SqlAlchemyTaskRepository", "SqlAlchemyDependencyRepository"]
