from __future__ import annotations

from core.models import ScheduleTask, TaskDependency
from infra.db.models import ScheduleTaskORM, TaskDependencyORM


def task_to_orm(task: ScheduleTask) -> ScheduleTaskORM:
    return ScheduleTaskORM(
        id=task.id,
        project_id=task.project_id,
        parent_task_id=task.parent_task_id,
        task_code=task.task_code,
        name=task.name,
        description=task.description,
        planned_start_date=task.planned_start_date,
        planned_end_date=task.planned_end_date,
        duration_days=task.duration_days,
        status=task.status,
        priority=task.priority,
        task_type=task.task_type,
        constraint_type=task.constraint_type,
        constraint_date=task.constraint_date,
        actual_start_date=task.actual_start_date,
        actual_end_date=task.actual_end_date,
        percent_complete=task.percent_complete,
        budgeted_cost=task.budgeted_cost,
        actual_cost=task.actual_cost,
        assigned_to=task.assigned_to,
        early_start_date=task.early_start,
        early_finish_date=task.early_finish,
        late_start_date=task.late_start,
        late_finish_date=task.late_finish,
        total_float_days=task.total_float_days,
        is_critical=task.is_critical,
    )


def task_from_orm(obj: ScheduleTaskORM) -> ScheduleTask:
    return ScheduleTask(
        id=obj.id,
        project_id=obj.project_id,
        parent_task_id=obj.parent_task_id,
        task_code=obj.task_code,
        name=obj.name,
        description=obj.description or "",
        planned_start_date=obj.planned_start_date,
        planned_end_date=obj.planned_end_date,
        duration_days=obj.duration_days or 0,
        status=obj.status,
        priority=obj.priority,
        task_type=obj.task_type,
        constraint_type=obj.constraint_type,
        constraint_date=obj.constraint_date,
        actual_start_date=obj.actual_start_date,
        actual_end_date=obj.actual_end_date,
        percent_complete=obj.percent_complete or 0,
        budgeted_cost=obj.budgeted_cost,
        actual_cost=obj.actual_cost,
        assigned_to=obj.assigned_to,
        early_start=obj.early_start_date,
        early_finish=obj.early_finish_date,
        late_start=obj.late_start_date,
        late_finish=obj.late_finish_date,
        total_float_days=obj.total_float_days,
        is_critical=bool(obj.is_critical),
    )


def dependency_to_orm(dependency: TaskDependency) -> TaskDependencyORM:
    return TaskDependencyORM(
        id=dependency.id,
        predecessor_task_id=dependency.predecessor_task_id,
        successor_task_id=dependency.successor_task_id,
        dependency_type=dependency.dependency_type,
        lag_days=dependency.lag_days,
    )


def dependency_from_orm(obj: TaskDependencyORM) -> TaskDependency:
    return TaskDependency(
        id=obj.id,
        predecessor_task_id=obj.predecessor_task_id,
        successor_task_id=obj.successor_task_id,
        dependency_type=obj.dependency_type,
        lag_days=obj.lag_days or 0,
    )


__all__ = [
    "task_to_orm",
    "task_from_orm",
    "dependency_to_orm",
    "dependency_from_orm",
]
