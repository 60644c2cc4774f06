from __future__ import annotations

from datetime import date
from typing import Dict, Optional

from core.models import ScheduleTask
from core.services.scheduling.models import CPMTaskInfo, CriticalPathResult, CriticalTaskRow


def build_schedule_result(
    project_id: str,
    tasks_by_id: Dict[str, ScheduleTask],
    es: Dict[str, Optional[date]],
    ef: Dict[str, Optional[date]],
    ls: Dict[str, Optional[date]],
    lf: Dict[str, Optional[date]],
    project_end: Optional[date],
) -> CriticalPathResult:
    infos: Dict[str, CPMTaskInfo] = {}

    for task_id, task in tasks_by_id.items():
        est = es[task_id]
        eft = ef[task_id]
        lst = ls[task_id]
        lft = lf[task_id]

        total_float = (lst - est).days if (est is not None and lst is not None) else None
        is_critical = total_float == 0

        task.early_start = est
        task.early_finish = eft
        task.late_start = lst
        task.late_finish = lft
        task.total_float_days = total_float
        task.is_critical = is_critical

        infos[task_id] = CPMTaskInfo(
            task=task,
            early_start=est,
            early_finish=eft,
            late_start=lst,
            late_finish=lft,
            total_float_days=total_float,
            is_critical=is_critical,
        )

    critical_rows = [
        CriticalTaskRow(
            id=info.task.id,
            name=info.task.name,
            task_code=info.task.task_code,
            duration_days=int(info.task.duration_days or 0),
            early_start=info.early_start,
            early_finish=info.early_finish,
            total_float=int(info.total_float_days or 0),
        )
        for info in infos.values()
        if info.is_critical
    ]
    critical_rows.sort(key=lambda row: (row.early_start or date.max, row.name, row.id))

    starts = [t.planned_start_date for t in tasks_by_id.values() if t.planned_start_date]
    project_start = min(starts) if starts else None
    duration = (project_end - project_start).days if (project_start and project_end) else 0

    return CriticalPathResult(
        project_id=project_id,
        tasks=infos,
        critical_path=critical_rows,
        project_start=project_start,
        project_end=project_end,
        project_duration=duration,
    )


__all__ = ["build_schedule_result"]
