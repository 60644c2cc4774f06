from __future__ import annotations

from datetime import date, timedelta
from typing import Dict, List, Optional

from core.models import ScheduleTask
from core.services.scheduling.date_compute import (
    DependencyMode,
    backward_finish_candidate,
    forward_start_candidate,
)
from core.services.scheduling.graph import DependencyGraph


def _duration(task: ScheduleTask) -> int:
    return int(task.duration_days or 0)


def run_forward_pass(
    tasks_by_id: Dict[str, ScheduleTask],
    graph: DependencyGraph,
    mode: DependencyMode,
) -> tuple[Dict[str, Optional[date]], Dict[str, Optional[date]], Optional[date]]:
    es: Dict[str, Optional[date]] = {task_id: None for task_id in tasks_by_id}
    ef: Dict[str, Optional[date]] = {task_id: None for task_id in tasks_by_id}

    for task_id in graph.topo_order:
        task = tasks_by_id[task_id]
        duration = _duration(task)
        incoming = graph.predecessors(task_id)

        if not incoming:
            est = task.planned_start_date
        else:
            candidates: List[date] = []
            for dep in incoming:
                cand = forward_start_candidate(
                    dep,
                    es[dep.predecessor_task_id],
                    ef[dep.predecessor_task_id],
                    duration,
                    mode,
                )
                if cand is not None:
                    candidates.append(cand)
            est = max(candidates) if candidates else None

        es[task_id] = est
        ef[task_id] = est + timedelta(days=duration) if est is not None else None

    finishes = [d for d in ef.values() if d is not None]
    return es, ef, (max(finishes) if finishes else None)


def run_backward_pass(
    tasks_by_id: Dict[str, ScheduleTask],
    graph: DependencyGraph,
    project_end: date,
    mode: DependencyMode,
) -> tuple[Dict[str, Optional[date]], Dict[str, Optional[date]]]:
    ls: Dict[str, Optional[date]] = {task_id: None for task_id in tasks_by_id}
    lf: Dict[str, Optional[date]] = {task_id: None for task_id in tasks_by_id}

    for task_id in reversed(graph.topo_order):
        duration = _duration(tasks_by_id[task_id])
        outgoing = graph.successors(task_id)

        if not outgoing:
            lft: Optional[date] = project_end
        else:
            candidates: List[date] = []
            for dep in outgoing:
                cand = backward_finish_candidate(
                    dep,
                    ls[dep.successor_task_id],
                    lf[dep.successor_task_id],
                    duration,
                    mode,
                )
                if cand is not None:
                    candidates.append(cand)
            lft = min(candidates) if candidates else None
            # start-anchored links can push a finish past the project end
            if lft is not None and mode == DependencyMode.TYPED and lft > project_end:
                lft = project_end

        lf[task_id] = lft
        ls[task_id] = lft - timedelta(days=duration) if lft is not None else None

    return ls, lf


__all__ = ["run_forward_pass", "run_backward_pass"]
