from __future__ import annotations

import heapq
from dataclasses import dataclass, field
from typing import Dict, List

from core.exceptions import CircularDependencyError, ValidationError
from core.models import ScheduleTask, TaskDependency, TaskPriority


_PRIORITY_RANK = {
    TaskPriority.CRITICAL: 0,
    TaskPriority.HIGH: 1,
    TaskPriority.NORMAL: 2,
    TaskPriority.LOW: 3,
}


@dataclass
class DependencyGraph:
    topo_order: List[str]
    deps_by_successor: Dict[str, List[TaskDependency]] = field(default_factory=dict)
    deps_by_predecessor: Dict[str, List[TaskDependency]] = field(default_factory=dict)

    def predecessors(self, task_id: str) -> List[TaskDependency]:
        return self.deps_by_successor.get(task_id, [])

    def successors(self, task_id: str) -> List[TaskDependency]:
        return self.deps_by_predecessor.get(task_id, [])


def _priority_value(task: ScheduleTask) -> int:
    try:
        return _PRIORITY_RANK[TaskPriority(task.priority)]
    except ValueError:
        return _PRIORITY_RANK[TaskPriority.NORMAL]


def _heap_key(task: ScheduleTask) -> tuple[int, str, str]:
    return (_priority_value(task), task.name or "", task.id)


def validate_schedule_inputs(
    tasks_by_id: Dict[str, ScheduleTask],
    deps: List[TaskDependency],
) -> List[TaskDependency]:
    """
    Reject inputs the passes cannot compute and return the in-project links.
    Links whose endpoints are not both in the project are dropped.
    """
    filtered: List[TaskDependency] = []
    for dep in deps:
        if dep.predecessor_task_id == dep.successor_task_id:
            raise ValidationError(
                f"Task {dep.predecessor_task_id} cannot depend on itself.",
                code="DEPENDENCY_SELF",
            )
        if dep.predecessor_task_id in tasks_by_id and dep.successor_task_id in tasks_by_id:
            filtered.append(dep)

    has_predecessor = {dep.successor_task_id for dep in filtered}
    for task_id, task in tasks_by_id.items():
        if task.duration_days is None or int(task.duration_days) < 0:
            raise ValidationError(
                f"Task '{task.name}' has an invalid duration ({task.duration_days}).",
                code="TASK_DURATION_INVALID",
            )
        if task_id not in has_predecessor and task.planned_start_date is None:
            raise ValidationError(
                f"Task '{task.name}' has no predecessors and no planned start date.",
                code="TASK_START_MISSING",
            )
    return filtered


def build_dependency_graph(
    tasks_by_id: Dict[str, ScheduleTask],
    deps: List[TaskDependency],
) -> DependencyGraph:
    graph_succ: Dict[str, List[TaskDependency]] = {}
    indegree: Dict[str, int] = {task_id: 0 for task_id in tasks_by_id}

    for dep in deps:
        graph_succ.setdefault(dep.predecessor_task_id, []).append(dep)
        indegree[dep.successor_task_id] += 1

    heap: list[tuple[tuple[int, str, str], str]] = []
    for task_id, degree in indegree.items():
        if degree == 0:
            heapq.heappush(heap, (_heap_key(tasks_by_id[task_id]), task_id))

    topo_order: list[str] = []
    while heap:
        _key, task_id = heapq.heappop(heap)
        topo_order.append(task_id)
        for dep in graph_succ.get(task_id, []):
            succ_id = dep.successor_task_id
            indegree[succ_id] -= 1
            if indegree[succ_id] == 0:
                heapq.heappush(heap, (_heap_key(tasks_by_id[succ_id]), succ_id))

    if len(topo_order) != len(tasks_by_id):
        ordered = set(topo_order)
        blocked = sorted(task_id for task_id in tasks_by_id if task_id not in ordered)
        blocked_set = set(blocked)
        edges = sorted(
            (d.predecessor_task_id, d.successor_task_id)
            for d in deps
            if d.predecessor_task_id in blocked_set and d.successor_task_id in blocked_set
        )
        names = ", ".join(tasks_by_id[task_id].name for task_id in blocked)
        raise CircularDependencyError(
            f"Cannot schedule project: circular dependency detected among tasks: {names}.",
            task_ids=blocked,
            edges=edges,
        )

    deps_by_successor: Dict[str, List[TaskDependency]] = {}
    deps_by_predecessor: Dict[str, List[TaskDependency]] = {}
    for dep in deps:
        deps_by_successor.setdefault(dep.successor_task_id, []).append(dep)
        deps_by_predecessor.setdefault(dep.predecessor_task_id, []).append(dep)

    return DependencyGraph(
        topo_order=topo_order,
        deps_by_successor=deps_by_successor,
        deps_by_predecessor=deps_by_predecessor,
    )


__all__ = ["DependencyGraph", "build_dependency_graph", "validate_schedule_inputs"]
