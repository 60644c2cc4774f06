from datetime import date

import pytest

from core.exceptions import CircularDependencyError, ValidationError
from core.models import DependencyType, ScheduleTask, TaskDependency, TaskPriority
from core.services.scheduling import DependencyMode, analyze_schedule
from core.services.scheduling.date_compute import resolve_dependency_mode
from core.services.scheduling.graph import build_dependency_graph


def _task(name, duration, start=None, **extra):
    return ScheduleTask.create("p-1", name, planned_start_date=start, duration_days=duration, **extra)


def _link(pred, succ, dep_type=DependencyType.FINISH_TO_START, lag=0):
    return TaskDependency.create(pred.id, succ.id, dep_type, lag)


def test_analyze_writes_computed_fields_onto_tasks():
    a = _task("A", 3, date(2025, 2, 1))
    b = _task("B", 3)
    result = analyze_schedule("p-1", [a, b], [_link(a, b)])

    assert b.early_start == date(2025, 2, 4)
    assert b.early_finish == date(2025, 2, 7)
    assert b.is_critical is True
    assert result.tasks[b.id].task is b


def test_self_dependency_is_invalid_input():
    a = _task("A", 1, date(2025, 2, 1))
    loop = TaskDependency.create(a.id, a.id)

    with pytest.raises(ValidationError) as exc:
        analyze_schedule("p-1", [a], [loop])
    assert exc.value.code == "DEPENDENCY_SELF"


def test_negative_duration_is_invalid_input():
    a = _task("A", -2, date(2025, 2, 1))

    with pytest.raises(ValidationError) as exc:
        analyze_schedule("p-1", [a], [])
    assert exc.value.code == "TASK_DURATION_INVALID"


def test_links_leaving_the_project_are_ignored():
    a = _task("A", 2, date(2025, 2, 1))
    outsider = ScheduleTask.create("p-2", "Elsewhere", duration_days=5)

    result = analyze_schedule("p-1", [a], [_link(outsider, a)])

    assert result.tasks[a.id].early_start == date(2025, 2, 1)
    assert result.project_end == date(2025, 2, 3)


def test_topological_order_prefers_priority_then_name():
    low = _task("Alpha", 1, date(2025, 2, 1), priority=TaskPriority.LOW)
    crit = _task("Zulu", 1, date(2025, 2, 1), priority=TaskPriority.CRITICAL)
    normal = _task("Bravo", 1, date(2025, 2, 1))
    tasks = {t.id: t for t in (low, crit, normal)}

    graph = build_dependency_graph(tasks, [])

    assert graph.topo_order == [crit.id, normal.id, low.id]


def test_cycle_lists_only_blocked_tasks():
    a = _task("A", 1, date(2025, 2, 1))
    b = _task("B", 1)
    c = _task("C", 1)
    tasks = {t.id: t for t in (a, b, c)}
    deps = [_link(a, b), _link(b, c), _link(c, b)]

    with pytest.raises(CircularDependencyError) as exc:
        build_dependency_graph(tasks, deps)

    assert exc.value.task_ids == sorted([b.id, c.id])
    assert a.id not in exc.value.task_ids
    assert (a.id, b.id) not in exc.value.edges


def test_uniform_mode_treats_every_link_as_finish_to_start():
    a = _task("A", 4, date(2025, 3, 3))
    b = _task("B", 2)
    c = _task("C", 2)
    deps = [
        _link(a, b, DependencyType.START_TO_START, lag=1),
        _link(a, c, DependencyType.FINISH_TO_FINISH),
    ]

    result = analyze_schedule("p-1", [a, b, c], deps, DependencyMode.UNIFORM)

    assert result.tasks[b.id].early_start == date(2025, 3, 8)
    assert result.tasks[c.id].early_start == date(2025, 3, 7)
    assert result.project_end == date(2025, 3, 10)
    assert result.tasks[c.id].total_float_days == 1
    assert result.tasks[a.id].is_critical is True


def test_typed_mode_applies_start_and_finish_anchors():
    a = _task("A", 4, date(2025, 3, 3))
    b = _task("B", 2)
    c = _task("C", 2)
    deps = [
        _link(a, b, DependencyType.START_TO_START, lag=1),
        _link(a, c, DependencyType.FINISH_TO_FINISH),
    ]

    result = analyze_schedule("p-1", [a, b, c], deps, DependencyMode.TYPED)

    # SS: B starts a day after A starts
    assert result.tasks[b.id].early_start == date(2025, 3, 4)
    # FF: C finishes with A
    assert result.tasks[c.id].early_finish == date(2025, 3, 7)
    assert result.project_end == date(2025, 3, 7)
    assert result.tasks[b.id].total_float_days == 1
    assert result.tasks[a.id].late_finish == date(2025, 3, 7)
    assert result.tasks[a.id].total_float_days == 0
    assert result.tasks[c.id].is_critical is True


def test_typed_mode_start_to_finish():
    a = _task("A", 2, date(2025, 3, 3))
    b = _task("B", 3)

    result = analyze_schedule(
        "p-1", [a, b], [_link(a, b, DependencyType.START_TO_FINISH, lag=4)], DependencyMode.TYPED
    )

    # EF_b >= ES_a + 4
    assert result.tasks[b.id].early_finish == date(2025, 3, 7)
    assert result.tasks[b.id].early_start == date(2025, 3, 4)


def test_dependency_mode_from_environment(monkeypatch):
    monkeypatch.setenv("PM_CPM_DEPENDENCY_MODE", "typed")
    assert resolve_dependency_mode() is DependencyMode.TYPED

    monkeypatch.delenv("PM_CPM_DEPENDENCY_MODE")
    assert resolve_dependency_mode() is DependencyMode.UNIFORM
    assert resolve_dependency_mode("Uniform") is DependencyMode.UNIFORM


def test_unknown_dependency_mode_is_rejected(monkeypatch):
    monkeypatch.setenv("PM_CPM_DEPENDENCY_MODE", "fancy")

    with pytest.raises(ValidationError) as exc:
        resolve_dependency_mode()
    assert exc.value.code == "SCHEDULE_MODE_INVALID"


def test_engine_uses_typed_mode_from_service_graph(typed_services):
    ps = typed_services["project_service"]
    ts = typed_services["task_service"]
    sched = typed_services["scheduling_engine"]

    pid = ps.create_project("Typed Links").id
    a = ts.create_task(pid, "Pour slab", planned_start_date=date(2025, 3, 3), duration_days=4)
    b = ts.create_task(pid, "Strip forms", duration_days=2)
    ts.add_dependency(a.id, b.id, DependencyType.START_TO_START, lag_days=1)

    result = sched.compute_critical_path(pid)

    assert sched.dependency_mode is DependencyMode.TYPED
    assert result.tasks[b.id].early_start == date(2025, 3, 4)
