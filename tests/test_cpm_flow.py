from datetime import date

import pytest

from core.events.domain_events import domain_events
from core.exceptions import CircularDependencyError, NotFoundError, PersistenceError, ValidationError
from core.models import DependencyType, TaskDependency
from infra.db.repositories import SqlAlchemyDependencyRepository, SqlAlchemyTaskRepository


def _chain_project(services):
    ps = services["project_service"]
    ts = services["task_service"]

    project = ps.create_project("CPM Chain", "Serial chain")
    pid = project.id
    a = ts.create_task(pid, "Task A", planned_start_date=date(2025, 2, 1), duration_days=3)
    b = ts.create_task(pid, "Task B", duration_days=3)
    c = ts.create_task(pid, "Task C", duration_days=2)
    ts.add_dependency(a.id, b.id, DependencyType.FINISH_TO_START, lag_days=0)
    ts.add_dependency(b.id, c.id, DependencyType.FINISH_TO_START, lag_days=0)
    return pid, a, b, c


def test_serial_chain_is_entirely_critical(services):
    sched = services["scheduling_engine"]
    pid, a, b, c = _chain_project(services)

    result = sched.compute_critical_path(pid)

    infoA, infoB, infoC = result.tasks[a.id], result.tasks[b.id], result.tasks[c.id]
    assert (infoA.early_start, infoA.early_finish) == (date(2025, 2, 1), date(2025, 2, 4))
    assert (infoB.early_start, infoB.early_finish) == (date(2025, 2, 4), date(2025, 2, 7))
    assert (infoC.early_start, infoC.early_finish) == (date(2025, 2, 7), date(2025, 2, 9))

    assert (infoC.late_start, infoC.late_finish) == (date(2025, 2, 7), date(2025, 2, 9))
    assert (infoB.late_start, infoB.late_finish) == (date(2025, 2, 4), date(2025, 2, 7))
    assert (infoA.late_start, infoA.late_finish) == (date(2025, 2, 1), date(2025, 2, 4))

    assert all(info.total_float_days == 0 and info.is_critical for info in result.tasks.values())
    assert [row.name for row in result.critical_path] == ["Task A", "Task B", "Task C"]
    assert result.project_start == date(2025, 2, 1)
    assert result.project_end == date(2025, 2, 9)
    assert result.project_duration == 8
    assert result.critical_task_count == 3
    assert result.total_task_count == 3


def test_parallel_branch_gets_float_and_is_not_critical(services):
    ts = services["task_service"]
    sched = services["scheduling_engine"]
    pid, a, b, c = _chain_project(services)
    d = ts.create_task(pid, "Task D", planned_start_date=date(2025, 2, 1), duration_days=1)

    result = sched.compute_critical_path(pid)

    infoD = result.tasks[d.id]
    assert infoD.late_finish == result.project_end == date(2025, 2, 9)
    assert infoD.late_start == date(2025, 2, 8)
    assert infoD.total_float_days == 7
    assert infoD.is_critical is False
    assert {row.id for row in result.critical_path} == {a.id, b.id, c.id}


def test_computed_fields_are_persisted(services):
    ts = services["task_service"]
    sched = services["scheduling_engine"]
    pid, a, b, c = _chain_project(services)

    sched.compute_critical_path(pid)

    stored = ts.get_task(b.id)
    assert stored.early_start == date(2025, 2, 4)
    assert stored.early_finish == date(2025, 2, 7)
    assert stored.late_start == date(2025, 2, 4)
    assert stored.late_finish == date(2025, 2, 7)
    assert stored.total_float_days == 0
    assert stored.is_critical is True


def test_recomputing_unchanged_schedule_is_idempotent(services):
    ts = services["task_service"]
    sched = services["scheduling_engine"]
    pid, *_ = _chain_project(services)
    ts.create_task(pid, "Side job", planned_start_date=date(2025, 2, 3), duration_days=2)

    def _snapshot():
        return {
            t.id: (t.early_start, t.early_finish, t.late_start, t.late_finish, t.total_float_days, t.is_critical)
            for t in ts.list_tasks_for_project(pid)
        }

    first = sched.compute_critical_path(pid)
    stored_first = _snapshot()
    second = sched.compute_critical_path(pid)

    assert _snapshot() == stored_first
    assert first.to_dict() == second.to_dict()


def test_empty_project_returns_empty_result(services):
    ps = services["project_service"]
    sched = services["scheduling_engine"]
    project = ps.create_project("Empty Site")

    result = sched.compute_critical_path(project.id)

    assert result.critical_path == []
    assert result.project_duration == 0
    assert result.project_start is None
    assert result.project_end is None
    assert result.to_dict()["total_task_count"] == 0


def test_unknown_project_is_not_found(services):
    with pytest.raises(NotFoundError) as exc:
        services["scheduling_engine"].compute_critical_path("no-such-project")
    assert exc.value.code == "PROJECT_NOT_FOUND"


def test_lag_and_lead_shift_successor_start(services):
    ps = services["project_service"]
    ts = services["task_service"]
    sched = services["scheduling_engine"]

    pid = ps.create_project("Lag Lead").id
    a = ts.create_task(pid, "Excavate", planned_start_date=date(2025, 2, 1), duration_days=3)
    cure = ts.create_task(pid, "Cure", duration_days=1)
    overlap = ts.create_task(pid, "Formwork", duration_days=2)
    ts.add_dependency(a.id, cure.id, DependencyType.FINISH_TO_START, lag_days=2)
    ts.add_dependency(a.id, overlap.id, DependencyType.FINISH_TO_START, lag_days=-1)

    result = sched.compute_critical_path(pid)

    assert result.tasks[cure.id].early_start == date(2025, 2, 6)
    assert result.tasks[overlap.id].early_start == date(2025, 2, 3)
    assert result.tasks[overlap.id].early_finish == date(2025, 2, 5)
    assert result.project_end == date(2025, 2, 7)


def test_diamond_network_picks_longest_branch(services):
    ps = services["project_service"]
    ts = services["task_service"]
    sched = services["scheduling_engine"]

    pid = ps.create_project("Diamond").id
    a = ts.create_task(pid, "Site prep", planned_start_date=date(2025, 4, 1), duration_days=2)
    b = ts.create_task(pid, "Foundations", duration_days=3)
    c = ts.create_task(pid, "Utilities", duration_days=1)
    d = ts.create_task(pid, "Inspection", duration_days=1)
    ts.add_dependency(a.id, b.id)
    ts.add_dependency(a.id, c.id)
    ts.add_dependency(b.id, d.id)
    ts.add_dependency(c.id, d.id)

    result = sched.compute_critical_path(pid)

    assert result.tasks[d.id].early_start == date(2025, 4, 6)
    assert result.tasks[c.id].total_float_days == 2
    assert result.tasks[c.id].late_start == date(2025, 4, 5)
    assert [row.id for row in result.critical_path] == [a.id, b.id, d.id]
    assert result.project_duration == 6


def test_root_task_without_start_is_rejected_before_computation(services):
    ps = services["project_service"]
    ts = services["task_service"]
    sched = services["scheduling_engine"]

    pid = ps.create_project("Missing Start").id
    ts.create_task(pid, "Dated", planned_start_date=date(2025, 2, 1), duration_days=1)
    floating = ts.create_task(pid, "Undated", duration_days=2)

    with pytest.raises(ValidationError) as exc:
        sched.compute_critical_path(pid)

    assert exc.value.code == "TASK_START_MISSING"
    assert ts.get_task(floating.id).early_start is None


def test_cycle_in_storage_is_reported_and_nothing_is_written(services):
    ps = services["project_service"]
    ts = services["task_service"]
    sched = services["scheduling_engine"]
    session = services["session"]

    pid = ps.create_project("Cyclic").id
    root = ts.create_task(pid, "Mobilise", planned_start_date=date(2025, 2, 1), duration_days=1)
    x = ts.create_task(pid, "Frame", duration_days=2)
    y = ts.create_task(pid, "Clad", duration_days=2)
    ts.add_dependency(root.id, x.id)
    ts.add_dependency(x.id, y.id)
    # written around the service, which refuses cycles
    SqlAlchemyDependencyRepository(session).add(TaskDependency.create(y.id, x.id))
    session.commit()

    with pytest.raises(CircularDependencyError) as exc:
        sched.compute_critical_path(pid)

    assert exc.value.code == "SCHEDULE_CYCLE"
    assert exc.value.task_ids == sorted([x.id, y.id])
    assert sorted(exc.value.edges) == sorted([(x.id, y.id), (y.id, x.id)])
    assert "Frame" in str(exc.value) and "Clad" in str(exc.value)
    assert all(t.early_start is None for t in ts.list_tasks_for_project(pid))


def test_write_back_failure_rolls_back_every_task(services, monkeypatch):
    ts = services["task_service"]
    sched = services["scheduling_engine"]
    pid, a, b, c = _chain_project(services)

    original = SqlAlchemyTaskRepository.update_schedule_fields

    def _write_then_fail(self, tasks):
        original(self, tasks)
        raise RuntimeError("disk I/O error")

    monkeypatch.setattr(SqlAlchemyTaskRepository, "update_schedule_fields", _write_then_fail)

    with pytest.raises(PersistenceError) as exc:
        sched.compute_critical_path(pid)

    assert exc.value.code == "SCHEDULE_PERSIST_FAILED"
    assert isinstance(exc.value.__cause__, RuntimeError)
    for task in ts.list_tasks_for_project(pid):
        assert task.early_start is None
        assert task.total_float_days is None
        assert task.is_critical is False


def test_schedule_recalculated_event_fires_after_commit(services):
    sched = services["scheduling_engine"]
    pid, *_ = _chain_project(services)
    seen: list[str] = []

    def _handler(project_id: str) -> None:
        seen.append(project_id)

    domain_events.schedule_recalculated.connect(_handler)
    try:
        sched.compute_critical_path(pid)
    finally:
        domain_events.schedule_recalculated.disconnect(_handler)

    assert seen == [pid]


def test_critical_path_dict_uses_iso_dates(services):
    sched = services["scheduling_engine"]
    pid, a, *_ = _chain_project(services)

    payload = sched.compute_critical_path(pid).to_dict()

    assert payload["project_start"] == "2025-02-01"
    assert payload["project_end"] == "2025-02-09"
    assert payload["project_duration"] == 8
    first = payload["critical_path"][0]
    assert first == {
        "id": a.id,
        "name": "Task A",
        "task_code": None,
        "duration_days": 3,
        "early_start": "2025-02-01",
        "early_finish": "2025-02-04",
        "total_float": 0,
    }
