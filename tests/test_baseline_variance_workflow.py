from __future__ import annotations

from datetime import date

import pytest

from core.events.domain_events import domain_events
from core.exceptions import NotFoundError, ValidationError
from core.models import BaselineType, DependencyType, VarianceStatus


def _site_project(services):
    ps = services["project_service"]
    ts = services["task_service"]

    pid = ps.create_project("Baseline Site", "").id
    a = ts.create_task(pid, "Groundworks", planned_start_date=date(2025, 5, 5), duration_days=5)
    b = ts.create_task(pid, "Steel frame", planned_start_date=date(2025, 5, 12), duration_days=3)
    c = ts.create_task(pid, "Hoarding", planned_start_date=date(2025, 5, 5), duration_days=2)
    ts.add_dependency(a.id, b.id, DependencyType.FINISH_TO_START)
    services["scheduling_engine"].compute_critical_path(pid)
    return pid, a, b, c


def test_baseline_then_variance_is_all_on_track(services):
    bs = services["baseline_service"]
    rp = services["reporting_service"]
    pid, a, b, c = _site_project(services)
    undated = services["task_service"].create_task(pid, "Snag list")

    baseline = bs.create_baseline(pid, "Contract programme", "Signed at award")
    report = rp.get_variance_report(pid)

    assert baseline.is_active is True
    assert report.baseline.id == baseline.id
    assert report.summary.total_tasks == 4
    assert report.summary.tasks_on_track == 4
    assert report.summary.tasks_not_comparable == 0
    assert undated.id in {row.task_id for row in report.variances}
    assert report.summary.avg_variance_days == 0.0
    assert all(row.variance_days == 0 for row in report.variances)
    assert all(row.status == VarianceStatus.ON_TRACK for row in report.variances)


def test_baseline_captures_dates_and_snapshot(services):
    bs = services["baseline_service"]
    pid, a, b, c = _site_project(services)

    created = bs.create_baseline(pid, "BL1")
    fetched = bs.get_baseline(created.id)

    assert fetched.start_date == date(2025, 5, 5)
    assert fetched.finish_date == date(2025, 5, 15)
    assert fetched.baseline_type == BaselineType.APPROVED
    snap = fetched.snapshot_by_task_id()
    assert set(snap) == {a.id, b.id, c.id}
    assert snap[b.id].planned_end_date == date(2025, 5, 15)
    assert snap[b.id].is_critical is True
    assert snap[c.id].total_float_days == 6


def test_snapshot_is_not_affected_by_later_task_edits(services):
    bs = services["baseline_service"]
    ts = services["task_service"]
    pid, a, b, c = _site_project(services)

    baseline = bs.create_baseline(pid, "BL1")
    ts.update_task(b.id, name="Steel frame (revised)", planned_end_date=date(2025, 5, 20))
    ts.delete_task(c.id)

    snap = bs.get_baseline(baseline.id).snapshot_by_task_id()
    assert snap[b.id].name == "Steel frame"
    assert snap[b.id].planned_end_date == date(2025, 5, 15)
    assert c.id in snap


def test_variance_classifies_and_sorts_rows(services):
    bs = services["baseline_service"]
    ts = services["task_service"]
    rp = services["reporting_service"]
    pid, a, b, c = _site_project(services)

    bs.create_baseline(pid, "BL1")
    ts.update_task(b.id, planned_end_date=date(2025, 5, 18))
    ts.update_task(c.id, planned_end_date=date(2025, 5, 5))
    d = ts.create_task(pid, "Snagging", planned_start_date=date(2025, 5, 20), duration_days=1)

    report = rp.get_variance_report(pid)

    assert [row.task_id for row in report.variances] == [b.id, c.id, a.id, d.id]
    rows = {row.task_id: row for row in report.variances}
    assert rows[b.id].status == VarianceStatus.DELAYED and rows[b.id].variance_days == 3
    assert rows[c.id].status == VarianceStatus.AHEAD and rows[c.id].variance_days == -2
    assert rows[a.id].status == VarianceStatus.ON_TRACK
    assert rows[d.id].status == VarianceStatus.NEW_TASK and rows[d.id].variance_days is None

    summary = report.summary
    assert summary.total_tasks == 4
    assert (summary.tasks_delayed, summary.tasks_ahead, summary.tasks_on_track) == (1, 1, 1)
    assert summary.new_tasks == 1
    assert summary.avg_variance_days == pytest.approx(1 / 3)
    assert summary.critical_tasks_delayed == 1


def test_end_date_missing_on_one_side_is_not_comparable(services):
    ps = services["project_service"]
    ts = services["task_service"]
    bs = services["baseline_service"]
    rp = services["reporting_service"]

    pid = ps.create_project("Open Ended").id
    dated = ts.create_task(pid, "Dated", planned_start_date=date(2025, 1, 6), duration_days=2)
    cleared = ts.create_task(pid, "Cleared", planned_start_date=date(2025, 1, 6), duration_days=4)
    later = ts.create_task(pid, "Later")
    bs.create_baseline(pid, "BL1")
    ts.update_task(cleared.id, planned_end_date=None)
    ts.update_task(later.id, planned_start_date=date(2025, 1, 8), duration_days=1)

    report = rp.get_variance_report(pid)

    rows = {row.task_id: row for row in report.variances}
    assert rows[cleared.id].status == VarianceStatus.NOT_COMPARABLE
    assert rows[cleared.id].variance_days is None
    assert rows[later.id].status == VarianceStatus.NOT_COMPARABLE
    assert {row.task_id for row in report.variances[-2:]} == {cleared.id, later.id}
    assert rows[dated.id].status == VarianceStatus.ON_TRACK
    assert report.summary.tasks_not_comparable == 2
    assert report.summary.avg_variance_days == 0.0


def test_variance_without_active_baseline_is_not_found(services):
    bs = services["baseline_service"]
    rp = services["reporting_service"]
    pid, *_ = _site_project(services)

    with pytest.raises(NotFoundError) as exc:
        rp.get_variance_report(pid)
    assert exc.value.code == "ACTIVE_BASELINE_NOT_FOUND"

    bs.create_baseline(pid, "Scenario", baseline_type=BaselineType.WHAT_IF)
    with pytest.raises(NotFoundError):
        rp.get_variance_report(pid)


def test_at_most_one_active_baseline(services):
    bs = services["baseline_service"]
    pid, *_ = _site_project(services)

    original = bs.create_baseline(pid, "Original", baseline_type="original")
    approved = bs.create_baseline(pid, "Approved", baseline_type=BaselineType.APPROVED)
    what_if = bs.create_baseline(pid, "Accelerated", baseline_type=BaselineType.WHAT_IF)
    forecast = bs.create_baseline(pid, "Forecast", baseline_type=BaselineType.FORECAST)

    summaries = {s.id: s for s in bs.list_baselines(pid)}
    assert set(summaries) == {original.id, approved.id, what_if.id, forecast.id}
    assert [s.id for s in summaries.values() if s.is_active] == [approved.id]
    assert summaries[what_if.id].task_count == 3
    assert bs.get_active_baseline(pid).id == approved.id

    bs.set_active_baseline(original.id)
    active = [s for s in bs.list_baselines(pid) if s.is_active]
    assert [s.id for s in active] == [original.id]


def test_baseline_validation_and_lookup_errors(services):
    bs = services["baseline_service"]
    pid, *_ = _site_project(services)

    with pytest.raises(NotFoundError) as missing_project:
        bs.create_baseline("nope", "BL")
    assert missing_project.value.code == "PROJECT_NOT_FOUND"

    with pytest.raises(ValidationError):
        bs.create_baseline(pid, "   ")

    with pytest.raises(NotFoundError) as missing_baseline:
        bs.get_baseline("nope")
    assert missing_baseline.value.code == "BASELINE_NOT_FOUND"


def test_delete_baseline_clears_active(services):
    bs = services["baseline_service"]
    pid, *_ = _site_project(services)
    seen: list[str] = []

    def _handler(project_id: str) -> None:
        seen.append(project_id)

    domain_events.baseline_changed.connect(_handler)
    try:
        baseline = bs.create_baseline(pid, "BL1")
        bs.delete_baseline(baseline.id)
    finally:
        domain_events.baseline_changed.disconnect(_handler)

    assert bs.get_active_baseline(pid) is None
    assert bs.list_baselines(pid) == []
    assert seen == [pid, pid]


def test_empty_project_baseline_has_no_dates(services):
    ps = services["project_service"]
    bs = services["baseline_service"]
    pid = ps.create_project("Greenfield").id

    baseline = bs.create_baseline(pid, "Empty")

    assert baseline.start_date is None
    assert baseline.finish_date is None
    assert baseline.task_snapshot == ()
