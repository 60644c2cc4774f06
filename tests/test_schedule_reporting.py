from datetime import date

import pytest

from core.exceptions import NotFoundError, ValidationError
from core.models import DependencyType, MilestoneStatus, MilestoneType, TaskPriority, TaskStatus
from core.services.reporting.lookahead import week_start


AS_OF = date(2025, 6, 4)  # a Wednesday


def test_week_start_is_the_preceding_sunday():
    assert week_start(date(2025, 6, 1)) == date(2025, 6, 1)
    assert week_start(date(2025, 6, 4)) == date(2025, 6, 1)
    assert week_start(date(2025, 6, 7)) == date(2025, 6, 1)
    assert week_start(date(2025, 6, 9)) == date(2025, 6, 8)


def test_gantt_data_lists_tasks_links_and_milestones(services):
    ps = services["project_service"]
    ts = services["task_service"]
    ms = services["milestone_service"]
    rp = services["reporting_service"]

    pid = ps.create_project("Gantt Tower").id
    undated = ts.create_task(pid, "Commissioning")
    b = ts.create_task(pid, "Cladding", planned_start_date=date(2025, 6, 5), duration_days=4)
    a = ts.create_task(
        pid,
        "Piling",
        task_code="T-010",
        planned_start_date=date(2025, 6, 2),
        duration_days=3,
        assigned_to="Ground crew",
    )
    dep = ts.add_dependency(a.id, b.id, DependencyType.START_TO_START, lag_days=2)
    ms.create_milestone(pid, "Topping out", date(2025, 6, 20), milestone_type=MilestoneType.PHASE)

    gantt = rp.get_gantt_data(pid)

    assert [bar.task_id for bar in gantt.tasks] == [a.id, b.id, undated.id]
    bar_a = gantt.tasks[0]
    assert bar_a.start == date(2025, 6, 2)
    assert bar_a.end == date(2025, 6, 5)
    assert bar_a.task_code == "T-010"
    assert bar_a.assigned_to == "Ground crew"

    assert len(gantt.dependencies) == 1
    link = gantt.dependencies[0]
    assert (link.dependency_id, link.source, link.target) == (dep.id, a.id, b.id)
    assert (link.dependency_type, link.lag_days) == ("SS", 2)

    assert [m.name for m in gantt.milestones] == ["Topping out"]

    payload = gantt.to_dict()
    assert payload["tasks"][0]["start_date"] == "2025-06-02"
    assert payload["tasks"][2]["start_date"] is None
    assert payload["dependencies"][0]["type"] == "SS"
    assert payload["milestones"][0]["date"] == "2025-06-20"
    assert payload["milestones"][0]["milestone_type"] == "phase"


def _look_ahead_project(services):
    ps = services["project_service"]
    ts = services["task_service"]

    pid = ps.create_project("Look Ahead Block").id
    slab = ts.create_task(
        pid, "Pour slab", planned_start_date=date(2025, 6, 4), duration_days=1, priority=TaskPriority.HIGH
    )
    crane = ts.create_task(
        pid, "Crane lift", planned_start_date=date(2025, 6, 4), duration_days=1, priority="critical"
    )
    formwork = ts.create_task(pid, "Formwork", planned_start_date=date(2025, 6, 9), duration_days=3)
    roofing = ts.create_task(pid, "Roofing", planned_start_date=date(2025, 6, 20), duration_days=2)
    ts.create_task(pid, "Setting out", planned_start_date=date(2025, 6, 2), duration_days=1)
    ts.create_task(pid, "Landscaping", planned_start_date=date(2025, 6, 26), duration_days=5)
    ts.create_task(
        pid, "Scaffold", planned_start_date=date(2025, 6, 5), duration_days=1, status=TaskStatus.COMPLETED
    )
    ts.add_dependency(slab.id, formwork.id)
    return pid, slab, crane, formwork, roofing


def test_look_ahead_groups_open_tasks_by_week(services):
    rp = services["reporting_service"]
    pid, slab, crane, formwork, roofing = _look_ahead_project(services)

    report = rp.get_look_ahead(pid, weeks=3, as_of=AS_OF)

    assert report.as_of == AS_OF
    assert report.end_date == date(2025, 6, 25)
    assert list(report.tasks_by_week) == ["2025-06-01", "2025-06-08", "2025-06-15"]
    assert [row.name for row in report.tasks_by_week["2025-06-01"]] == ["Crane lift", "Pour slab"]
    assert [row.task_id for row in report.tasks_by_week["2025-06-08"]] == [formwork.id]
    assert [row.task_id for row in report.tasks_by_week["2025-06-15"]] == [roofing.id]
    assert report.total_tasks == 4

    formwork_row = report.tasks_by_week["2025-06-08"][0]
    assert formwork_row.predecessor_count == 1
    assert report.tasks_by_week["2025-06-01"][0].predecessor_count == 0

    payload = report.to_dict()
    assert payload["weeks"] == 3
    assert payload["total_tasks"] == 4
    assert payload["tasks_by_week"]["2025-06-01"][0]["priority"] == "critical"


def test_look_ahead_weeks_default_comes_from_environment(services, monkeypatch):
    rp = services["reporting_service"]
    pid, slab, crane, formwork, roofing = _look_ahead_project(services)

    monkeypatch.setenv("PM_LOOKAHEAD_WEEKS", "1")
    report = rp.get_look_ahead(pid, as_of=AS_OF)

    assert report.weeks == 1
    assert report.end_date == date(2025, 6, 11)
    assert list(report.tasks_by_week) == ["2025-06-01", "2025-06-08"]


def test_look_ahead_rejects_non_positive_weeks(services):
    rp = services["reporting_service"]
    pid = services["project_service"].create_project("Short Window").id

    with pytest.raises(ValidationError) as exc:
        rp.get_look_ahead(pid, weeks=0, as_of=AS_OF)
    assert exc.value.code == "LOOKAHEAD_WEEKS_INVALID"


def test_schedule_summary_counts(services):
    ps = services["project_service"]
    ts = services["task_service"]
    ms = services["milestone_service"]
    rp = services["reporting_service"]

    pid = ps.create_project("Summary Yard").id
    ts.create_task(pid, "Deliveries", planned_start_date=date(2025, 6, 5), duration_days=2, budgeted_cost=1000.0)
    late = ts.create_task(pid, "Drainage", planned_start_date=date(2025, 5, 20), duration_days=5, budgeted_cost=500.0)
    done = ts.create_task(pid, "Survey", planned_start_date=date(2025, 5, 1), duration_days=3)
    ts.update_progress(late.id, 50)
    ts.update_task(late.id, actual_cost=700.0)
    ts.update_progress(done.id, 100)

    ms.create_milestone(pid, "Site handover", date(2025, 5, 1), status=MilestoneStatus.ACHIEVED)
    ms.create_milestone(pid, "Drainage signed off", date(2025, 6, 1), status=MilestoneStatus.AT_RISK)
    ms.create_milestone(pid, "Practical completion", date(2025, 9, 1))

    summary = rp.get_schedule_summary(pid, as_of=AS_OF)

    assert summary.total_tasks == 3
    assert summary.count(TaskStatus.NOT_STARTED) == 1
    assert summary.count(TaskStatus.IN_PROGRESS) == 1
    assert summary.count("completed") == 1
    assert summary.count(TaskStatus.ON_HOLD) == 0
    assert summary.avg_completion == pytest.approx(50.0)
    assert summary.project_start == date(2025, 5, 1)
    assert summary.project_end == date(2025, 6, 7)
    assert (summary.total_milestones, summary.achieved_milestones, summary.at_risk_milestones) == (3, 1, 1)
    assert summary.missed_milestones == 0
    assert summary.total_budgeted == pytest.approx(1500.0)
    assert summary.total_actual == pytest.approx(700.0)
    assert summary.budget_variance == pytest.approx(-800.0)
    assert summary.upcoming_tasks == 1
    assert summary.overdue_tasks == 1

    payload = summary.to_dict()
    assert payload["completed_tasks"] == 1
    assert payload["in_progress_tasks"] == 1
    assert payload["variance"] == pytest.approx(-800.0)
    assert payload["project_end"] == "2025-06-07"


def test_summary_of_empty_project(services):
    pid = services["project_service"].create_project("Vacant Lot").id

    summary = services["reporting_service"].get_schedule_summary(pid, as_of=AS_OF)

    assert summary.total_tasks == 0
    assert summary.avg_completion == 0.0
    assert summary.project_start is None and summary.project_end is None


@pytest.mark.parametrize("report", ["get_gantt_data", "get_look_ahead", "get_schedule_summary"])
def test_reports_for_unknown_project_raise_not_found(services, report):
    with pytest.raises(NotFoundError) as exc:
        getattr(services["reporting_service"], report)("missing-project")
    assert exc.value.code == "PROJECT_NOT_FOUND"
