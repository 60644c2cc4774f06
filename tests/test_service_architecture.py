from core.services import (
    BaselineService,
    MilestoneService,
    ProjectService,
    ReportingService,
    SchedulingEngine,
    TaskService,
)
from core.services.scheduling import DependencyMode
from infra.services import ServiceGraph, build_service_graph


def test_service_graph_builder_wires_all_services(session):
    graph = build_service_graph(session)

    assert isinstance(graph, ServiceGraph)
    assert isinstance(graph.project_service, ProjectService)
    assert isinstance(graph.task_service, TaskService)
    assert isinstance(graph.milestone_service, MilestoneService)
    assert isinstance(graph.scheduling_engine, SchedulingEngine)
    assert isinstance(graph.baseline_service, BaselineService)
    assert isinstance(graph.reporting_service, ReportingService)
    assert graph.session is session


def test_service_graph_as_dict_exposes_fixture_keys(session):
    services = build_service_graph(session).as_dict()

    assert set(services) == {
        "session",
        "project_service",
        "task_service",
        "milestone_service",
        "scheduling_engine",
        "baseline_service",
        "reporting_service",
    }


def test_dependency_mode_flows_into_engine(session, monkeypatch):
    monkeypatch.delenv("PM_CPM_DEPENDENCY_MODE", raising=False)

    assert build_service_graph(session).scheduling_engine.dependency_mode == DependencyMode.UNIFORM
    typed = build_service_graph(session, dependency_mode="typed")
    assert typed.scheduling_engine.dependency_mode == DependencyMode.TYPED
