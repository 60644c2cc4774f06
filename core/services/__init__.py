from .baseline import BaselineService
from .milestone import MilestoneService
from .project import ProjectService
from .reporting import ReportingService
from .scheduling import CPMTaskInfo, CriticalPathResult, DependencyMode, SchedulingEngine
from .task import TaskDetail, TaskService

__all__ = [
    "ProjectService",
    "TaskService",
    "TaskDetail",
    "MilestoneService",
    "SchedulingEngine",
    "DependencyMode",
    "CPMTaskInfo",
    "CriticalPathResult",
    "ReportingService",
    "BaselineService",
]
