from .date_compute import DependencyMode
from .engine import SchedulingEngine, analyze_schedule
from .models import CPMTaskInfo, CriticalPathResult, CriticalTaskRow

__all__ = [
    "SchedulingEngine",
    "analyze_schedule",
    "DependencyMode",
    "CPMTaskInfo",
    "CriticalPathResult",
    "CriticalTaskRow",
]
