from .service import ReportingService
from .models import (
    GanttData,
    GanttLink,
    GanttMilestoneMarker,
    GanttTaskBar,
    LookAheadReport,
    LookAheadRow,
    ScheduleSummary,
    VarianceReport,
    VarianceRow,
    VarianceSummary,
)

__all__ = [
    "ReportingService",
    "GanttData",
    "GanttLink",
    "GanttMilestoneMarker",
    "GanttTaskBar",
    "LookAheadReport",
    "LookAheadRow",
    "ScheduleSummary",
    "VarianceReport",
    "VarianceRow",
    "VarianceSummary",
]
