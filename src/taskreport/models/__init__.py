from .task import Duration, Task, TimelinePosition, UNASSIGNED, UNCATEGORIZED
from .report import (
    DEFAULT_PROJECT_DAYS,
    LoadError,
    LoadErrorKind,
    ProjectRange,
    ReportData,
    StatsSnapshot,
)

__all__ = [
    "Task",
    "Duration",
    "TimelinePosition",
    "UNASSIGNED",
    "UNCATEGORIZED",
    "DEFAULT_PROJECT_DAYS",
    "LoadError",
    "LoadErrorKind",
    "ProjectRange",
    "ReportData",
    "StatsSnapshot",
]
