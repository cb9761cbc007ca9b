"""
Task report engine.

Main API:
    from taskreport import load_report, process_records

    report = load_report(Path("data/project.csv"))
    report.stats.completion_percent
    report.sections["In Progress"]
"""

from .engine.transform import load_report, process_records
from .models import LoadErrorKind, ReportData, Task

__all__ = [
    "LoadErrorKind",
    "ReportData",
    "Task",
    "load_report",
    "process_records",
]
