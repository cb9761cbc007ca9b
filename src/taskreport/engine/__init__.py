from .fields import KNOWN_FIELDS, discover_custom_fields, extract_custom_fields
from .sections import DONE_PATTERNS, is_done_section, resolve_sections
from .builder import build_task, priority_order
from .grouping import group_tasks, order_tasks
from .timeline import calculate_duration, compute_project_range, timeline_position
from .stats import calculate_stats
from .validation import log_diagnostics, validate_records
from .transform import load_report, process_records

__all__ = [
    "KNOWN_FIELDS",
    "DONE_PATTERNS",
    "build_task",
    "calculate_duration",
    "calculate_stats",
    "compute_project_range",
    "discover_custom_fields",
    "extract_custom_fields",
    "group_tasks",
    "is_done_section",
    "load_report",
    "log_diagnostics",
    "order_tasks",
    "priority_order",
    "process_records",
    "resolve_sections",
    "timeline_position",
    "validate_records",
]
