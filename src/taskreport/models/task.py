"""
Core task data models.

A Task is one row of the CSV export plus the facts derived from it during a
pipeline run. Tasks are frozen: the pipeline builds them once and attaches the
timeline position with dataclasses.replace() after the project range is known.

Parent/child links are by name only. A subtask stores its parent's name and the
relationship is resolved through name-keyed indexes on the ReportData, never by
holding a reference to the parent Task.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, Optional, Tuple

UNCATEGORIZED = "Uncategorized"
UNASSIGNED = "Unassigned"


@dataclass(frozen=True)
class Duration:
    """
    Planned span of a task that has both a start and a due date.

    Days count the start day but not the due day, so a task running from the
    1st to the 5th is 4 days long.
    """

    days: int
    elapsed: int
    remaining: int
    percent_elapsed: int
    has_started: bool
    is_complete: bool


@dataclass(frozen=True)
class TimelinePosition:
    """Horizontal placement of a task bar, as percentages of the project span."""

    start_percent: float
    width_percent: float


@dataclass(frozen=True)
class Task:
    """
    A single task row.

    ``row`` is the 0-based position of the record in the input and is the
    final tie-breaker for every ordering the engine produces.
    """

    name: str
    row: int = 0
    id: str = ""
    section: str = UNCATEGORIZED
    assignee: str = UNASSIGNED
    assignee_email: str = ""
    start_date: Optional[str] = None
    due_date: Optional[str] = None
    priority: Optional[str] = None
    status: Optional[str] = None
    notes: str = ""
    tags: Tuple[str, ...] = ()
    parent_name: Optional[str] = None
    created_at: Optional[str] = None
    completed_at: Optional[str] = None
    modified_at: Optional[str] = None
    blocked_by: Tuple[str, ...] = ()
    blocking: Tuple[str, ...] = ()
    is_done: bool = False
    is_overdue: bool = False
    days_until_due: Optional[int] = None
    duration: Optional[Duration] = None
    priority_order: int = 4
    section_order: int = 0
    custom_fields: Optional[Dict[str, Optional[str]]] = None
    timeline: Optional[TimelinePosition] = None

    @property
    def is_subtask(self) -> bool:
        """True if the task names a parent task."""
        return bool(self.parent_name)

    @property
    def has_dates(self) -> bool:
        """True if the task has a start or a due date."""
        return bool(self.start_date or self.due_date)

    @property
    def effective_start(self) -> Optional[str]:
        """Start date, falling back to the due date."""
        return self.start_date or self.due_date

    @property
    def effective_end(self) -> Optional[str]:
        """Due date, falling back to the start date."""
        return self.due_date or self.start_date
