"""
Timeline positioning and duration math.

A task's effective start is its start date, or its due date when it has no
start; its effective end is the due date, or the start date. The project range
spans the earliest to the latest effective date over all dated tasks and is
never shorter than one day. With no dated tasks it falls back to
DEFAULT_PROJECT_DAYS so the timeline always has a usable width.

Bar positions are percentages of the project span. Every bar is at least 1%
wide and never runs past the right edge.
"""

from dataclasses import replace
from datetime import date
from typing import Iterable, List, Optional

from taskreport.models.report import DEFAULT_PROJECT_DAYS, ProjectRange
from taskreport.models.task import Duration, Task, TimelinePosition
from taskreport.utils.dates import days_between, parse_date
from taskreport.utils.numbers import round_half_up

MIN_WIDTH_PERCENT = 1.0


def calculate_duration(start: Optional[date], due: Optional[date], today: date) -> Optional[Duration]:
    """
    Progress through a task's planned span.

    None unless both dates are present and the due date is not before the
    start. Elapsed days are clamped to [0, days], so percent_elapsed stays
    within 0-100 before the start and after the due date.
    """
    if start is None or due is None or due < start:
        return None

    days = days_between(start, due)
    has_started = today >= start
    elapsed = min(max(days_between(start, today), 0), days)

    if days == 0:
        percent = 100 if has_started else 0
    else:
        percent = round_half_up(elapsed / days * 100)

    return Duration(
        days=days,
        elapsed=elapsed,
        remaining=days - elapsed,
        percent_elapsed=percent,
        has_started=has_started,
        is_complete=today >= due,
    )


def compute_project_range(tasks: Iterable[Task]) -> ProjectRange:
    """Union date span of every task with at least one date."""
    dates: List[date] = []
    for task in tasks:
        if not task.has_dates:
            continue
        for value in (task.effective_start, task.effective_end):
            parsed = parse_date(value)
            if parsed:
                dates.append(parsed)

    if not dates:
        return ProjectRange(start=None, end=None, days=DEFAULT_PROJECT_DAYS)

    start, end = min(dates), max(dates)
    return ProjectRange(
        start=start.isoformat(),
        end=end.isoformat(),
        days=max(1, days_between(start, end) + 1),
    )


def timeline_position(task: Task, project_range: ProjectRange) -> Optional[TimelinePosition]:
    """Start offset and width of a task bar, or None for undated tasks."""
    if not task.has_dates:
        return None

    start = parse_date(task.effective_start)
    end = parse_date(task.effective_end)
    project_start = parse_date(project_range.start)
    if start is None or end is None or project_start is None:
        return None

    span = max(1, project_range.days)
    offset = days_between(project_start, start)
    start_percent = min(100.0, max(0.0, offset / span * 100))

    task_days = max(1, days_between(start, end) + 1)
    width_percent = max(MIN_WIDTH_PERCENT, min(task_days / span * 100, 100 - start_percent))

    return TimelinePosition(
        start_percent=round(start_percent, 2),
        width_percent=round(width_percent, 2),
    )


def position_tasks(tasks: Iterable[Task], project_range: ProjectRange) -> List[Task]:
    """Copies of ``tasks`` with ``timeline`` filled in."""
    return [replace(task, timeline=timeline_position(task, project_range)) for task in tasks]


def order_timeline(tasks: Iterable[Task]) -> List[Task]:
    """
    Tasks in chronological order of effective start; undated tasks last.

    The sort is stable, so ties keep the order they came in.
    """
    return sorted(tasks, key=lambda t: (not t.has_dates, t.effective_start or ""))
