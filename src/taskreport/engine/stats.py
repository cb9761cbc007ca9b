"""
Summary statistics over a task list.

Every breakdown counts each task exactly once, so each mapping sums to the
total. Tasks without a status or priority land in a synthetic bucket; the
assignee breakdown needs none because the builder already defaults the
assignee to "Unassigned".
"""

from typing import Dict, Sequence

from taskreport.models.report import StatsSnapshot
from taskreport.models.task import Task
from taskreport.utils.numbers import round_half_up

NO_STATUS = "No status"
NO_PRIORITY = "No priority"


def _count(values) -> Dict[str, int]:
    counts: Dict[str, int] = {}
    for value in values:
        counts[value] = counts.get(value, 0) + 1
    return counts


def _count_with_missing(values, missing_label: str) -> Dict[str, int]:
    """Count non-empty values, then append one bucket for the empty ones."""
    counts: Dict[str, int] = {}
    missing = 0
    for value in values:
        if value:
            counts[value] = counts.get(value, 0) + 1
        else:
            missing += 1
    if missing:
        counts[missing_label] = counts.get(missing_label, 0) + missing
    return counts


def completion_percent(done: int, total: int) -> int:
    """Rounded done/total percentage; 0 for an empty report."""
    if total <= 0:
        return 0
    return round_half_up(done / total * 100)


def calculate_stats(tasks: Sequence[Task], section_names: Sequence[str] = ()) -> StatsSnapshot:
    """
    Tally totals and the status/priority/assignee/section breakdowns.

    ``section_names`` fixes the key order of ``by_section``; sections without
    tasks are left out.
    """
    total = len(tasks)
    done = sum(1 for t in tasks if t.is_done)
    overdue = sum(1 for t in tasks if t.is_overdue)

    section_counts = _count(t.section for t in tasks)
    by_section = {name: section_counts[name] for name in section_names if name in section_counts}
    for name, count in section_counts.items():
        by_section.setdefault(name, count)

    return StatsSnapshot(
        total=total,
        done=done,
        overdue=overdue,
        completion_percent=completion_percent(done, total),
        by_status=_count_with_missing((t.status for t in tasks), NO_STATUS),
        by_priority=_count_with_missing((t.priority for t in tasks), NO_PRIORITY),
        by_assignee=_count(t.assignee for t in tasks),
        by_section=by_section,
    )
