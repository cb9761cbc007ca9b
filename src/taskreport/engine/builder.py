"""
Task construction.

Maps one raw record to a Task once its section and the custom-field set are
known. Pure per-record work; the timeline position is attached later, after
the project range has been computed over all tasks.
"""

from datetime import date
from typing import Mapping, Optional, Sequence, Tuple

from taskreport.engine import fields as f
from taskreport.engine.fields import extract_custom_fields
from taskreport.engine.sections import is_done_section
from taskreport.engine.timeline import calculate_duration
from taskreport.models.task import UNASSIGNED, Task
from taskreport.utils.dates import days_between, parse_date

PRIORITY_ORDER = {"High": 1, "Medium": 2, "Low": 3}
DEFAULT_PRIORITY_ORDER = 4


def priority_order(priority: Optional[str]) -> int:
    """High=1, Medium=2, Low=3; anything else, or nothing, is 4."""
    return PRIORITY_ORDER.get(priority or "", DEFAULT_PRIORITY_ORDER)


def split_list(value: Optional[str]) -> Tuple[str, ...]:
    """
    Split a comma-separated cell into trimmed, non-empty, de-duplicated items.

    Used for Tags and the two dependency columns.
    """
    if not value:
        return ()
    items = []
    for item in value.split(","):
        item = item.strip()
        if item and item not in items:
            items.append(item)
    return tuple(items)


def is_overdue(due: Optional[date], done: bool, today: date) -> bool:
    """Due strictly before today and not done."""
    if due is None or done:
        return False
    return due < today


def days_until(due: Optional[date], today: date) -> Optional[int]:
    """Days from today to the due date; negative when past due."""
    if due is None:
        return None
    return days_between(today, due)


def _optional(record: Mapping[str, str], key: str) -> Optional[str]:
    value = (record.get(key) or "").strip()
    return value or None


def build_task(
    record: Mapping[str, str],
    *,
    row: int,
    section: str,
    section_order: int,
    custom_field_names: Sequence[str],
    today: date,
) -> Task:
    """
    Build a Task from a raw record.

    Args:
        record: Header-keyed CSV row
        row: 0-based index of the record in the input
        section: Effective section from the section resolver
        section_order: Rank of ``section``
        custom_field_names: Custom fields discovered over all records
        today: Reference calendar date

    Returns:
        Task with every derived field set except ``timeline``
    """
    start = parse_date(record.get(f.START_DATE))
    due = parse_date(record.get(f.DUE_DATE))
    completed_at = _optional(record, f.COMPLETED_AT)
    priority = _optional(record, f.PRIORITY)
    done = is_done_section(section) or completed_at is not None

    return Task(
        name=(record.get(f.NAME) or "").strip(),
        row=row,
        id=(record.get(f.TASK_ID) or "").strip(),
        section=section,
        assignee=_optional(record, f.ASSIGNEE) or UNASSIGNED,
        assignee_email=(record.get(f.ASSIGNEE_EMAIL) or "").strip(),
        start_date=start.isoformat() if start else None,
        due_date=due.isoformat() if due else None,
        priority=priority,
        status=_optional(record, f.STATUS),
        notes=(record.get(f.NOTES) or "").strip(),
        tags=split_list(record.get(f.TAGS)),
        parent_name=_optional(record, f.PARENT_TASK),
        created_at=_optional(record, f.CREATED_AT),
        completed_at=completed_at,
        modified_at=_optional(record, f.LAST_MODIFIED),
        blocked_by=split_list(record.get(f.BLOCKED_BY)),
        blocking=split_list(record.get(f.BLOCKING)),
        is_done=done,
        is_overdue=is_overdue(due, done, today),
        days_until_due=days_until(due, today),
        duration=calculate_duration(start, due, today),
        priority_order=priority_order(priority),
        section_order=section_order,
        custom_fields=extract_custom_fields(record, custom_field_names),
    )
