"""
Column names of the export and custom-field discovery.

Any column not in KNOWN_FIELDS is a customer-defined "custom field". The set of
custom fields is discovered from the data on every run, in the order the
columns first appear.
"""

from typing import Dict, List, Mapping, Optional, Sequence, Set

TASK_ID = "Task ID"
NAME = "Name"
SECTION = "Section/Column"
ASSIGNEE = "Assignee"
ASSIGNEE_EMAIL = "Assignee Email"
START_DATE = "Start Date"
DUE_DATE = "Due Date"
PRIORITY = "Priority"
STATUS = "Status"
NOTES = "Notes"
CREATED_AT = "Created At"
COMPLETED_AT = "Completed At"
LAST_MODIFIED = "Last Modified"
TAGS = "Tags"
PARENT_TASK = "Parent task"
BLOCKED_BY = "Blocked By (Dependencies)"
BLOCKING = "Blocking (Dependencies)"

KNOWN_FIELDS = frozenset({
    TASK_ID,
    NAME,
    SECTION,
    ASSIGNEE,
    ASSIGNEE_EMAIL,
    START_DATE,
    DUE_DATE,
    PRIORITY,
    STATUS,
    NOTES,
    CREATED_AT,
    COMPLETED_AT,
    LAST_MODIFIED,
    TAGS,
    PARENT_TASK,
    BLOCKED_BY,
    BLOCKING,
})


def collect_headers(records: Sequence[Mapping[str, str]]) -> Set[str]:
    """Every column name present in any record."""
    headers: Set[str] = set()
    for record in records:
        headers.update(record.keys())
    return headers


def discover_custom_fields(
    records: Sequence[Mapping[str, str]],
    known_fields: Set[str] = KNOWN_FIELDS,
) -> List[str]:
    """
    Column names outside ``known_fields``, de-duplicated in first-appearance order.

    Blank column names (an unnamed trailing column) are ignored.
    """
    seen: Set[str] = set()
    custom: List[str] = []
    for record in records:
        for key in record:
            if not key or key in known_fields or key in seen:
                continue
            seen.add(key)
            custom.append(key)
    return custom


def extract_custom_fields(
    record: Mapping[str, str],
    custom_field_names: Sequence[str],
) -> Optional[Dict[str, Optional[str]]]:
    """
    Map each discovered custom field to the record's trimmed value.

    Missing and empty cells become None. When no custom fields exist in the
    data set at all the result is None rather than an empty dict.
    """
    if not custom_field_names:
        return None
    values: Dict[str, Optional[str]] = {}
    for name in custom_field_names:
        value = (record.get(name) or "").strip()
        values[name] = value or None
    return values
