"""
Record validation.

Checks rows for the things the rest of the pipeline relies on and reports
problems as plain diagnostic strings. Nothing here raises or alters records;
a bad row is still turned into a task with best-effort defaults.
"""

import logging
from typing import Iterable, List, Mapping, Optional, Sequence

from taskreport.engine.fields import (
    ASSIGNEE,
    DUE_DATE,
    NAME,
    SECTION,
    START_DATE,
    collect_headers,
)
from taskreport.utils.dates import parse_date

log = logging.getLogger(__name__)

# Columns the reports work without, but look poor without
RECOMMENDED_FIELDS = (SECTION, ASSIGNEE, DUE_DATE)

# Date columns checked for parseability
DATE_FIELDS = (START_DATE, DUE_DATE)

# How many diagnostics log_diagnostics prints before summarising
DEFAULT_LOG_LIMIT = 10


def _row_number(index: int) -> int:
    """1-based line number in the file, counting the header row."""
    return index + 2


def validate_records(
    records: Sequence[Mapping[str, str]],
    headers: Optional[Sequence[str]] = None,
) -> List[str]:
    """
    Validate raw records.

    ``headers`` is the file's header row. Without it the columns are taken
    from the records, so an empty record list has nothing to check.

    Returns:
        One diagnostic per problem: each row missing a Name, each unparseable
        date cell, then each recommended column absent from every row
    """
    diagnostics: List[str] = []

    for index, record in enumerate(records):
        row = _row_number(index)
        if not (record.get(NAME) or "").strip():
            diagnostics.append(f"Row {row}: missing required field '{NAME}'")
        for date_field in DATE_FIELDS:
            value = (record.get(date_field) or "").strip()
            if value and parse_date(value) is None:
                diagnostics.append(f"Row {row}: invalid {date_field} '{value}'")

    if headers is not None:
        columns = set(headers)
    elif records:
        columns = collect_headers(records)
    else:
        columns = None

    if columns is not None:
        for column in RECOMMENDED_FIELDS:
            if column not in columns:
                diagnostics.append(f"Recommended column '{column}' not found in CSV")

    return diagnostics


def log_diagnostics(diagnostics: Iterable[str], limit: int = DEFAULT_LOG_LIMIT) -> None:
    """Log the first ``limit`` diagnostics as warnings and summarise the rest."""
    diagnostics = list(diagnostics)
    for line in diagnostics[:limit]:
        log.warning(line)
    if len(diagnostics) > limit:
        log.warning("... and %d more", len(diagnostics) - limit)
