"""
Date parsing and day arithmetic.

Everything works on calendar dates. Dates in the export have no time zone, so
they are treated as UTC midnight; the reference "today" is reduced to its UTC
calendar day the same way. Pure functions, no external dependencies.
"""

from datetime import date, datetime, timezone
from typing import Optional, Union

DateLike = Union[date, datetime]

# Formats tried after ISO 8601, in order
_FALLBACK_FORMATS = ("%m/%d/%Y", "%Y/%m/%d")


def parse_date(date_str: Optional[str]) -> Optional[date]:
    """
    Parse a date cell from the export.

    Supports:
    - ISO 8601 dates: "2026-02-15"
    - ISO 8601 datetimes: "2026-02-15T10:30:00Z", "2026-02-15T10:30:00-05:00"
    - US style: "02/15/2026"

    Aware datetimes are converted to UTC before the date is taken.

    Returns:
        The calendar date, or None if empty or unparseable
    """
    if not date_str:
        return None

    date_str = date_str.strip()
    if not date_str:
        return None

    try:
        return datetime.strptime(date_str, "%Y-%m-%d").date()
    except ValueError:
        pass

    if "T" in date_str:
        candidate = date_str[:-1] + "+00:00" if date_str.endswith("Z") else date_str
        try:
            parsed = datetime.fromisoformat(candidate)
        except ValueError:
            parsed = None
        if parsed is not None:
            if parsed.tzinfo is not None:
                parsed = parsed.astimezone(timezone.utc)
            return parsed.date()

    for fmt in _FALLBACK_FORMATS:
        try:
            return datetime.strptime(date_str, fmt).date()
        except ValueError:
            continue

    return None


def utc_today() -> date:
    """Current calendar date in UTC."""
    return datetime.now(timezone.utc).date()


def normalize_today(today: Optional[DateLike] = None) -> date:
    """
    Reduce a reference date to a calendar day in UTC.

    Aware datetimes are converted to UTC first; naive ones are taken as UTC
    already. The time of day is dropped, so a task due on the reference date
    is never overdue. None means the UTC wall clock.
    """
    if today is None:
        return utc_today()
    if isinstance(today, datetime):
        if today.tzinfo is not None:
            today = today.astimezone(timezone.utc)
        return today.date()
    return today


def days_between(start: date, end: date) -> int:
    """Whole days from ``start`` to ``end`` (negative if end is earlier)."""
    return (end - start).days
