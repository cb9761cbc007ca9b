from .dates import days_between, normalize_today, parse_date, utc_today
from .numbers import round_half_up

__all__ = [
    "days_between",
    "normalize_today",
    "parse_date",
    "round_half_up",
    "utc_today",
]
