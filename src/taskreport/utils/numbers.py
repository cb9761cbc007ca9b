"""Numeric helpers."""

import math


def round_half_up(value: float) -> int:
    """Round to the nearest integer with .5 going up (12.5 → 13, not 12)."""
    return int(math.floor(value + 0.5))
