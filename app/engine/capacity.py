import math
from dataclasses import replace
from datetime import date
from typing import List, Sequence

from app.models.entities import Resource


def working_days(start: date, end: date) -> int:
    """
    Approximate business days in [start, end).

    Uses calendar_days * 5/7 rather than a real calendar, floored, with a
    minimum of one day.
    """
    if start >= end:
        raise ValueError("start date must be before end date")
    calendar_days = (end - start).days
    return max(1, math.floor(calendar_days * 5 / 7))


def available_days(days: int, availability: float) -> int:
    return math.floor(days * availability)


def with_capacity(resources: Sequence[Resource], start: date, end: date) -> List[Resource]:
    """Copies of resources with available_days computed for the window."""
    days = working_days(start, end)
    return [replace(r, available_days=available_days(days, r.availability)) for r in resources]
