# backend/salon_booking/services/validation.py
"""Parsing of request values into domain values."""

from datetime import date, datetime

from ..errors import DATE_REQUIRED, INVALID_DATE, INVALID_TIME, ValidationError
from .slots.config import BusinessHours, normalize_time


def parse_date(value: str | None, missing: str = DATE_REQUIRED) -> date:
    """Parse "YYYY-MM-DD". Empty → `missing` reason, malformed → "invalid date"."""
    if not value:
        raise ValidationError(missing)
    try:
        return datetime.strptime(value.strip(), "%Y-%m-%d").date()
    except ValueError:
        raise ValidationError(INVALID_DATE) from None


def parse_grid_times(values: list[str], hours: BusinessHours) -> list[str]:
    """
    Normalize a batch of times and check each one is on the grid.

    Returns the times de-duplicated, in grid order.
    """
    times = set()
    for value in values:
        try:
            time_str = normalize_time(value)
        except ValueError:
            raise ValidationError(INVALID_TIME) from None
        if not hours.is_slot(time_str):
            raise ValidationError(INVALID_TIME)
        times.add(time_str)

    return [t for t in hours.slot_grid if t in times]
