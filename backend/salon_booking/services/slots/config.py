# backend/salon_booking/services/slots/config.py
"""
Business hours configuration and the slot grid.

The grid is the ordered list of "HH:MM" times a customer may book on any
open day. It is either derived from open/close hours and the slot step, or
given explicitly (irregular grids, e.g. a lunch gap).
"""

import re
from dataclasses import dataclass
from datetime import time
from functools import cached_property


_TIME_RE = re.compile(r"^(\d{1,2}):(\d{2})(?::\d{2}(?:\.\d+)?)?$")


def normalize_time(value: str | time) -> str:
    """
    Normalize a time-of-day to "HH:MM".

    Accepts datetime.time or strings like "9:30", "09:30", "09:30:00".
    Seconds are truncated, never rounded.
    """
    if isinstance(value, time):
        return f"{value.hour:02d}:{value.minute:02d}"

    match = _TIME_RE.match(str(value).strip())
    if not match:
        raise ValueError(f"Invalid time: {value!r}")

    hour, minute = int(match.group(1)), int(match.group(2))
    if hour > 23 or minute > 59:
        raise ValueError(f"Invalid time: {value!r}")
    return f"{hour:02d}:{minute:02d}"


def time_str_to_minutes(time_str: str) -> int:
    """Convert "HH:MM" to minutes since midnight."""
    hour, minute = time_str.split(":")[:2]
    return int(hour) * 60 + int(minute)


def minutes_to_time_str(minutes: int) -> str:
    """Convert minutes since midnight to "HH:MM"."""
    return f"{minutes // 60:02d}:{minutes % 60:02d}"


@dataclass(frozen=True)
class BusinessHours:
    """
    Opening hours of the salon.

    Attributes:
        open_hour: First bookable hour (inclusive)
        close_hour: Closing hour (exclusive)
        slot_minutes: Grid step in minutes, must divide an hour
        closed_weekday: Weekly day off, date.weekday() numbering (6 = Sunday)
        slot_times: Explicit grid; overrides the derived one when set
    """
    open_hour: int = 10
    close_hour: int = 19
    slot_minutes: int = 30
    closed_weekday: int = 6
    slot_times: tuple[str, ...] | None = None

    def __post_init__(self):
        """Validate configuration."""
        if not 0 <= self.open_hour < self.close_hour <= 24:
            raise ValueError(
                f"open_hour must be before close_hour, got {self.open_hour}-{self.close_hour}"
            )
        if self.slot_minutes <= 0 or 60 % self.slot_minutes:
            raise ValueError(f"slot_minutes must divide 60, got {self.slot_minutes}")
        if not 0 <= self.closed_weekday <= 6:
            raise ValueError(f"closed_weekday must be 0-6, got {self.closed_weekday}")

        if self.slot_times is not None:
            normalized = tuple(normalize_time(t) for t in self.slot_times)
            if not normalized:
                raise ValueError("slot_times must not be empty")
            if len(set(normalized)) != len(normalized):
                raise ValueError("slot_times contains duplicates")
            # frozen dataclass: bypass __setattr__
            object.__setattr__(
                self, "slot_times", tuple(sorted(normalized, key=time_str_to_minutes))
            )

    @cached_property
    def slot_grid(self) -> tuple[str, ...]:
        """
        Bookable times of a day, in order.

        - 10-19, 30 min → 10:00, 10:30, ..., 18:30 (18 slots)
        """
        if self.slot_times is not None:
            return self.slot_times

        return tuple(
            minutes_to_time_str(t)
            for t in range(self.open_hour * 60, self.close_hour * 60, self.slot_minutes)
        )

    def is_slot(self, time_str: str) -> bool:
        return time_str in self.slot_grid


def time_str_to_time(time_str: str) -> time:
    """Convert "HH:MM" to datetime.time (TIME columns)."""
    hour, minute = time_str.split(":")[:2]
    return time(int(hour), int(minute))
