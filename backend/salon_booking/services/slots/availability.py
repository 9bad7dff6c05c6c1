# backend/salon_booking/services/slots/availability.py
"""
Free slots of a day.

    grid − booked − blocked − (already passed, if the date is today)

Always recomputed from the store; nothing here is cached, a slot can be
taken between two requests a second apart.
"""

from datetime import date, datetime

from sqlalchemy.orm import Session

from ...models.tables import BlockedSlots, Bookings
from .calculator import check_day_eligibility
from .config import BusinessHours, normalize_time, time_str_to_minutes


def calculate_day_availability(
    db: Session,
    target_date: date,
    hours: BusinessHours,
    now: datetime | None = None,
) -> list[str]:
    """
    Calculate free "HH:MM" slots for target_date, in grid order.

    Ineligible dates (day off, past, closed) give an empty list.
    """
    now = now or datetime.now()
    today = now.date()

    if check_day_eligibility(db, target_date, hours, today) is not None:
        return []

    booked = get_booked_times(db, target_date)
    blocked = get_blocked_times(db, target_date)

    free = [t for t in hours.slot_grid if t not in booked and t not in blocked]

    if target_date == today:
        free = drop_passed_slots(free, now)

    return free


def drop_passed_slots(slots: list[str], now: datetime) -> list[str]:
    """Keep only slots strictly later than now (minute precision)."""
    now_min = now.hour * 60 + now.minute
    return [t for t in slots if time_str_to_minutes(t) > now_min]


def is_passed_slot(time_str: str, target_date: date, now: datetime) -> bool:
    if target_date != now.date():
        return target_date < now.date()
    return not drop_passed_slots([time_str], now)


# ── Store helpers ────────────────────────────────────────────────────────


def get_booked_times(db: Session, target_date: date) -> set[str]:
    """Normalized "HH:MM" times of bookings on target_date."""
    rows = db.query(Bookings.time).filter(Bookings.date == target_date).all()
    return {normalize_time(row.time) for row in rows}


def get_blocked_times(db: Session, target_date: date) -> set[str]:
    """Normalized "HH:MM" times blocked on target_date."""
    rows = db.query(BlockedSlots.time).filter(BlockedSlots.date == target_date).all()
    return {normalize_time(row.time) for row in rows}


def is_booked(db: Session, target_date: date, time_str: str) -> bool:
    return time_str in get_booked_times(db, target_date)
