# backend/salon_booking/services/registry.py
"""
Closed days and blocked slots (admin side).

Neither one touches existing bookings: closing a day with bookings on it
leaves those bookings in place.
"""

import logging
from datetime import date

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from ..errors import (
    DAY_NOT_CLOSED,
    INVALID_TIME,
    MISSING_DATA,
    PAST_CLOSURE,
    NotFoundError,
    ValidationError,
)
from ..models.tables import BlockedSlots, Closures
from .slots.availability import get_blocked_times
from .slots.config import BusinessHours, normalize_time, time_str_to_minutes, time_str_to_time
from .validation import parse_date, parse_grid_times

logger = logging.getLogger(__name__)


# ── Closures ─────────────────────────────────────────────────────────────


def list_closures(db: Session) -> list[str]:
    """Closed dates, ascending, as "YYYY-MM-DD"."""
    rows = db.query(Closures.date).order_by(Closures.date).all()
    return [row.date.isoformat() for row in rows]


def add_closure(db: Session, date_value: str | None, today: date) -> bool:
    """
    Close a day.

    Returns:
        True if the closure was added, False if the day was already closed.
    """
    target_date = parse_date(date_value)
    if target_date < today:
        raise ValidationError(PAST_CLOSURE)

    exists = db.query(Closures.id).filter(Closures.date == target_date).first()
    if exists:
        return False

    db.add(Closures(date=target_date))
    try:
        db.commit()
    except IntegrityError:
        # Closed by a concurrent request
        db.rollback()
        return False

    logger.info(f"Day closed: {target_date.isoformat()}")
    return True


def remove_closure(db: Session, date_value: str | None) -> Closures:
    """Reopen a day. Raises NotFoundError if it was not closed."""
    target_date = parse_date(date_value)

    closure = db.query(Closures).filter(Closures.date == target_date).first()
    if not closure:
        raise NotFoundError(DAY_NOT_CLOSED)

    db.delete(closure)
    db.commit()

    logger.info(f"Day reopened: {target_date.isoformat()}")
    return closure


# ── Blocked slots ────────────────────────────────────────────────────────


def list_blocked(db: Session, target_date: date) -> list[str]:
    """Blocked "HH:MM" times of target_date, ascending."""
    return sorted(get_blocked_times(db, target_date), key=time_str_to_minutes)


def block_slots(
    db: Session,
    date_value: str | None,
    slots: list[str],
    hours: BusinessHours,
) -> list[str]:
    """
    Block a batch of slots. Already blocked ones are skipped.

    Returns:
        All blocked times of the date after the change.
    """
    target_date = parse_date(date_value)
    if not slots:
        raise ValidationError(MISSING_DATA)
    times = parse_grid_times(slots, hours)

    already = get_blocked_times(db, target_date)
    added = []
    for time_str in times:
        if time_str in already:
            continue
        db.add(BlockedSlots(date=target_date, time=time_str_to_time(time_str)))
        try:
            db.commit()
        except IntegrityError:
            # Blocked by a concurrent request
            db.rollback()
            continue
        added.append(time_str)

    if added:
        logger.info(f"Slots blocked on {target_date.isoformat()}: {', '.join(added)}")
    return list_blocked(db, target_date)


def unblock_slots(
    db: Session,
    date_value: str | None,
    slots: list[str],
) -> list[str]:
    """
    Unblock a batch of slots. Times that were not blocked are ignored.

    Off-grid times are accepted so blocks left over from an older grid
    can still be removed.

    Returns:
        All blocked times of the date after the change.
    """
    target_date = parse_date(date_value)
    if not slots:
        raise ValidationError(MISSING_DATA)
    try:
        times = {normalize_time(value) for value in slots}
    except ValueError:
        raise ValidationError(INVALID_TIME) from None

    removed = []
    for row in db.query(BlockedSlots).filter(BlockedSlots.date == target_date).all():
        time_str = normalize_time(row.time)
        if time_str in times:
            db.delete(row)
            removed.append(time_str)
    db.commit()

    if removed:
        logger.info(f"Slots unblocked on {target_date.isoformat()}: {', '.join(removed)}")
    return list_blocked(db, target_date)
