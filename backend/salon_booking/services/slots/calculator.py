# backend/salon_booking/services/slots/calculator.py
"""
Day eligibility: can anything at all be booked on a date?

Rules, first match wins:
✓ weekly day off        → "date unavailable"
✓ date before today     → "date unavailable"
✓ explicit closure      → "day closed"

Does NOT look at:
✗ Bookings (availability.py)
✗ Blocked slots (availability.py)
✗ Past slots of today (availability.py)
"""

from datetime import date

from sqlalchemy.orm import Session

from ...errors import DATE_UNAVAILABLE, DAY_CLOSED
from ...models.tables import Closures
from .config import BusinessHours


def check_day_eligibility(
    db: Session,
    target_date: date,
    hours: BusinessHours,
    today: date,
) -> str | None:
    """
    Check date-level rules.

    Returns:
        None if the date is bookable, otherwise the rejection reason.
    """
    if target_date.weekday() == hours.closed_weekday:
        return DATE_UNAVAILABLE

    if target_date < today:
        return DATE_UNAVAILABLE

    if is_closed(db, target_date):
        return DAY_CLOSED

    return None


def is_closed(db: Session, target_date: date) -> bool:
    """Check the closure registry for target_date."""
    return (
        db.query(Closures.id)
        .filter(Closures.date == target_date)
        .first()
    ) is not None
