# backend/salon_booking/services/booking.py
"""
Booking arbiter: validate a booking request and commit it.

Checks, first failure wins:
1. all six fields present          → ValidationError "missing data"
2. day eligibility                 → EligibilityError "date unavailable" / "day closed"
3. time on the grid, not passed    → EligibilityError "invalid time" / "slot in the past"
4. time not blocked                → EligibilityError "slot blocked"
5. no booking at (date, time)      → ConflictError "slot already taken"
6. INSERT

Step 5 is only a pre-check. Two requests can both pass it; the UNIQUE(date, time)
constraint decides which INSERT wins, the loser gets the same ConflictError.
"""

import logging
from datetime import date, datetime

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from ..errors import (
    BOOKING_NOT_FOUND,
    INVALID_TIME,
    MISSING_DATA,
    SLOT_BLOCKED,
    SLOT_IN_PAST,
    SLOT_TAKEN,
    ConflictError,
    EligibilityError,
    NotFoundError,
    ValidationError,
)
from ..models.tables import Bookings
from ..schemas.bookings import BookingCreate
from .slots.availability import get_blocked_times, is_booked, is_passed_slot
from .slots.calculator import check_day_eligibility
from .slots.config import BusinessHours, normalize_time, time_str_to_time
from .validation import parse_date

logger = logging.getLogger(__name__)

REQUIRED_FIELDS = ("nombre", "apellido", "telefono", "email", "date", "time")


def create_booking(
    db: Session,
    data: BookingCreate,
    hours: BusinessHours,
    now: datetime | None = None,
) -> Bookings:
    """Validate and insert a booking. Raises a BookingError subclass on rejection."""
    now = now or datetime.now()

    # Step 1: required fields
    if any(not getattr(data, field) for field in REQUIRED_FIELDS):
        raise ValidationError(MISSING_DATA)
    target_date = parse_date(data.date)

    # Step 2: day eligibility
    reason = check_day_eligibility(db, target_date, hours, now.date())
    if reason is not None:
        raise EligibilityError(reason)

    # Step 3: time on the grid
    try:
        time_str = normalize_time(data.time)
    except ValueError:
        raise EligibilityError(INVALID_TIME) from None
    if not hours.is_slot(time_str):
        raise EligibilityError(INVALID_TIME)
    if is_passed_slot(time_str, target_date, now):
        raise EligibilityError(SLOT_IN_PAST)

    # Step 4: blocked by the salon
    if time_str in get_blocked_times(db, target_date):
        raise EligibilityError(SLOT_BLOCKED)

    # Step 5: pre-check
    if is_booked(db, target_date, time_str):
        raise ConflictError(SLOT_TAKEN)

    # Step 6: insert, the unique constraint has the last word
    booking = Bookings(
        nombre=data.nombre,
        apellido=data.apellido,
        telefono=data.telefono,
        email=data.email,
        date=target_date,
        time=time_str_to_time(time_str),
    )
    db.add(booking)
    try:
        db.commit()
    except IntegrityError:
        db.rollback()
        logger.warning(f"Booking race lost at commit: {target_date} {time_str}")
        raise ConflictError(SLOT_TAKEN) from None

    db.refresh(booking)

    logger.info(
        f"Booking created: booking_id={booking.id}, "
        f"time={target_date.isoformat()} {time_str}"
    )
    return booking


def cancel_booking(db: Session, booking_id: int) -> Bookings:
    """
    Delete a booking by id.

    Returns the deleted record (its email is used for the cancellation
    notice). Closures and blocked slots are not touched.
    """
    booking = db.get(Bookings, booking_id)
    if not booking:
        raise NotFoundError(BOOKING_NOT_FOUND)

    deleted = (
        db.query(Bookings)
        .filter(Bookings.id == booking_id)
        .delete(synchronize_session=False)
    )
    db.commit()
    db.expunge(booking)

    # Deleted by a concurrent request between get and delete
    if not deleted:
        raise NotFoundError(BOOKING_NOT_FOUND)

    logger.info(f"Booking cancelled: booking_id={booking_id}")
    return booking


def list_bookings(db: Session, target_date: date | None = None) -> list[Bookings]:
    """All bookings (or those of target_date), ordered by date and time."""
    query = db.query(Bookings)
    if target_date is not None:
        query = query.filter(Bookings.date == target_date)
    return query.order_by(Bookings.date, Bookings.time).all()
