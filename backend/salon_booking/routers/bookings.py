# backend/salon_booking/routers/bookings.py
"""
Bookings API endpoints.

POST   /api/book       - Book a slot (public)
GET    /api/bookings   - List bookings, optionally for one date (admin)
DELETE /api/book/{id}  - Cancel a booking (admin)
"""

from datetime import datetime
from fastapi import APIRouter, BackgroundTasks, Depends, Query
from sqlalchemy.orm import Session

from ..auth import require_admin
from ..database import get_db
from ..dependencies import get_business_hours, get_notifier, get_now
from ..schemas.bookings import (
    BookingCreate,
    BookingCreatedResponse,
    BookingDeletedResponse,
    BookingRead,
)
from ..services.booking import cancel_booking, create_booking, list_bookings
from ..services.notifications import BOOKING_CANCELLED, BOOKING_CONFIRMED, Notifier
from ..services.slots import BusinessHours
from ..services.validation import parse_date

router = APIRouter(prefix="/api", tags=["bookings"])


@router.post("/book", response_model=BookingCreatedResponse)
def book_slot(
    data: BookingCreate,
    background_tasks: BackgroundTasks,
    db: Session = Depends(get_db),
    hours: BusinessHours = Depends(get_business_hours),
    now: datetime = Depends(get_now),
    notifier: Notifier = Depends(get_notifier),
):
    booking = BookingRead.model_validate(create_booking(db, data, hours, now))

    # Runs after the response is sent; notify() never raises
    background_tasks.add_task(notifier.notify, BOOKING_CONFIRMED, booking.model_dump())

    return BookingCreatedResponse(booking=booking)


@router.get("/bookings", response_model=list[BookingRead])
def get_bookings(
    date_value: str | None = Query(None, alias="date"),
    db: Session = Depends(get_db),
    _admin: str = Depends(require_admin),
):
    target_date = parse_date(date_value) if date_value else None
    return list_bookings(db, target_date)


@router.delete("/book/{id}", response_model=BookingDeletedResponse)
def delete_booking(
    id: int,
    background_tasks: BackgroundTasks,
    db: Session = Depends(get_db),
    notifier: Notifier = Depends(get_notifier),
    _admin: str = Depends(require_admin),
):
    deleted = BookingRead.model_validate(cancel_booking(db, id))

    background_tasks.add_task(notifier.notify, BOOKING_CANCELLED, deleted.model_dump())

    return BookingDeletedResponse(deleted=deleted)
