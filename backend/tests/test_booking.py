"""Tests for services/booking.py: validation order, conflicts, cancellation."""
from datetime import datetime, time

import pytest
from conftest import MONDAY, NOW, SUNDAY, TODAY, TOMORROW, YESTERDAY

from salon_booking.errors import (
    BOOKING_NOT_FOUND,
    DATE_UNAVAILABLE,
    DAY_CLOSED,
    INVALID_DATE,
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
from salon_booking.models import BlockedSlots, Bookings, Closures
from salon_booking.schemas.bookings import BookingCreate
from salon_booking.services import booking as booking_service
from salon_booking.services.booking import cancel_booking, create_booking, list_bookings


def _request(day=MONDAY, at="10:00", **overrides):
    data = {
        "nombre": "Ana",
        "apellido": "García",
        "telefono": "1155550000",
        "email": "ana@example.com",
        "date": day.isoformat() if hasattr(day, "isoformat") else day,
        "time": at,
    }
    data.update(overrides)
    return BookingCreate(**data)


def test_create_booking(db, hours):
    booking = create_booking(db, _request(), hours, NOW)

    assert booking.id is not None
    assert booking.date == MONDAY
    assert booking.time == time(10, 0)
    assert booking.email == "ana@example.com"


@pytest.mark.parametrize("field", ["nombre", "apellido", "telefono", "email", "date", "time"])
def test_each_field_required(db, hours, field):
    with pytest.raises(ValidationError) as exc:
        create_booking(db, _request(**{field: ""}), hours, NOW)
    assert exc.value.reason == MISSING_DATA


def test_whitespace_only_counts_as_missing(db, hours):
    with pytest.raises(ValidationError) as exc:
        create_booking(db, _request(nombre="   "), hours, NOW)
    assert exc.value.reason == MISSING_DATA


def test_missing_data_checked_before_date_rules(db, hours):
    with pytest.raises(ValidationError) as exc:
        create_booking(db, _request(day=SUNDAY, email=None), hours, NOW)
    assert exc.value.reason == MISSING_DATA


def test_malformed_date(db, hours):
    with pytest.raises(ValidationError) as exc:
        create_booking(db, _request(day="10/06/2030"), hours, NOW)
    assert exc.value.reason == INVALID_DATE


def test_closed_weekday_rejected(db, hours):
    with pytest.raises(EligibilityError) as exc:
        create_booking(db, _request(day=SUNDAY), hours, NOW)
    assert exc.value.reason == DATE_UNAVAILABLE
    assert exc.value.status_code == 400


def test_past_date_rejected(db, hours):
    with pytest.raises(EligibilityError) as exc:
        create_booking(db, _request(day=YESTERDAY), hours, NOW)
    assert exc.value.reason == DATE_UNAVAILABLE


def test_closed_day_rejected(db, hours):
    db.add(Closures(date=TOMORROW))
    db.commit()

    with pytest.raises(EligibilityError) as exc:
        create_booking(db, _request(day=TOMORROW), hours, NOW)
    assert exc.value.reason == DAY_CLOSED


@pytest.mark.parametrize("at", ["19:00", "10:15", "09:30", "noon"])
def test_time_off_grid_rejected(db, hours, at):
    with pytest.raises(EligibilityError) as exc:
        create_booking(db, _request(at=at), hours, NOW)
    assert exc.value.reason == INVALID_TIME


def test_time_with_seconds_accepted(db, hours):
    booking = create_booking(db, _request(at="10:30:00"), hours, NOW)
    assert booking.time == time(10, 30)


def test_passed_slot_today_rejected(db, hours):
    with pytest.raises(EligibilityError) as exc:
        create_booking(db, _request(day=TODAY, at="12:00"), hours, NOW)
    assert exc.value.reason == SLOT_IN_PAST


def test_later_slot_today_accepted(db, hours):
    booking = create_booking(db, _request(day=TODAY, at="12:30"), hours, NOW)
    assert booking.date == TODAY


def test_blocked_slot_rejected(db, hours):
    db.add(BlockedSlots(date=MONDAY, time=time(10, 0)))
    db.commit()

    with pytest.raises(EligibilityError) as exc:
        create_booking(db, _request(), hours, NOW)
    assert exc.value.reason == SLOT_BLOCKED


def test_blocked_wins_over_taken(db, hours):
    create_booking(db, _request(), hours, NOW)
    db.add(BlockedSlots(date=MONDAY, time=time(10, 0)))
    db.commit()

    with pytest.raises(EligibilityError) as exc:
        create_booking(db, _request(email="otra@example.com"), hours, NOW)
    assert exc.value.reason == SLOT_BLOCKED


def test_taken_slot_is_conflict(db, hours):
    create_booking(db, _request(), hours, NOW)

    with pytest.raises(ConflictError) as exc:
        create_booking(db, _request(nombre="Luis"), hours, NOW)
    assert exc.value.reason == SLOT_TAKEN
    assert exc.value.status_code == 409


def test_same_time_other_day_is_fine(db, hours):
    create_booking(db, _request(), hours, NOW)
    create_booking(db, _request(day=TOMORROW), hours, NOW)

    assert len(list_bookings(db)) == 2


def test_unique_constraint_decides_race(db, hours, monkeypatch):
    # Another request inserted the same slot after our pre-check passed
    monkeypatch.setattr(booking_service, "is_booked", lambda *args: False)
    db.add(Bookings(
        nombre="Luis", apellido="Pérez", telefono="2", email="luis@example.com",
        date=MONDAY, time=time(10, 0),
    ))
    db.commit()

    with pytest.raises(ConflictError) as exc:
        create_booking(db, _request(), hours, NOW)
    assert exc.value.reason == SLOT_TAKEN

    # Loser left nothing behind, session still usable
    bookings = list_bookings(db, MONDAY)
    assert [b.nombre for b in bookings] == ["Luis"]


def test_cancel_booking(db, hours):
    booking = create_booking(db, _request(), hours, NOW)

    deleted = cancel_booking(db, booking.id)

    assert deleted.id == booking.id
    assert deleted.email == "ana@example.com"
    assert list_bookings(db) == []


def test_cancel_missing_booking(db):
    with pytest.raises(NotFoundError) as exc:
        cancel_booking(db, 999)
    assert exc.value.reason == BOOKING_NOT_FOUND
    assert exc.value.status_code == 404


def test_cancel_frees_slot_and_keeps_blocks(db, hours):
    booking = create_booking(db, _request(), hours, NOW)
    db.add(BlockedSlots(date=MONDAY, time=time(11, 0)))
    db.commit()

    cancel_booking(db, booking.id)

    assert db.query(BlockedSlots).count() == 1
    again = create_booking(db, _request(nombre="Luis"), hours, NOW)
    assert again.nombre == "Luis"


def test_list_bookings_ordered(db, hours):
    create_booking(db, _request(at="15:00"), hours, NOW)
    create_booking(db, _request(day=TOMORROW, at="11:00"), hours, NOW)
    create_booking(db, _request(at="10:00"), hours, NOW)

    everything = [(b.date, b.time) for b in list_bookings(db)]
    assert everything == [
        (TOMORROW, time(11, 0)),
        (MONDAY, time(10, 0)),
        (MONDAY, time(15, 0)),
    ]
    assert len(list_bookings(db, MONDAY)) == 2


def test_uses_clock_for_today(db, hours):
    late = datetime.combine(MONDAY, time(18, 45))
    with pytest.raises(EligibilityError) as exc:
        create_booking(db, _request(at="18:30"), hours, late)
    assert exc.value.reason == SLOT_IN_PAST
