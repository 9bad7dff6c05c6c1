# backend/salon_booking/errors.py
"""
Domain errors.

Services raise these; main.py turns them into {"error": reason} responses
with the status code carried by the exception class.
"""

from fastapi import status


class BookingError(Exception):
    """Base class for errors reported to the API client."""

    status_code: int = status.HTTP_400_BAD_REQUEST
    default_reason: str = "bad request"

    def __init__(self, reason: str | None = None):
        self.reason = reason or self.default_reason
        super().__init__(self.reason)


class ValidationError(BookingError):
    """Missing or malformed request fields."""

    default_reason = "missing data"


class EligibilityError(BookingError):
    """Date or slot rules violated (closed weekday, past, closure, block)."""

    default_reason = "date unavailable"


class ConflictError(BookingError):
    """(date, time) already taken."""

    status_code = status.HTTP_409_CONFLICT
    default_reason = "slot already taken"


class NotFoundError(BookingError):
    status_code = status.HTTP_404_NOT_FOUND
    default_reason = "not found"


class InfrastructureError(BookingError):
    """Store unreachable or pool exhausted. The reason never carries detail."""

    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR
    default_reason = "internal server error"


# Reasons shared by services and tests
MISSING_DATA = "missing data"
DATE_REQUIRED = "date required"
INVALID_DATE = "invalid date"
DATE_UNAVAILABLE = "date unavailable"
DAY_CLOSED = "day closed"
INVALID_TIME = "invalid time"
SLOT_IN_PAST = "slot in the past"
SLOT_BLOCKED = "slot blocked"
SLOT_TAKEN = "slot already taken"
BOOKING_NOT_FOUND = "booking not found"
DAY_NOT_CLOSED = "day was not closed"
PAST_CLOSURE = "cannot close a past date"
