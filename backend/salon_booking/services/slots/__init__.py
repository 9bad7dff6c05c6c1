# backend/salon_booking/services/slots/__init__.py
"""
Slots calculation module.

config      : business hours and the slot grid
calculator  : day eligibility (day off, past, closures)
availability: free slots of a day (bookings, blocks, past slots of today)
"""

from .config import BusinessHours, normalize_time
from .calculator import check_day_eligibility, is_closed
from .availability import calculate_day_availability

__all__ = [
    "BusinessHours",
    "normalize_time",
    "check_day_eligibility",
    "is_closed",
    "calculate_day_availability",
]
