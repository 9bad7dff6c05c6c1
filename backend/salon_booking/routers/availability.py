# backend/salon_booking/routers/availability.py
"""
Availability API endpoints.

GET /api/availability - Free slots for a day (never cached)
GET /api/config       - Business hours and the full slot grid
"""

from datetime import datetime
from fastapi import APIRouter, Depends, Query, Response
from sqlalchemy.orm import Session

from ..database import get_db
from ..dependencies import get_business_hours, get_now
from ..schemas.availability import AvailabilityResponse, BusinessConfigResponse
from ..services.slots import BusinessHours, calculate_day_availability
from ..services.validation import parse_date

router = APIRouter(prefix="/api", tags=["availability"])

# Free slots change with every booking: no browser or proxy may reuse them
NO_STORE_HEADERS = {
    "Cache-Control": "no-store, no-cache, must-revalidate, max-age=0",
    "Pragma": "no-cache",
    "Expires": "0",
}


@router.get("/availability", response_model=AvailabilityResponse)
def get_availability(
    response: Response,
    date_value: str | None = Query(None, alias="date"),
    db: Session = Depends(get_db),
    hours: BusinessHours = Depends(get_business_hours),
    now: datetime = Depends(get_now),
):
    """Free "HH:MM" slots for a day. Day off, past or closed days give []."""
    response.headers.update(NO_STORE_HEADERS)

    target_date = parse_date(date_value)
    slots = calculate_day_availability(db, target_date, hours, now)

    return AvailabilityResponse(date=target_date.isoformat(), slots=slots)


@router.get("/config", response_model=BusinessConfigResponse)
def get_business_config(hours: BusinessHours = Depends(get_business_hours)):
    return BusinessConfigResponse(
        open_hour=hours.open_hour,
        close_hour=hours.close_hour,
        slot_minutes=hours.slot_minutes,
        closed_weekday=hours.closed_weekday,
        slots=list(hours.slot_grid),
    )
