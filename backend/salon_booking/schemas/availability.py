# backend/salon_booking/schemas/availability.py

from pydantic import BaseModel, Field


class AvailabilityResponse(BaseModel):
    """Free slots of a day."""
    date: str
    slots: list[str] = Field(description='Free times, "HH:MM", in grid order')


class BusinessConfigResponse(BaseModel):
    """Business hours as seen by the booking page."""
    open_hour: int
    close_hour: int
    slot_minutes: int
    closed_weekday: int = Field(description="date.weekday() numbering: 0 = Monday, 6 = Sunday")
    slots: list[str] = Field(description="Full slot grid")
