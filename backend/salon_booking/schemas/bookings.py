# backend/salon_booking/schemas/bookings.py

from datetime import date, time
from typing import Optional
from pydantic import BaseModel, field_validator

from ..services.slots.config import normalize_time


class BookingCreate(BaseModel):
    # All optional: presence is checked by the booking service ("missing data")
    nombre: Optional[str] = None
    apellido: Optional[str] = None
    telefono: Optional[str] = None
    email: Optional[str] = None
    date: Optional[str] = None
    time: Optional[str] = None

    @field_validator("*", mode="before")
    @classmethod
    def strip_text(cls, v):
        if isinstance(v, str):
            return v.strip()
        if isinstance(v, (int, float)):
            return str(v)
        return v


class BookingRead(BaseModel):
    id: int

    nombre: str
    apellido: str
    telefono: str
    email: str

    date: str  # YYYY-MM-DD
    time: str  # HH:MM

    model_config = {"from_attributes": True}

    @field_validator("date", mode="before")
    @classmethod
    def format_date(cls, v):
        if isinstance(v, date):
            return v.isoformat()
        return v

    @field_validator("time", mode="before")
    @classmethod
    def format_time(cls, v):
        if isinstance(v, (time, str)):
            return normalize_time(v)
        return v


class BookingCreatedResponse(BaseModel):
    ok: bool = True
    booking: BookingRead


class BookingDeletedResponse(BaseModel):
    ok: bool = True
    deleted: BookingRead
