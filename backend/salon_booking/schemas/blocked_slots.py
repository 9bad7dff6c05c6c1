# backend/salon_booking/schemas/blocked_slots.py

from typing import Optional
from pydantic import BaseModel


class BlockedSlotsBatch(BaseModel):
    date: Optional[str] = None
    slots: list[str] = []


class BlockedSlotsResponse(BaseModel):
    date: str
    slots: list[str]


class BlockedSlotsUpdated(BaseModel):
    ok: bool = True
    slots: list[str]
