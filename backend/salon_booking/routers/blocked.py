# backend/salon_booking/routers/blocked.py
# Admin only. Blocking never removes bookings already on the slot.

from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from ..auth import require_admin
from ..database import get_db
from ..dependencies import get_business_hours
from ..schemas.blocked_slots import (
    BlockedSlotsBatch,
    BlockedSlotsResponse,
    BlockedSlotsUpdated,
)
from ..services.registry import block_slots, list_blocked, unblock_slots
from ..services.slots import BusinessHours
from ..services.validation import parse_date

router = APIRouter(
    prefix="/api/blocked",
    tags=["blocked"],
    dependencies=[Depends(require_admin)],
)


@router.get("", response_model=BlockedSlotsResponse)
def get_blocked(
    date_value: str | None = Query(None, alias="date"),
    db: Session = Depends(get_db),
):
    target_date = parse_date(date_value)
    return BlockedSlotsResponse(
        date=target_date.isoformat(),
        slots=list_blocked(db, target_date),
    )


@router.post("", response_model=BlockedSlotsUpdated)
def add_blocked(
    data: BlockedSlotsBatch,
    db: Session = Depends(get_db),
    hours: BusinessHours = Depends(get_business_hours),
):
    slots = block_slots(db, data.date, data.slots, hours)
    return BlockedSlotsUpdated(slots=slots)


@router.delete("", response_model=BlockedSlotsUpdated)
def remove_blocked(
    data: BlockedSlotsBatch,
    db: Session = Depends(get_db),
):
    slots = unblock_slots(db, data.date, data.slots)
    return BlockedSlotsUpdated(slots=slots)
