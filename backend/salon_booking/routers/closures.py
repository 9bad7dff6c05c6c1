# backend/salon_booking/routers/closures.py
# GET is public (the booking page greys out closed days), writes are admin only

from datetime import datetime
from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from ..auth import require_admin
from ..database import get_db
from ..dependencies import get_now
from ..schemas.closures import (
    ClosureAddedResponse,
    ClosureCreate,
    ClosureRead,
    ClosureRemovedResponse,
)
from ..services.registry import add_closure, list_closures, remove_closure

router = APIRouter(prefix="/api/closures", tags=["closures"])


@router.get("", response_model=list[str])
def get_closures(db: Session = Depends(get_db)):
    return list_closures(db)


@router.post("", response_model=ClosureAddedResponse)
def close_day(
    data: ClosureCreate,
    db: Session = Depends(get_db),
    now: datetime = Depends(get_now),
    _admin: str = Depends(require_admin),
):
    added = add_closure(db, data.date, now.date())
    return ClosureAddedResponse(added=added)


@router.delete("/{date}", response_model=ClosureRemovedResponse)
def reopen_day(
    date: str,
    db: Session = Depends(get_db),
    _admin: str = Depends(require_admin),
):
    closure = remove_closure(db, date)
    return ClosureRemovedResponse(removed=ClosureRead.model_validate(closure))
