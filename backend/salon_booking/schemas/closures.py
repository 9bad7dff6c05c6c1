# backend/salon_booking/schemas/closures.py

from datetime import date
from typing import Optional
from pydantic import BaseModel, field_validator


class ClosureCreate(BaseModel):
    date: Optional[str] = None


class ClosureRead(BaseModel):
    id: int
    date: str

    model_config = {"from_attributes": True}

    @field_validator("date", mode="before")
    @classmethod
    def format_date(cls, v):
        if isinstance(v, date):
            return v.isoformat()
        return v


class ClosureAddedResponse(BaseModel):
    ok: bool = True
    added: bool


class ClosureRemovedResponse(BaseModel):
    ok: bool = True
    removed: ClosureRead
