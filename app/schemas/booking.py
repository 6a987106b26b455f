from pydantic import BaseModel, field_validator
from datetime import date, datetime
from typing import Optional

from app.models.booking import BookingStatus
from app.schemas.court import time_label


class BookingCreate(BaseModel):
    facility_id: int
    court_id: int
    date: date
    time_slot: str  # "HH:MM"

    @field_validator("time_slot")
    @classmethod
    def time_slot_must_be_hh_mm(cls, value: str) -> str:
        return time_label(value)


class BookingInDB(BaseModel):
    id: int
    user_id: int
    facility_id: Optional[int] = None
    court_id: Optional[int] = None
    date: date
    time_slot: str
    status: BookingStatus
    created_at: datetime
    updated_at: datetime

    class Config:
        from_attributes = True


class Booking(BookingInDB):
    pass
