from pydantic import BaseModel, Field, field_validator, model_validator
from typing import List, Optional
from datetime import date, datetime

from app.services.exceptions import ValidationError
from app.utils.time_utils import WEEKDAY_NAMES, normalize_time_label


def time_label(value: str) -> str:
    try:
        return normalize_time_label(value)
    except ValidationError as exc:
        raise ValueError(exc.detail)


class OperatingHours(BaseModel):
    day: str  # "Monday" ... "Sunday"
    open: str  # "HH:MM"
    close: str  # "HH:MM"

    @field_validator("day")
    @classmethod
    def day_must_be_weekday(cls, value: str) -> str:
        if value not in WEEKDAY_NAMES:
            raise ValueError(f"day must be one of {', '.join(WEEKDAY_NAMES)}")
        return value

    @field_validator("open", "close")
    @classmethod
    def time_must_be_hh_mm(cls, value: str) -> str:
        return time_label(value)


class CourtBase(BaseModel):
    name: str = Field(..., min_length=1)
    sport_type: str = Field(..., min_length=1)
    price_per_hour: float = Field(..., ge=0)
    operating_hours: List[OperatingHours] = []


class CourtCreate(CourtBase):
    facility_id: int


class CourtUpdate(BaseModel):
    name: Optional[str] = None
    sport_type: Optional[str] = None
    price_per_hour: Optional[float] = Field(default=None, ge=0)
    operating_hours: Optional[List[OperatingHours]] = None


class CourtInDB(CourtBase):
    id: int
    facility_id: int
    created_at: datetime

    class Config:
        from_attributes = True


class CourtResponse(CourtInDB):
    pass


class SlotResponse(BaseModel):
    id: int
    court_id: int
    date: date
    time: str
    is_booked: bool
    booked_by_id: Optional[int] = None

    class Config:
        from_attributes = True


class SlotWindowCreate(BaseModel):
    start_date: date
    end_date: date
    start_time: str
    end_time: str

    @field_validator("start_time", "end_time")
    @classmethod
    def time_must_be_hh_mm(cls, value: str) -> str:
        return time_label(value)

    @model_validator(mode="after")
    def dates_in_order(self):
        if self.start_date > self.end_date:
            raise ValueError("Invalid start or end date provided.")
        return self


class SlotWindowResponse(BaseModel):
    message: str
    slots: List[SlotResponse]
