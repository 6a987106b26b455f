from pydantic import BaseModel, Field, field_validator
from typing import List, Optional
from datetime import datetime


class Location(BaseModel):
    address: str = Field(..., min_length=1)
    # [longitude, latitude]
    coordinates: List[float] = Field(..., min_length=2, max_length=2)

    @field_validator("coordinates")
    @classmethod
    def coordinates_in_range(cls, value: List[float]) -> List[float]:
        longitude, latitude = value
        if not -180 <= longitude <= 180 or not -90 <= latitude <= 90:
            raise ValueError("coordinates must be [longitude, latitude]")
        return value


def clean_tags(values: Optional[List[str]]) -> Optional[List[str]]:
    if values is None:
        return None
    return [value.strip() for value in values if value and value.strip()]


class FacilityBase(BaseModel):
    name: str = Field(..., min_length=1)
    description: str = Field(..., min_length=1)
    location: Location
    sports: List[str] = Field(..., min_length=1)
    amenities: List[str] = []
    photos: List[str] = []
    primary_photo: Optional[str] = None

    @field_validator("sports", "amenities")
    @classmethod
    def strip_tags(cls, value: List[str]) -> List[str]:
        return clean_tags(value)


class FacilityCreate(FacilityBase):
    pass


class FacilityUpdate(BaseModel):
    name: Optional[str] = None
    description: Optional[str] = None
    location: Optional[Location] = None
    sports: Optional[List[str]] = None
    amenities: Optional[List[str]] = None
    photos: Optional[List[str]] = None
    primary_photo: Optional[str] = None

    @field_validator("sports", "amenities")
    @classmethod
    def strip_tags(cls, value: Optional[List[str]]) -> Optional[List[str]]:
        return clean_tags(value)


class FacilityApproval(BaseModel):
    approved: bool
    comment: Optional[str] = None


class CourtSummary(BaseModel):
    id: int
    name: str
    sport_type: str
    price_per_hour: float

    class Config:
        from_attributes = True


class FacilityResponse(BaseModel):
    id: int
    name: str
    description: str
    address: str
    latitude: float
    longitude: float
    sports: List[str]
    amenities: List[str]
    photos: List[str]
    primary_photo: Optional[str] = None
    owner_id: int
    approved: bool
    courts: List[CourtSummary] = []
    created_at: datetime

    class Config:
        from_attributes = True
