from sqlalchemy import (
    Column,
    Integer,
    String,
    Float,
    ForeignKey,
    Boolean,
    DateTime,
    JSON,
)
from sqlalchemy.orm import relationship
from app.database import Base
from datetime import datetime


class Facility(Base):
    __tablename__ = "facilities"
    __table_args__ = {"extend_existing": True}

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String, nullable=False)
    description = Column(String, nullable=False)
    address = Column(String, nullable=False)
    latitude = Column(Float, nullable=False)
    longitude = Column(Float, nullable=False)
    sports = Column(JSON, nullable=False, default=list)
    amenities = Column(JSON, nullable=False, default=list)
    photos = Column(JSON, nullable=False, default=list)
    primary_photo = Column(String, nullable=True)
    owner_id = Column(Integer, ForeignKey("users.id"), nullable=False, index=True)
    # Only admins flip this; public endpoints show approved facilities only
    approved = Column(Boolean, default=False, nullable=False, index=True)
    created_at = Column(DateTime, default=datetime.utcnow)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)

    # Relationships
    owner = relationship("app.models.user.User", back_populates="facilities")
    courts = relationship(
        "app.models.court.Court",
        back_populates="facility",
        cascade="all, delete-orphan",
    )
    reviews = relationship(
        "app.models.review.Review",
        back_populates="facility",
        cascade="all, delete-orphan",
    )
