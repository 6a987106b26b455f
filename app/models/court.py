from sqlalchemy import (
    Column,
    Integer,
    String,
    Float,
    ForeignKey,
    DateTime,
    JSON,
    CheckConstraint,
)
from sqlalchemy.orm import relationship
from app.database import Base
from datetime import datetime


class Court(Base):
    __tablename__ = "courts"
    __table_args__ = (
        CheckConstraint("price_per_hour >= 0", name="ck_courts_price_non_negative"),
        {"extend_existing": True},
    )

    id = Column(Integer, primary_key=True, index=True)
    facility_id = Column(
        Integer,
        ForeignKey("facilities.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    name = Column(String, nullable=False)
    sport_type = Column(String, nullable=False)
    price_per_hour = Column(Float, nullable=False, default=0)
    # [{"day": "Monday", "open": "08:00", "close": "22:00"}, ...]
    operating_hours = Column(JSON, nullable=False, default=list)
    created_at = Column(DateTime, default=datetime.utcnow)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)

    # Relationships
    facility = relationship("app.models.facility.Facility", back_populates="courts")
    slots = relationship(
        "app.models.slot.Slot",
        back_populates="court",
        cascade="all, delete-orphan",
    )
