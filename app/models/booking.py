from sqlalchemy import (
    Column,
    Integer,
    String,
    Date,
    DateTime,
    ForeignKey,
    Enum,
    Index,
    text,
)
from sqlalchemy.orm import relationship
from datetime import datetime
import enum

from app.database import Base


class BookingStatus(str, enum.Enum):
    PENDING = "pending"
    CONFIRMED = "confirmed"
    CANCELLED = "cancelled"
    COMPLETED = "completed"


class Booking(Base):
    __tablename__ = "bookings"
    __table_args__ = (
        # At most one confirmed booking per court, date and hour
        Index(
            "uq_bookings_confirmed_court_date_time",
            "court_id",
            "date",
            "time_slot",
            unique=True,
            postgresql_where=text("status = 'CONFIRMED'"),
            sqlite_where=text("status = 'CONFIRMED'"),
        ),
        {"extend_existing": True},
    )

    id = Column(Integer, primary_key=True, index=True)
    user_id = Column(Integer, ForeignKey("users.id"), nullable=False, index=True)
    facility_id = Column(
        Integer, ForeignKey("facilities.id", ondelete="SET NULL"), nullable=True
    )
    court_id = Column(
        Integer, ForeignKey("courts.id", ondelete="SET NULL"), nullable=True
    )
    date = Column(Date, nullable=False)
    time_slot = Column(String(5), nullable=False)  # "HH:MM"
    status = Column(
        Enum(BookingStatus), default=BookingStatus.CONFIRMED, nullable=False
    )
    created_at = Column(DateTime, default=datetime.utcnow)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)

    # Relationships
    user = relationship("app.models.user.User")
    facility = relationship("app.models.facility.Facility")
    court = relationship("app.models.court.Court")
