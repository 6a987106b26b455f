from sqlalchemy import (
    Column,
    Integer,
    String,
    Date,
    Boolean,
    ForeignKey,
    UniqueConstraint,
)
from sqlalchemy.orm import relationship
from app.database import Base


class Slot(Base):
    __tablename__ = "slots"
    __table_args__ = (
        # A court never holds two slots for the same date and hour
        UniqueConstraint("court_id", "date", "time", name="uq_slots_court_date_time"),
        {"extend_existing": True},
    )

    id = Column(Integer, primary_key=True, index=True)
    court_id = Column(
        Integer, ForeignKey("courts.id", ondelete="CASCADE"), nullable=False, index=True
    )
    date = Column(Date, nullable=False)
    time = Column(String(5), nullable=False)  # "HH:MM"
    is_booked = Column(Boolean, default=False, nullable=False)
    booked_by_id = Column(
        Integer, ForeignKey("users.id", ondelete="SET NULL"), nullable=True
    )

    # Relationships
    court = relationship("app.models.court.Court", back_populates="slots")
    booked_by = relationship("app.models.user.User")

    @property
    def key(self):
        return (self.date, self.time)
