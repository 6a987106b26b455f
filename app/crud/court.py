from sqlalchemy.orm import Session
from datetime import date
from typing import List, Optional
import logging

from app.config import settings
from app.crud import slot as slot_crud
from app.models.court import Court
from app.schemas.court import CourtCreate, CourtUpdate
from app.services.slot_generator import horizon_range

logger = logging.getLogger(__name__)


def get_court(db: Session, court_id: int) -> Optional[Court]:
    return db.query(Court).filter(Court.id == court_id).first()


def lock_court(db: Session, court_id: int) -> Optional[Court]:
    """
    Load a court holding a row lock until the transaction ends.

    Every writer of a court's slots goes through here first, so concurrent
    bookings, cancellations and regenerations on one court run one at a time.
    """
    return (
        db.query(Court)
        .filter(Court.id == court_id)
        .with_for_update(nowait=False)
        .populate_existing()
        .first()
    )


def get_courts_by_facility(db: Session, facility_id: int) -> List[Court]:
    return (
        db.query(Court)
        .filter(Court.facility_id == facility_id)
        .order_by(Court.id)
        .all()
    )


def create_court(db: Session, court: CourtCreate, today: date = None) -> Court:
    """Create a court and generate its slot horizon from the operating hours."""
    db_court = Court(**court.model_dump())
    db.add(db_court)
    try:
        db.flush()
        start, end = horizon_range(today or date.today(), settings.SLOT_HORIZON_DAYS)
        slot_crud.regenerate_court_slots(db, db_court, start, end)
        db.commit()
    except Exception:
        db.rollback()
        raise
    db.refresh(db_court)
    return db_court


def update_court(
    db: Session, court_id: int, court: CourtUpdate, today: date = None
) -> Optional[Court]:
    """
    Apply a partial update. A change of operating hours regenerates the
    court's slots for the horizon; booked slots are preserved.
    """
    db_court = lock_court(db, court_id)
    if not db_court:
        return None

    update_data = court.model_dump(exclude_unset=True)
    operating_hours = update_data.pop("operating_hours", None)
    for field, value in update_data.items():
        if value is not None:
            setattr(db_court, field, value)

    try:
        if operating_hours is not None:
            db_court.operating_hours = operating_hours
            db.flush()
            start, end = horizon_range(
                today or date.today(), settings.SLOT_HORIZON_DAYS
            )
            slot_crud.regenerate_court_slots(db, db_court, start, end)
        db.commit()
    except Exception:
        db.rollback()
        raise
    db.refresh(db_court)
    return db_court


def delete_court(db: Session, court_id: int) -> bool:
    db_court = get_court(db, court_id)
    if not db_court:
        return False

    db.delete(db_court)
    db.commit()
    logger.info("Court %s deleted", court_id)
    return True
