"""
Persistence of court slots.

Slot rows are keyed uniquely by (court_id, date, time). The helpers here only
flush; the calling operation owns the transaction and commits once.
"""

from sqlalchemy.orm import Session
from datetime import date
from typing import Iterable, List, Optional
import logging

from app.models.court import Court
from app.models.slot import Slot
from app.services.exceptions import ConflictError, NotFoundError, ValidationError
from app.services.slot_generator import SlotCandidate, generate_slots_for_range

logger = logging.getLogger(__name__)


def get_slot(db: Session, court_id: int, slot_id: int) -> Optional[Slot]:
    return (
        db.query(Slot).filter(Slot.id == slot_id, Slot.court_id == court_id).first()
    )


def get_slots(
    db: Session,
    court_id: int,
    slot_date: Optional[date] = None,
    only_available: bool = False,
) -> List[Slot]:
    query = db.query(Slot).filter(Slot.court_id == court_id)
    if slot_date:
        query = query.filter(Slot.date == slot_date)
    if only_available:
        query = query.filter(Slot.is_booked.is_(False))
    return query.order_by(Slot.date, Slot.time).all()


def find_slot(db: Session, court_id: int, slot_date: date, time: str) -> Optional[Slot]:
    return (
        db.query(Slot)
        .filter(Slot.court_id == court_id, Slot.date == slot_date, Slot.time == time)
        .first()
    )


def existing_keys(db: Session, court_id: int, booked_only: bool = False) -> set:
    query = db.query(Slot.date, Slot.time).filter(Slot.court_id == court_id)
    if booked_only:
        query = query.filter(Slot.is_booked.is_(True))
    return {(row.date, row.time) for row in query.all()}


def insert_candidates(
    db: Session, court_id: int, candidates: Iterable[SlotCandidate], skip_keys: set
) -> List[Slot]:
    """Insert candidates whose (date, time) is not in ``skip_keys``."""
    seen = set(skip_keys)
    created = []
    for candidate in candidates:
        if candidate.key in seen:
            continue
        seen.add(candidate.key)
        slot = Slot(
            court_id=court_id,
            date=candidate.date,
            time=candidate.time,
            is_booked=False,
        )
        db.add(slot)
        created.append(slot)
    db.flush()
    return created


def regenerate_court_slots(
    db: Session, court: Court, start_date: date, end_date: date
) -> List[Slot]:
    """
    Rebuild a court's slots from its operating hours for the given range.

    Every unbooked slot is dropped and replaced by the freshly generated ones.
    Booked slots are always kept, even when they fall outside the new hours.

    Returns:
        The newly inserted slots
    """
    db.query(Slot).filter(
        Slot.court_id == court.id, Slot.is_booked.is_(False)
    ).delete(synchronize_session="fetch")
    db.flush()

    booked = existing_keys(db, court.id, booked_only=True)
    candidates = generate_slots_for_range(start_date, end_date, court.operating_hours)
    created = insert_candidates(db, court.id, candidates, booked)
    db.expire(court, ["slots"])

    logger.info(
        "Regenerated slots for court %s (%s): %s new, %s booked kept",
        court.id,
        court.name,
        len(created),
        len(booked),
    )
    return created


def add_slot_window(
    db: Session, court: Court, candidates: Iterable[SlotCandidate]
) -> List[Slot]:
    created = insert_candidates(db, court.id, candidates, existing_keys(db, court.id))
    if not created:
        raise ValidationError(
            "No new unique time slots to add for the selected date and time range."
        )
    db.expire(court, ["slots"])
    return created


def remove_slot(db: Session, court: Court, slot_id: int) -> None:
    slot = get_slot(db, court.id, slot_id)
    if not slot:
        raise NotFoundError("Time slot not found.")
    if slot.is_booked:
        raise ConflictError("Cannot remove a booked time slot; cancel the booking first.")
    db.delete(slot)
    db.flush()


def mark_slot_booked(db: Session, slot_id: int, user_id: int) -> bool:
    """
    Flip a slot to booked only if it is still unbooked.

    The check and the write happen in a single UPDATE, so two requests that
    both read the slot as free cannot both succeed.

    Returns:
        True if this call booked the slot
    """
    updated = (
        db.query(Slot)
        .filter(Slot.id == slot_id, Slot.is_booked.is_(False))
        .update(
            {Slot.is_booked: True, Slot.booked_by_id: user_id},
            synchronize_session=False,
        )
    )
    return updated == 1


def release_slot(db: Session, court_id: int, slot_date: date, time: str) -> bool:
    updated = (
        db.query(Slot)
        .filter(
            Slot.court_id == court_id,
            Slot.date == slot_date,
            Slot.time == time,
            Slot.is_booked.is_(True),
        )
        .update(
            {Slot.is_booked: False, Slot.booked_by_id: None},
            synchronize_session=False,
        )
    )
    return updated == 1
