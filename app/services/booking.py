"""
Booking workflow: reserve a court slot for a user.
"""

from datetime import date
import logging

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from app.crud import court as court_crud
from app.crud import slot as slot_crud
from app.models.booking import Booking, BookingStatus
from app.models.user import User
from app.services.exceptions import ConflictError, NotFoundError

logger = logging.getLogger(__name__)

SLOT_UNAVAILABLE = "Selected time slot is not available or already booked."


def create_booking(
    db: Session,
    user: User,
    facility_id: int,
    court_id: int,
    booking_date: date,
    time_slot: str,
) -> Booking:
    """
    Book the slot of ``court_id`` at (``booking_date``, ``time_slot``).

    The slot flip, the booking row and the user's booking list are written in
    one transaction. The slot is flipped with a conditional update, so if two
    requests race for the same slot exactly one of them wins.

    Raises:
        NotFoundError: the court does not exist, is not part of the facility,
            or the facility is not approved
        ConflictError: no such slot, or it is already booked
    """
    try:
        court = court_crud.lock_court(db, court_id)
        if (
            not court
            or court.facility_id != facility_id
            or not court.facility.approved
        ):
            raise NotFoundError("Court not found")

        slot = slot_crud.find_slot(db, court.id, booking_date, time_slot)
        if not slot or slot.is_booked:
            raise ConflictError(SLOT_UNAVAILABLE)

        if not slot_crud.mark_slot_booked(db, slot.id, user.id):
            raise ConflictError(SLOT_UNAVAILABLE)

        booking = Booking(
            user_id=user.id,
            facility_id=court.facility_id,
            court_id=court.id,
            date=booking_date,
            time_slot=time_slot,
            status=BookingStatus.CONFIRMED,
        )
        db.add(booking)
        user.bookings.append(booking)
        db.commit()
    except IntegrityError:
        db.rollback()
        logger.warning(
            "Booking rejected by constraint: court=%s date=%s time=%s user=%s",
            court_id,
            booking_date,
            time_slot,
            user.id,
        )
        raise ConflictError(SLOT_UNAVAILABLE)
    except (NotFoundError, ConflictError):
        db.rollback()
        logger.warning(
            "Booking rejected: court=%s date=%s time=%s user=%s",
            court_id,
            booking_date,
            time_slot,
            user.id,
        )
        raise
    except Exception:
        db.rollback()
        raise

    db.refresh(booking)
    logger.info(
        "Booking %s confirmed: user=%s court=%s date=%s time=%s",
        booking.id,
        user.id,
        court_id,
        booking_date,
        time_slot,
    )
    return booking
