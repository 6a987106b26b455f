from sqlalchemy.orm import Session
import logging

from app.crud import booking as booking_crud
from app.crud import court as court_crud
from app.crud import slot as slot_crud
from app.models.booking import Booking, BookingStatus
from app.models.user import User
from app.services.exceptions import ConflictError, NotFoundError
from app.utils.permissions import ensure_can_cancel_booking

logger = logging.getLogger(__name__)


def cancel_booking(db: Session, booking_id: int, actor: User) -> Booking:
    """
    Cancel a booking and give its slot back.

    Args:
        db: database session
        booking_id: booking to cancel
        actor: user asking for the cancellation (the booking's user, the
            facility owner or an admin)

    Returns:
        The cancelled booking

    Raises:
        NotFoundError: unknown booking
        ForbiddenError: actor may not cancel it
        ConflictError: the booking was already cancelled
    """
    booking = booking_crud.get_booking(db, booking_id)
    if not booking:
        raise NotFoundError("Booking not found")

    ensure_can_cancel_booking(actor, booking)

    try:
        # Serialize with other writers of this court's slots
        if booking.court_id is not None:
            court_crud.lock_court(db, booking.court_id)
        db.refresh(booking)

        if booking.status == BookingStatus.CANCELLED:
            raise ConflictError("Booking already cancelled")

        released = False
        if booking.court_id is not None:
            released = slot_crud.release_slot(
                db, booking.court_id, booking.date, booking.time_slot
            )
        if not released:
            # The slot may have been removed with its court
            logger.warning(
                "No booked slot found for booking %s (court=%s date=%s time=%s)",
                booking.id,
                booking.court_id,
                booking.date,
                booking.time_slot,
            )

        booking.status = BookingStatus.CANCELLED
        if booking.user and booking in booking.user.bookings:
            booking.user.bookings.remove(booking)
        db.commit()
    except Exception:
        db.rollback()
        raise

    db.refresh(booking)
    logger.info(
        "Booking %s cancelled by user %s (slot released: %s)",
        booking.id,
        actor.id,
        released,
    )
    return booking
