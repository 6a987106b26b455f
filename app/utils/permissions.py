"""
Ownership and role checks shared by the routers and workflows.

Every check answers one question: may ``actor`` perform ``action`` on a given
resource. Routers call ``ensure_*`` and let the ForbiddenError propagate.
"""

from app.models.booking import Booking
from app.models.facility import Facility
from app.models.user import User, UserRole
from app.services.exceptions import ForbiddenError


def is_admin(actor: User) -> bool:
    return actor.role == UserRole.ADMIN


def owns_facility(actor: User, facility: Facility) -> bool:
    return facility is not None and facility.owner_id == actor.id


def can_manage_facility(actor: User, facility: Facility) -> bool:
    """Update or delete a facility: its owner or an admin."""
    return is_admin(actor) or owns_facility(actor, facility)


def can_manage_courts(actor: User, facility: Facility) -> bool:
    """Create courts and edit courts or slots: only the facility owner."""
    return owns_facility(actor, facility)


def can_cancel_booking(actor: User, booking: Booking) -> bool:
    """The booking's user, the owner of the booked facility, or an admin."""
    if is_admin(actor) or booking.user_id == actor.id:
        return True
    return actor.role == UserRole.FACILITY_OWNER and owns_facility(
        actor, booking.facility
    )


def ensure_can_manage_facility(actor: User, facility: Facility) -> None:
    if not can_manage_facility(actor, facility):
        raise ForbiddenError("Not authorized to manage this facility")


def ensure_can_manage_courts(actor: User, facility: Facility) -> None:
    if not can_manage_courts(actor, facility):
        raise ForbiddenError("Not authorized to manage courts of this facility")


def ensure_can_cancel_booking(actor: User, booking: Booking) -> None:
    if not can_cancel_booking(actor, booking):
        raise ForbiddenError("Not authorized to cancel this booking")
