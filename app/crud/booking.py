from sqlalchemy.orm import Session
from typing import List, Optional

from app.models.booking import Booking, BookingStatus
from app.models.facility import Facility


def get_booking(db: Session, booking_id: int) -> Optional[Booking]:
    return db.query(Booking).filter(Booking.id == booking_id).first()


def get_bookings(
    db: Session,
    skip: int = 0,
    limit: int = 100,
    user_id: Optional[int] = None,
    court_id: Optional[int] = None,
    facility_ids: Optional[List[int]] = None,
    status: Optional[BookingStatus] = None,
) -> List[Booking]:
    query = db.query(Booking)

    if user_id:
        query = query.filter(Booking.user_id == user_id)
    if court_id:
        query = query.filter(Booking.court_id == court_id)
    if facility_ids is not None:
        query = query.filter(Booking.facility_id.in_(facility_ids))
    if status:
        query = query.filter(Booking.status == status)

    return (
        query.order_by(Booking.date.desc(), Booking.time_slot)
        .offset(skip)
        .limit(limit)
        .all()
    )


def get_owner_bookings(
    db: Session,
    owner_id: int,
    skip: int = 0,
    limit: int = 100,
    status: Optional[BookingStatus] = None,
) -> List[Booking]:
    facility_ids = [
        facility_id
        for (facility_id,) in db.query(Facility.id)
        .filter(Facility.owner_id == owner_id)
        .all()
    ]
    return get_bookings(
        db, skip=skip, limit=limit, facility_ids=facility_ids, status=status
    )
