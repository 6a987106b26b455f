from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session
from typing import List, Optional

from app.crud import booking as crud
from app.database import get_db
from app.models.booking import BookingStatus
from app.models.user import User, UserRole
from app.schemas.booking import Booking, BookingCreate
from app.services import booking as booking_service
from app.services.auth import require_roles
from app.utils.booking_cancellation import cancel_booking as cancel_booking_workflow
from app.utils.permissions import is_admin

router = APIRouter()


@router.post("/", response_model=Booking, status_code=201)
def create_booking(
    booking: BookingCreate,
    db: Session = Depends(get_db),
    current_user: User = Depends(require_roles(UserRole.USER)),
):
    return booking_service.create_booking(
        db,
        user=current_user,
        facility_id=booking.facility_id,
        court_id=booking.court_id,
        booking_date=booking.date,
        time_slot=booking.time_slot,
    )


@router.get("/my-bookings", response_model=List[Booking])
def read_my_bookings(
    status: Optional[BookingStatus] = None,
    db: Session = Depends(get_db),
    current_user: User = Depends(require_roles(UserRole.USER)),
):
    return crud.get_bookings(db, user_id=current_user.id, status=status)


@router.get("/", response_model=List[Booking])
def read_bookings(
    skip: int = 0,
    limit: int = 100,
    status: Optional[BookingStatus] = None,
    db: Session = Depends(get_db),
    current_user: User = Depends(
        require_roles(UserRole.ADMIN, UserRole.FACILITY_OWNER)
    ),
):
    """Admins see every booking; owners see the bookings of their facilities."""
    if is_admin(current_user):
        return crud.get_bookings(db, skip=skip, limit=limit, status=status)
    return crud.get_owner_bookings(
        db, current_user.id, skip=skip, limit=limit, status=status
    )


@router.get("/owner", response_model=List[Booking])
def read_owner_bookings(
    status: Optional[BookingStatus] = None,
    db: Session = Depends(get_db),
    current_user: User = Depends(require_roles(UserRole.FACILITY_OWNER)),
):
    return crud.get_owner_bookings(db, current_user.id, status=status)


@router.put("/{booking_id}/cancel", response_model=Booking)
def cancel_booking(
    booking_id: int,
    db: Session = Depends(get_db),
    current_user: User = Depends(
        require_roles(UserRole.USER, UserRole.FACILITY_OWNER, UserRole.ADMIN)
    ),
):
    return cancel_booking_workflow(db, booking_id, current_user)
