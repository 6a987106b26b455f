from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session
from typing import List, Optional

from app.crud import booking as booking_crud
from app.crud import user as crud
from app.database import get_db
from app.models.booking import BookingStatus
from app.models.user import User
from app.schemas.booking import Booking
from app.schemas.user import UserProfileUpdate, UserResponse
from app.services.auth import get_current_user, get_password_hash

router = APIRouter()


@router.get("/profile", response_model=UserResponse)
def read_profile(current_user: User = Depends(get_current_user)):
    return current_user


@router.put("/profile", response_model=UserResponse)
def update_profile(
    profile: UserProfileUpdate,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    hashed_password = get_password_hash(profile.password) if profile.password else None
    return crud.update_profile(db, current_user, profile, hashed_password)


@router.get("/bookings", response_model=List[Booking])
def read_my_bookings(
    status: Optional[BookingStatus] = None,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    return booking_crud.get_bookings(db, user_id=current_user.id, status=status)
