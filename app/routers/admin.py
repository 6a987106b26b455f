from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.orm import Session
from typing import List, Optional
import logging

from app.crud import booking as booking_crud
from app.crud import facility as facility_crud
from app.crud import user as user_crud
from app.database import get_db
from app.models.booking import BookingStatus
from app.models.user import User, UserRole
from app.schemas.booking import Booking
from app.schemas.facility import FacilityApproval, FacilityResponse
from app.schemas.user import UserAdminUpdate, UserResponse
from app.services.auth import require_roles

# Every route here is admin-only
router = APIRouter(dependencies=[Depends(require_roles(UserRole.ADMIN))])

logger = logging.getLogger(__name__)


@router.get("/users", response_model=List[UserResponse])
def read_users(
    skip: int = 0,
    limit: int = 100,
    role: Optional[UserRole] = None,
    db: Session = Depends(get_db),
):
    return user_crud.get_users(db, skip=skip, limit=limit, role=role)


@router.get("/users/{user_id}", response_model=UserResponse)
def read_user(user_id: int, db: Session = Depends(get_db)):
    db_user = user_crud.get_user(db, user_id)
    if db_user is None:
        raise HTTPException(status_code=404, detail="User not found")
    return db_user


@router.put("/users/{user_id}", response_model=UserResponse)
def update_user(user_id: int, data: UserAdminUpdate, db: Session = Depends(get_db)):
    db_user = user_crud.admin_update_user(db, user_id, data)
    if db_user is None:
        raise HTTPException(status_code=404, detail="User not found")
    return db_user


@router.delete("/users/{user_id}")
def delete_user(
    user_id: int,
    db: Session = Depends(get_db),
    current_user: User = Depends(require_roles(UserRole.ADMIN)),
):
    if user_id == current_user.id:
        raise HTTPException(status_code=400, detail="Admins cannot delete themselves")
    if not user_crud.delete_user(db, user_id):
        raise HTTPException(status_code=404, detail="User not found")
    return {"message": "User removed"}


@router.get("/users/{user_id}/bookings", response_model=List[Booking])
def read_user_bookings(
    user_id: int,
    status: Optional[BookingStatus] = None,
    db: Session = Depends(get_db),
):
    return booking_crud.get_bookings(db, user_id=user_id, status=status)


@router.get("/facilities/pending", response_model=List[FacilityResponse])
def read_pending_facilities(db: Session = Depends(get_db)):
    return facility_crud.get_pending_facilities(db)


@router.put("/facilities/{facility_id}/approve", response_model=FacilityResponse)
def approve_facility(
    facility_id: int, approval: FacilityApproval, db: Session = Depends(get_db)
):
    if approval.comment:
        logger.info("Facility %s review comment: %s", facility_id, approval.comment)
    return facility_crud.set_facility_approval(db, facility_id, approval.approved)
