from fastapi import APIRouter, Depends, HTTPException, Response
from sqlalchemy.orm import Session
from typing import List, Optional

from app.crud import court as court_crud
from app.crud import facility as crud
from app.crud import review as review_crud
from app.database import get_db
from app.models.user import User, UserRole
from app.schemas.court import CourtResponse
from app.schemas.facility import FacilityCreate, FacilityResponse, FacilityUpdate
from app.schemas.review import ReviewCreate, ReviewResponse
from app.services.auth import get_current_user, require_roles
from app.utils.permissions import ensure_can_manage_facility, is_admin

router = APIRouter()

owner_or_admin = require_roles(UserRole.FACILITY_OWNER, UserRole.ADMIN)


@router.get("/", response_model=List[FacilityResponse])
def read_facilities(
    skip: int = 0,
    limit: int = 100,
    sport: Optional[str] = None,
    db: Session = Depends(get_db),
):
    """Public listing; only approved facilities."""
    return crud.get_facilities(db, skip=skip, limit=limit, sport=sport)


@router.get("/owner/{owner_id}", response_model=List[FacilityResponse])
def read_owner_facilities(
    owner_id: int,
    db: Session = Depends(get_db),
    current_user: User = Depends(owner_or_admin),
):
    """All facilities of an owner, approved or not."""
    if not is_admin(current_user) and current_user.id != owner_id:
        raise HTTPException(
            status_code=403, detail="Not authorized to view other owner's facilities"
        )
    return crud.get_facilities_by_owner(db, owner_id)


@router.get("/{facility_id}", response_model=FacilityResponse)
def read_facility(facility_id: int, db: Session = Depends(get_db)):
    db_facility = crud.get_approved_facility(db, facility_id)
    if db_facility is None:
        raise HTTPException(
            status_code=404, detail="Facility not found or not approved"
        )
    return db_facility


@router.post("/", response_model=FacilityResponse, status_code=201)
def create_facility(
    facility: FacilityCreate,
    db: Session = Depends(get_db),
    current_user: User = Depends(owner_or_admin),
):
    return crud.create_facility(db, facility, owner_id=current_user.id)


@router.put("/{facility_id}", response_model=FacilityResponse)
def update_facility(
    facility_id: int,
    facility: FacilityUpdate,
    db: Session = Depends(get_db),
    current_user: User = Depends(owner_or_admin),
):
    db_facility = crud.get_facility(db, facility_id)
    if db_facility is None:
        raise HTTPException(status_code=404, detail="Facility not found")
    ensure_can_manage_facility(current_user, db_facility)
    return crud.update_facility(db, facility_id, facility)


@router.delete("/{facility_id}")
def delete_facility(
    facility_id: int,
    db: Session = Depends(get_db),
    current_user: User = Depends(owner_or_admin),
):
    db_facility = crud.get_facility(db, facility_id)
    if db_facility is None:
        raise HTTPException(status_code=404, detail="Facility not found")
    ensure_can_manage_facility(current_user, db_facility)
    crud.delete_facility(db, facility_id)
    return {"message": "Facility and all associated courts removed successfully"}


@router.get("/{facility_id}/courts", response_model=List[CourtResponse])
def read_facility_courts(facility_id: int, db: Session = Depends(get_db)):
    if crud.get_approved_facility(db, facility_id) is None:
        raise HTTPException(
            status_code=404, detail="Facility not found or not approved"
        )
    return court_crud.get_courts_by_facility(db, facility_id)


@router.post("/{facility_id}/reviews", response_model=ReviewResponse)
def rate_facility(
    facility_id: int,
    review: ReviewCreate,
    response: Response,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    if crud.get_approved_facility(db, facility_id) is None:
        raise HTTPException(
            status_code=404, detail="Facility not found or not approved."
        )
    db_review, created = review_crud.upsert_review(
        db, facility_id, current_user.id, review
    )
    response.status_code = 201 if created else 200
    return db_review


@router.get("/{facility_id}/reviews", response_model=List[ReviewResponse])
def read_facility_reviews(facility_id: int, db: Session = Depends(get_db)):
    return review_crud.get_reviews_for_facility(db, facility_id)
