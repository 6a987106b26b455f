from fastapi import APIRouter, Depends, HTTPException, Query, status
from sqlalchemy.orm import Session
from datetime import date
from typing import List, Optional
import logging

from app.config import settings
from app.crud import court as crud
from app.crud import facility as facility_crud
from app.crud import slot as slot_crud
from app.database import get_db
from app.models.user import User, UserRole
from app.schemas.court import (
    CourtCreate,
    CourtResponse,
    CourtUpdate,
    SlotResponse,
    SlotWindowCreate,
    SlotWindowResponse,
)
from app.services.auth import require_roles
from app.services.slot_generator import check_window_range, generate_window_slots
from app.utils.permissions import ensure_can_manage_courts

router = APIRouter()

logger = logging.getLogger(__name__)

facility_owner = require_roles(UserRole.FACILITY_OWNER)


def _get_owned_court(db: Session, court_id: int, current_user: User, lock: bool = False):
    db_court = crud.lock_court(db, court_id) if lock else crud.get_court(db, court_id)
    if db_court is None:
        raise HTTPException(status_code=404, detail="Court not found")
    ensure_can_manage_courts(current_user, db_court.facility)
    return db_court


@router.post("/", response_model=CourtResponse, status_code=201)
def create_court(
    court: CourtCreate,
    db: Session = Depends(get_db),
    current_user: User = Depends(facility_owner),
):
    facility = facility_crud.get_facility(db, court.facility_id)
    if facility is None:
        raise HTTPException(status_code=404, detail="Facility not found")
    ensure_can_manage_courts(current_user, facility)

    db_court = crud.create_court(db=db, court=court)
    logger.info("Court %s created for facility %s", db_court.id, facility.id)
    return db_court


@router.get("/{court_id}", response_model=CourtResponse)
def read_court(court_id: int, db: Session = Depends(get_db)):
    db_court = crud.get_court(db, court_id=court_id)
    if db_court is None:
        raise HTTPException(status_code=404, detail="Court not found")
    return db_court


@router.put("/{court_id}", response_model=CourtResponse)
def update_court(
    court_id: int,
    court: CourtUpdate,
    db: Session = Depends(get_db),
    current_user: User = Depends(facility_owner),
):
    _get_owned_court(db, court_id, current_user)
    return crud.update_court(db=db, court_id=court_id, court=court)


@router.delete("/{court_id}")
def delete_court(
    court_id: int,
    db: Session = Depends(get_db),
    current_user: User = Depends(facility_owner),
):
    _get_owned_court(db, court_id, current_user)
    crud.delete_court(db=db, court_id=court_id)
    return {"message": "Court removed"}


@router.get("/{court_id}/slots", response_model=List[SlotResponse])
def read_court_slots(
    court_id: int,
    slot_date: Optional[date] = Query(None, alias="date"),
    only_available: bool = Query(False, alias="available"),
    db: Session = Depends(get_db),
):
    if crud.get_court(db, court_id) is None:
        raise HTTPException(status_code=404, detail="Court not found")
    return slot_crud.get_slots(
        db, court_id, slot_date=slot_date, only_available=only_available
    )


@router.post(
    "/{court_id}/slots",
    response_model=SlotWindowResponse,
    status_code=status.HTTP_201_CREATED,
)
def add_time_slots(
    court_id: int,
    window: SlotWindowCreate,
    db: Session = Depends(get_db),
    current_user: User = Depends(facility_owner),
):
    """Add hourly slots for every day of a date range within a time window."""
    try:
        db_court = _get_owned_court(db, court_id, current_user, lock=True)
        check_window_range(
            window.start_date, window.end_date, date.today(), settings.SLOT_HORIZON_DAYS
        )
        candidates = generate_window_slots(
            window.start_date, window.end_date, window.start_time, window.end_time
        )
        created = slot_crud.add_slot_window(db, db_court, candidates)
        db.commit()
    except Exception:
        db.rollback()
        raise

    for slot in created:
        db.refresh(slot)
    logger.info("Added %s slots to court %s", len(created), court_id)
    return SlotWindowResponse(
        message=f"Time slots added successfully for {len(created)} individual slots.",
        slots=[SlotResponse.model_validate(slot) for slot in created],
    )


@router.delete("/{court_id}/slots/{slot_id}")
def remove_time_slot(
    court_id: int,
    slot_id: int,
    db: Session = Depends(get_db),
    current_user: User = Depends(facility_owner),
):
    try:
        db_court = _get_owned_court(db, court_id, current_user, lock=True)
        slot_crud.remove_slot(db, db_court, slot_id)
        db.commit()
    except Exception:
        db.rollback()
        raise
    return {"message": "Time slot removed successfully"}
