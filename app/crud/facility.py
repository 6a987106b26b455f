from sqlalchemy.orm import Session
from typing import List, Optional
import logging

from app.models.facility import Facility
from app.schemas.facility import FacilityCreate, FacilityUpdate
from app.services.exceptions import NotFoundError

logger = logging.getLogger(__name__)


def get_facility(db: Session, facility_id: int) -> Optional[Facility]:
    return db.query(Facility).filter(Facility.id == facility_id).first()


def get_approved_facility(db: Session, facility_id: int) -> Optional[Facility]:
    return (
        db.query(Facility)
        .filter(Facility.id == facility_id, Facility.approved.is_(True))
        .first()
    )


def get_facilities(
    db: Session,
    skip: int = 0,
    limit: int = 100,
    sport: Optional[str] = None,
) -> List[Facility]:
    """Public listing: approved facilities only."""
    query = db.query(Facility).filter(Facility.approved.is_(True))
    facilities = query.order_by(Facility.id).all()
    # sports is a JSON list, filtered here to stay portable across databases
    if sport:
        wanted = sport.strip().lower()
        facilities = [
            f for f in facilities if wanted in [s.lower() for s in f.sports or []]
        ]
    return facilities[skip : skip + limit]


def get_facilities_by_owner(db: Session, owner_id: int) -> List[Facility]:
    return (
        db.query(Facility)
        .filter(Facility.owner_id == owner_id)
        .order_by(Facility.id)
        .all()
    )


def get_pending_facilities(db: Session) -> List[Facility]:
    return (
        db.query(Facility)
        .filter(Facility.approved.is_(False))
        .order_by(Facility.created_at)
        .all()
    )


def create_facility(db: Session, facility: FacilityCreate, owner_id: int) -> Facility:
    data = facility.model_dump()
    location = data.pop("location")
    longitude, latitude = location["coordinates"]
    photos = data.get("photos") or []

    db_facility = Facility(
        **data,
        address=location["address"].strip(),
        longitude=longitude,
        latitude=latitude,
        owner_id=owner_id,
        approved=False,
    )
    db_facility.name = db_facility.name.strip()
    db_facility.description = db_facility.description.strip()
    if not db_facility.primary_photo and photos:
        db_facility.primary_photo = photos[0]

    db.add(db_facility)
    db.commit()
    db.refresh(db_facility)
    logger.info(
        "Facility %s created by owner %s, awaiting approval", db_facility.id, owner_id
    )
    return db_facility


def update_facility(
    db: Session, facility_id: int, facility: FacilityUpdate
) -> Optional[Facility]:
    db_facility = get_facility(db, facility_id)
    if not db_facility:
        return None

    update_data = facility.model_dump(exclude_unset=True)
    location = update_data.pop("location", None)
    if location:
        db_facility.address = location["address"].strip()
        db_facility.longitude, db_facility.latitude = location["coordinates"]

    for field, value in update_data.items():
        if value is None:
            continue
        if isinstance(value, str):
            value = value.strip()
        setattr(db_facility, field, value)

    if "photos" in update_data and db_facility.primary_photo not in (
        db_facility.photos or []
    ):
        db_facility.primary_photo = (
            db_facility.photos[0] if db_facility.photos else None
        )

    db.commit()
    db.refresh(db_facility)
    return db_facility


def set_facility_approval(db: Session, facility_id: int, approved: bool) -> Facility:
    db_facility = get_facility(db, facility_id)
    if not db_facility:
        raise NotFoundError("Facility not found")

    db_facility.approved = approved
    db.commit()
    db.refresh(db_facility)
    logger.info(
        "Facility %s %s", facility_id, "approved" if approved else "rejected"
    )
    return db_facility


def delete_facility(db: Session, facility_id: int) -> bool:
    """Delete a facility; its courts (and their slots) and reviews go with it."""
    db_facility = get_facility(db, facility_id)
    if not db_facility:
        return False

    court_count = len(db_facility.courts)
    db.delete(db_facility)
    db.commit()
    logger.info("Facility %s deleted with %s courts", facility_id, court_count)
    return True
