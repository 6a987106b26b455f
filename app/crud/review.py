from sqlalchemy.orm import Session
from typing import List, Optional, Tuple

from app.models.review import Review
from app.schemas.review import ReviewCreate


def get_reviews(db: Session, skip: int = 0, limit: int = 100) -> List[Review]:
    return db.query(Review).order_by(Review.id.desc()).offset(skip).limit(limit).all()


def get_reviews_for_facility(db: Session, facility_id: int) -> List[Review]:
    return (
        db.query(Review)
        .filter(Review.facility_id == facility_id)
        .order_by(Review.id.desc())
        .all()
    )


def get_user_review(db: Session, facility_id: int, user_id: int) -> Optional[Review]:
    return (
        db.query(Review)
        .filter(Review.facility_id == facility_id, Review.user_id == user_id)
        .first()
    )


def upsert_review(
    db: Session, facility_id: int, user_id: int, review: ReviewCreate
) -> Tuple[Review, bool]:
    """
    Create the user's review of a facility, or update it if one exists.

    Returns:
        (review, created)
    """
    db_review = get_user_review(db, facility_id, user_id)
    created = db_review is None
    if created:
        db_review = Review(facility_id=facility_id, user_id=user_id)
        db.add(db_review)

    db_review.rating = review.rating
    db_review.comment = review.comment
    db.commit()
    db.refresh(db_review)
    return db_review, created
