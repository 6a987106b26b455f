from sqlalchemy.orm import Session
from typing import List, Optional
import logging

from app.models.booking import Booking
from app.models.facility import Facility
from app.models.slot import Slot
from app.models.user import User, UserRole
from app.schemas.user import UserAdminUpdate, UserProfileUpdate
from app.services.exceptions import ConflictError

logger = logging.getLogger(__name__)


def get_user(db: Session, user_id: int) -> Optional[User]:
    return db.query(User).filter(User.id == user_id).first()


def get_user_by_email(db: Session, email: str) -> Optional[User]:
    return db.query(User).filter(User.email == email.strip().lower()).first()


def get_users(
    db: Session,
    skip: int = 0,
    limit: int = 100,
    role: Optional[UserRole] = None,
) -> List[User]:
    query = db.query(User)
    if role:
        query = query.filter(User.role == role)
    return query.order_by(User.id).offset(skip).limit(limit).all()


def create_user(
    db: Session,
    name: str,
    email: str,
    hashed_password: str,
    role: UserRole = UserRole.USER,
    avatar: str = "",
    is_verified: bool = False,
) -> User:
    if get_user_by_email(db, email):
        raise ConflictError("User already exists")

    db_user = User(
        name=name.strip(),
        email=email.strip().lower(),
        hashed_password=hashed_password,
        role=role,
        avatar=avatar or "",
        is_verified=is_verified,
    )
    db.add(db_user)
    db.commit()
    db.refresh(db_user)
    return db_user


def update_profile(
    db: Session, user: User, profile: UserProfileUpdate, hashed_password: str = None
) -> User:
    update_data = profile.model_dump(exclude_unset=True, exclude={"password"})

    new_email = update_data.get("email")
    if new_email and new_email.lower() != user.email:
        if get_user_by_email(db, new_email):
            raise ConflictError("Email already registered")
        update_data["email"] = new_email.lower()

    for field, value in update_data.items():
        if value is not None:
            setattr(user, field, value)
    if hashed_password:
        user.hashed_password = hashed_password

    db.commit()
    db.refresh(user)
    return user


def admin_update_user(db: Session, user_id: int, data: UserAdminUpdate) -> Optional[User]:
    db_user = get_user(db, user_id)
    if not db_user:
        return None

    update_data = data.model_dump(exclude_unset=True)
    new_email = update_data.get("email")
    if new_email and new_email.lower() != db_user.email:
        if get_user_by_email(db, new_email):
            raise ConflictError("Email already registered")
        update_data["email"] = new_email.lower()

    for field, value in update_data.items():
        if value is None:
            continue
        if field == "role":
            value = UserRole(value)
        setattr(db_user, field, value)

    db.commit()
    db.refresh(db_user)
    logger.info(
        "User %s updated by admin (role=%s, banned=%s)",
        db_user.id,
        db_user.role.value,
        db_user.is_banned,
    )
    return db_user


def delete_user(db: Session, user_id: int) -> bool:
    """
    Delete a user together with their bookings. Slots held by the user's
    confirmed bookings are released first. Owners must remove their
    facilities before they can be deleted.
    """
    db_user = get_user(db, user_id)
    if not db_user:
        return False

    if db.query(Facility).filter(Facility.owner_id == user_id).count():
        raise ConflictError("User still owns facilities; delete them first")

    db.query(Slot).filter(Slot.booked_by_id == user_id).update(
        {Slot.is_booked: False, Slot.booked_by_id: None}, synchronize_session=False
    )
    db_user.bookings = []
    db.flush()
    db.query(Booking).filter(Booking.user_id == user_id).delete(
        synchronize_session=False
    )
    db.delete(db_user)
    db.commit()
    logger.info("User %s deleted", user_id)
    return True
