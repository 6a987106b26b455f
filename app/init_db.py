from sqlalchemy.orm import Session
import logging

from app.config import settings
from app.models.user import User, UserRole
from app.services.auth import get_password_hash

logger = logging.getLogger(__name__)


def create_initial_admin(db: Session):
    """
    Create the configured admin account if no admin exists yet.
    """
    if db.query(User).filter(User.role == UserRole.ADMIN).count() > 0:
        logger.info("An admin already exists, skipping initial admin creation.")
        return None

    if not settings.INITIAL_ADMIN_EMAIL or not settings.INITIAL_ADMIN_PASSWORD:
        logger.warning(
            "INITIAL_ADMIN_EMAIL / INITIAL_ADMIN_PASSWORD not set, no admin created."
        )
        return None

    admin = User(
        name="Administrator",
        email=settings.INITIAL_ADMIN_EMAIL.strip().lower(),
        hashed_password=get_password_hash(settings.INITIAL_ADMIN_PASSWORD),
        role=UserRole.ADMIN,
        is_verified=True,
    )
    db.add(admin)
    db.commit()
    db.refresh(admin)
    logger.info(f"Admin created: {admin.email}")
    return admin
