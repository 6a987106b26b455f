"""
Shared pytest configuration
"""
from datetime import date

import pytest
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from app.database import Base, get_db

# Import every model so SQLAlchemy can resolve the relationships
import app.models  # noqa: F401
from app.crud import court as court_crud
from app.models.facility import Facility
from app.models.user import User, UserRole
from app.schemas.court import CourtCreate


# In-memory database for tests
SQLALCHEMY_DATABASE_URL = "sqlite:///:memory:"

engine = create_engine(
    SQLALCHEMY_DATABASE_URL,
    connect_args={"check_same_thread": False},
    poolclass=StaticPool,
)
TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)

# 2026-10-19 is a Monday
MONDAY = date(2026, 10, 19)


@pytest.fixture
def db():
    """Create the test database and drop it afterwards"""
    Base.metadata.create_all(bind=engine)
    db = TestingSessionLocal()
    try:
        yield db
    finally:
        db.close()
        Base.metadata.drop_all(bind=engine)


@pytest.fixture
def override_get_db(db):
    """get_db override for tests"""
    def _get_db():
        try:
            yield db
        finally:
            pass
    return _get_db


def make_user(db, email, role=UserRole.USER, name="Test User"):
    user = User(
        name=name,
        email=email,
        hashed_password="hashed",
        role=role,
        is_verified=True,
    )
    db.add(user)
    db.commit()
    db.refresh(user)
    return user


@pytest.fixture
def player(db):
    """Regular user who books courts"""
    return make_user(db, "player@example.com", name="Player One")


@pytest.fixture
def other_player(db):
    return make_user(db, "other@example.com", name="Player Two")


@pytest.fixture
def owner(db):
    return make_user(db, "owner@example.com", UserRole.FACILITY_OWNER, "Owner")


@pytest.fixture
def other_owner(db):
    return make_user(db, "owner2@example.com", UserRole.FACILITY_OWNER, "Owner Two")


@pytest.fixture
def admin(db):
    return make_user(db, "admin@example.com", UserRole.ADMIN, "Admin")


def make_facility(db, owner, approved=True, name="Downtown Sports", sports=None):
    facility = Facility(
        name=name,
        description="Indoor and outdoor courts",
        address="123 Main St",
        latitude=40.0,
        longitude=-3.7,
        sports=sports or ["tennis", "padel"],
        amenities=["parking"],
        photos=[],
        owner_id=owner.id,
        approved=approved,
    )
    db.add(facility)
    db.commit()
    db.refresh(facility)
    return facility


@pytest.fixture
def facility(db, owner):
    """Approved facility"""
    return make_facility(db, owner)


@pytest.fixture
def pending_facility(db, owner):
    return make_facility(db, owner, approved=False, name="Pending Arena")


@pytest.fixture
def court(db, facility):
    """Court open Mondays 08:00-10:00, slots generated from MONDAY"""
    return court_crud.create_court(
        db,
        CourtCreate(
            facility_id=facility.id,
            name="Court 1",
            sport_type="tennis",
            price_per_hour=20,
            operating_hours=[{"day": "Monday", "open": "08:00", "close": "10:00"}],
        ),
        today=MONDAY,
    )


@pytest.fixture
def facility_factory(db):
    """Build extra facilities: facility_factory(owner, approved=True, ...)"""
    def _make(owner, **kwargs):
        return make_facility(db, owner, **kwargs)
    return _make
