"""
Tests calling the court, booking, user and admin endpoints directly
"""
from datetime import date, datetime, timedelta

import pytest
from fastapi import HTTPException

from app.config import settings
from app.models.booking import BookingStatus
from app.models.user import UserRole
from app.routers import admin as admin_router
from app.routers import auth as auth_router
from app.routers import bookings as bookings_router
from app.routers import courts as courts_router
from app.routers import users as users_router
from app.schemas.booking import BookingCreate
from app.schemas.court import CourtCreate, SlotWindowCreate
from app.schemas.user import OTPVerify, UserAdminUpdate, UserProfileUpdate
from app.services.exceptions import ConflictError, ForbiddenError, ValidationError

MONDAY = date(2026, 10, 19)


def booking_request(court, time_slot="08:00"):
    return BookingCreate(
        facility_id=court.facility_id,
        court_id=court.id,
        date=MONDAY,
        time_slot=time_slot,
    )


def test_only_facility_owner_creates_courts(db, owner, other_owner, facility):
    payload = CourtCreate(
        facility_id=facility.id,
        name="Court 2",
        sport_type="padel",
        price_per_hour=15,
        operating_hours=[{"day": "Friday", "open": "09:00", "close": "11:00"}],
    )

    with pytest.raises(ForbiddenError):
        courts_router.create_court(payload, db=db, current_user=other_owner)

    court = courts_router.create_court(payload, db=db, current_user=owner)
    slots = courts_router.read_court_slots(
        court.id, slot_date=None, only_available=True, db=db
    )
    assert slots and all(s.date.weekday() == 4 for s in slots)


def test_create_court_for_missing_facility(db, owner):
    payload = CourtCreate(facility_id=42, name="X", sport_type="tennis", price_per_hour=0)
    with pytest.raises(HTTPException) as exc_info:
        courts_router.create_court(payload, db=db, current_user=owner)
    assert exc_info.value.status_code == 404


def test_slot_listing_filters(db, court, player):
    bookings_router.create_booking(booking_request(court), db=db, current_user=player)

    all_monday = courts_router.read_court_slots(
        court.id, slot_date=MONDAY, only_available=False, db=db
    )
    free_monday = courts_router.read_court_slots(
        court.id, slot_date=MONDAY, only_available=True, db=db
    )
    assert [s.time for s in all_monday] == ["08:00", "09:00"]
    assert [s.time for s in free_monday] == ["09:00"]


def test_owner_adds_and_removes_slots(db, owner, other_owner, court):
    window = SlotWindowCreate(
        start_date=date.today() + timedelta(days=1),
        end_date=date.today() + timedelta(days=2),
        start_time="18:00",
        end_time="20:00",
    )

    with pytest.raises(ForbiddenError):
        courts_router.add_time_slots(court.id, window, db=db, current_user=other_owner)

    result = courts_router.add_time_slots(court.id, window, db=db, current_user=owner)
    assert len(result.slots) == 4

    with pytest.raises(ValidationError):
        courts_router.add_time_slots(court.id, window, db=db, current_user=owner)

    slot_id = result.slots[0].id
    courts_router.remove_time_slot(court.id, slot_id, db=db, current_user=owner)
    remaining = courts_router.read_court_slots(
        court.id, slot_date=window.start_date, only_available=False, db=db
    )
    assert slot_id not in [s.id for s in remaining]


def test_slot_window_must_be_upcoming_and_bounded(db, owner, court):
    yesterday = date.today() - timedelta(days=1)
    past = SlotWindowCreate(
        start_date=yesterday, end_date=yesterday, start_time="18:00", end_time="20:00"
    )
    with pytest.raises(ValidationError):
        courts_router.add_time_slots(court.id, past, db=db, current_user=owner)

    too_long = SlotWindowCreate(
        start_date=date.today(),
        end_date=date.today() + timedelta(days=settings.SLOT_HORIZON_DAYS + 1),
        start_time="18:00",
        end_time="20:00",
    )
    with pytest.raises(ValidationError):
        courts_router.add_time_slots(court.id, too_long, db=db, current_user=owner)

    evening = [
        s
        for s in courts_router.read_court_slots(
            court.id, slot_date=None, only_available=False, db=db
        )
        if s.time == "18:00"
    ]
    assert evening == []


def test_booking_endpoints(db, court, player, other_player, owner, admin):
    booking = bookings_router.create_booking(
        booking_request(court), db=db, current_user=player
    )
    with pytest.raises(ConflictError):
        bookings_router.create_booking(
            booking_request(court), db=db, current_user=other_player
        )

    mine = bookings_router.read_my_bookings(status=None, db=db, current_user=player)
    assert [b.id for b in mine] == [booking.id]

    owner_view = bookings_router.read_bookings(
        skip=0, limit=100, status=None, db=db, current_user=owner
    )
    admin_view = bookings_router.read_bookings(
        skip=0, limit=100, status=None, db=db, current_user=admin
    )
    assert [b.id for b in owner_view] == [b.id for b in admin_view] == [booking.id]

    cancelled = bookings_router.cancel_booking(booking.id, db=db, current_user=player)
    assert cancelled.status == BookingStatus.CANCELLED
    assert bookings_router.read_owner_bookings(
        status=BookingStatus.CONFIRMED, db=db, current_user=owner
    ) == []


def test_owner_does_not_see_other_facilities_bookings(db, court, player, other_owner):
    bookings_router.create_booking(booking_request(court), db=db, current_user=player)

    assert bookings_router.read_owner_bookings(
        status=None, db=db, current_user=other_owner
    ) == []


def test_profile_update_and_bookings(db, player, other_player):
    updated = users_router.update_profile(
        UserProfileUpdate(name="Renamed", email="NEW@example.com"),
        db=db,
        current_user=player,
    )
    assert updated.name == "Renamed"
    assert updated.email == "new@example.com"

    with pytest.raises(ConflictError):
        users_router.update_profile(
            UserProfileUpdate(email=other_player.email), db=db, current_user=player
        )

    assert users_router.read_my_bookings(status=None, db=db, current_user=player) == []


def test_verify_otp(db, player):
    player.is_verified = False
    player.otp_code = "123456"
    player.otp_expires_at = datetime.utcnow() + timedelta(minutes=5)
    db.commit()

    with pytest.raises(HTTPException) as exc_info:
        auth_router.verify_otp(OTPVerify(user_id=player.id, otp="000000"), db=db)
    assert exc_info.value.status_code == 400

    token = auth_router.verify_otp(OTPVerify(user_id=player.id, otp="123456"), db=db)
    assert token.access_token
    db.refresh(player)
    assert player.is_verified is True
    assert player.otp_code is None


def test_expired_otp_is_rejected(db, player):
    player.otp_code = "654321"
    player.otp_expires_at = datetime.utcnow() - timedelta(minutes=1)
    db.commit()

    with pytest.raises(HTTPException):
        auth_router.verify_otp(OTPVerify(user_id=player.id, otp="654321"), db=db)


def test_signup_schema_refuses_admin_role():
    from pydantic import ValidationError as SchemaValidationError

    from app.schemas.user import UserCreate

    with pytest.raises(SchemaValidationError):
        UserCreate(name="Eve", email="eve@example.com", password="secret1", role="admin")
    assert UserCreate(
        name="Olga", email="olga@example.com", password="secret1", role="facility_owner"
    ).role == UserRole.FACILITY_OWNER


def test_admin_manages_users(db, admin, player, owner, facility):
    users = admin_router.read_users(skip=0, limit=100, role=UserRole.USER, db=db)
    assert [u.id for u in users] == [player.id]

    banned = admin_router.update_user(player.id, UserAdminUpdate(is_banned=True), db=db)
    assert banned.is_banned is True

    with pytest.raises(ConflictError):
        admin_router.delete_user(owner.id, db=db, current_user=admin)
    with pytest.raises(HTTPException) as exc_info:
        admin_router.delete_user(admin.id, db=db, current_user=admin)
    assert exc_info.value.status_code == 400


def test_deleting_user_releases_their_slots(db, admin, player, court):
    from app.crud import slot as slot_crud

    booking = bookings_router.create_booking(
        booking_request(court), db=db, current_user=player
    )
    assert admin_router.read_user_bookings(player.id, status=None, db=db)[0].id == booking.id

    admin_router.delete_user(player.id, db=db, current_user=admin)

    assert slot_crud.find_slot(db, court.id, MONDAY, "08:00").is_booked is False
    with pytest.raises(HTTPException) as exc_info:
        admin_router.read_user(player.id, db=db)
    assert exc_info.value.status_code == 404


def test_login_requires_verified_account(db):
    from fastapi.security import OAuth2PasswordRequestForm

    from app.models.user import User
    from app.services.auth import get_password_hash

    user = User(
        name="New Player",
        email="new@example.com",
        hashed_password=get_password_hash("secret1"),
        role=UserRole.USER,
        is_verified=False,
    )
    db.add(user)
    db.commit()
    form = OAuth2PasswordRequestForm(username="new@example.com", password="secret1")

    with pytest.raises(HTTPException) as exc_info:
        auth_router.login(form, db=db)
    assert exc_info.value.status_code == 401
    assert exc_info.value.detail == "Account not verified. Please verify your email with OTP."

    user.is_verified = True
    db.commit()
    assert auth_router.login(form, db=db).access_token
