"""
Tests for creating and cancelling bookings
"""
from datetime import date

import pytest

from app.crud import slot as slot_crud
from app.models.booking import Booking, BookingStatus
from app.models.slot import Slot
from app.services.booking import create_booking
from app.services.exceptions import ConflictError, ForbiddenError, NotFoundError
from app.utils.booking_cancellation import cancel_booking

MONDAY = date(2026, 10, 19)


def book(db, user, court, time_slot="08:00", booking_date=MONDAY):
    return create_booking(
        db,
        user=user,
        facility_id=court.facility_id,
        court_id=court.id,
        booking_date=booking_date,
        time_slot=time_slot,
    )


def test_booking_marks_slot_and_user_list(db, court, player):
    booking = book(db, player, court)

    assert booking.status == BookingStatus.CONFIRMED
    assert booking.facility_id == court.facility_id
    slot = slot_crud.find_slot(db, court.id, MONDAY, "08:00")
    assert slot.is_booked and slot.booked_by_id == player.id
    db.refresh(player)
    assert player.booking_ids == [booking.id]


def test_second_booking_for_same_slot_is_rejected(db, court, player, other_player):
    book(db, player, court)

    with pytest.raises(ConflictError):
        book(db, other_player, court)

    assert db.query(Booking).count() == 1
    db.refresh(other_player)
    assert other_player.booking_ids == []


def test_stale_unbooked_read_loses_the_race(db, court, player, other_player):
    # Load the slot while it is still free, then book it behind the session's back
    slot = slot_crud.find_slot(db, court.id, MONDAY, "08:00")
    assert slot.is_booked is False
    db.query(Slot).filter(Slot.id == slot.id).update(
        {Slot.is_booked: True, Slot.booked_by_id: player.id},
        synchronize_session=False,
    )
    assert slot.is_booked is False

    with pytest.raises(ConflictError):
        book(db, other_player, court)

    assert db.query(Booking).count() == 0


def test_booking_unknown_slot_is_rejected(db, court, player):
    with pytest.raises(ConflictError):
        book(db, player, court, time_slot="12:00")
    # Tuesday has no hours
    with pytest.raises(ConflictError):
        book(db, player, court, booking_date=date(2026, 10, 20))


def test_booking_unknown_court_or_wrong_facility(db, court, player, pending_facility):
    with pytest.raises(NotFoundError):
        create_booking(
            db,
            user=player,
            facility_id=court.facility_id,
            court_id=999,
            booking_date=MONDAY,
            time_slot="08:00",
        )
    with pytest.raises(NotFoundError):
        create_booking(
            db,
            user=player,
            facility_id=pending_facility.id,
            court_id=court.id,
            booking_date=MONDAY,
            time_slot="08:00",
        )


def test_booking_requires_approved_facility(db, court, player):
    court.facility.approved = False
    db.commit()

    with pytest.raises(NotFoundError):
        book(db, player, court)
    assert slot_crud.find_slot(db, court.id, MONDAY, "08:00").is_booked is False


def test_cancel_frees_slot_and_user_list(db, court, player):
    booking = book(db, player, court)

    cancelled = cancel_booking(db, booking.id, player)

    assert cancelled.status == BookingStatus.CANCELLED
    assert slot_crud.find_slot(db, court.id, MONDAY, "08:00").is_booked is False
    db.refresh(player)
    assert player.booking_ids == []


def test_cancel_twice_is_rejected_without_side_effects(db, court, player, other_player):
    booking = book(db, player, court)
    cancel_booking(db, booking.id, player)
    # Someone else takes the freed slot
    book(db, other_player, court)

    with pytest.raises(ConflictError):
        cancel_booking(db, booking.id, player)

    slot = slot_crud.find_slot(db, court.id, MONDAY, "08:00")
    assert slot.is_booked and slot.booked_by_id == other_player.id


def test_cancel_missing_booking(db, player):
    with pytest.raises(NotFoundError):
        cancel_booking(db, 12345, player)


def test_cancel_by_stranger_is_forbidden(db, court, player, other_player, other_owner):
    booking = book(db, player, court)

    with pytest.raises(ForbiddenError):
        cancel_booking(db, booking.id, other_player)
    with pytest.raises(ForbiddenError):
        cancel_booking(db, booking.id, other_owner)

    db.refresh(booking)
    assert booking.status == BookingStatus.CONFIRMED


def test_facility_owner_and_admin_can_cancel(db, court, player, owner, admin):
    first = book(db, player, court, "08:00")
    second = book(db, player, court, "09:00")

    assert cancel_booking(db, first.id, owner).status == BookingStatus.CANCELLED
    assert cancel_booking(db, second.id, admin).status == BookingStatus.CANCELLED


def test_cancel_when_slot_is_gone_still_cancels(db, court, player):
    booking = book(db, player, court)
    db.query(Slot).filter(Slot.court_id == court.id).delete(synchronize_session=False)
    db.commit()

    cancelled = cancel_booking(db, booking.id, player)
    assert cancelled.status == BookingStatus.CANCELLED


def test_book_cancel_rebook_scenario(db, court, player, other_player):
    """Mon 08:00-10:00: U books 08:00, V is rejected, U cancels, V books"""
    times = [s.time for s in slot_crud.get_slots(db, court.id, slot_date=MONDAY)]
    assert times == ["08:00", "09:00"]

    first = book(db, player, court)
    with pytest.raises(ConflictError):
        book(db, other_player, court)

    cancel_booking(db, first.id, player)
    second = book(db, other_player, court)

    assert second.status == BookingStatus.CONFIRMED
    slot = slot_crud.find_slot(db, court.id, MONDAY, "08:00")
    assert slot.booked_by_id == other_player.id


def test_confirmed_booking_index_rejects_duplicate(db, court, player, other_player):
    # A confirmed booking exists while the slot row still reads as free
    existing = Booking(
        user_id=player.id,
        facility_id=court.facility_id,
        court_id=court.id,
        date=MONDAY,
        time_slot="08:00",
        status=BookingStatus.CONFIRMED,
    )
    db.add(existing)
    db.commit()

    with pytest.raises(ConflictError):
        book(db, other_player, court)

    assert db.query(Booking).count() == 1
    assert slot_crud.find_slot(db, court.id, MONDAY, "08:00").is_booked is False
    db.refresh(other_player)
    assert other_player.booking_ids == []
