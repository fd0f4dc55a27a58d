"""
Tests for the booking write path, including the storage-level race guard.
"""

import pytest
from sqlalchemy import inspect, select, func
from sqlalchemy.exc import IntegrityError

from evently.core.errors import DuplicateBookingError, EventNotFoundError, InvalidEmailError
from evently.models import Booking, Event
from evently.services import booking_service


async def _booking_count(db_session) -> int:
    return (await db_session.execute(select(func.count()).select_from(Booking))).scalar()


@pytest.mark.asyncio
async def test_create_booking(db_session, test_event):
    booking = await booking_service.create_booking(db_session, test_event.id, " ada@example.com ")
    await db_session.commit()

    assert booking.id is not None
    assert booking.event_id == test_event.id
    assert booking.email == "ada@example.com"


@pytest.mark.asyncio
async def test_invalid_email_is_checked_first(db_session):
    """Email shape is rejected before the event lookup."""
    with pytest.raises(InvalidEmailError):
        await booking_service.create_booking(db_session, 99999, "not-an-email")


@pytest.mark.asyncio
async def test_unknown_event(db_session):
    with pytest.raises(EventNotFoundError):
        await booking_service.create_booking(db_session, 99999, "ada@example.com")
    assert await _booking_count(db_session) == 0


@pytest.mark.asyncio
@pytest.mark.parametrize("event_id", [0, -1, 2**31, 2**70])
async def test_event_id_outside_key_range_is_not_found(db_session, event_id):
    with pytest.raises(EventNotFoundError):
        await booking_service.create_booking(db_session, event_id, "ada@example.com")
    assert await _booking_count(db_session) == 0


@pytest.mark.asyncio
async def test_duplicate_booking(db_session, test_event):
    await booking_service.create_booking(db_session, test_event.id, "ada@example.com")
    await db_session.commit()

    with pytest.raises(DuplicateBookingError):
        await booking_service.create_booking(db_session, test_event.id, "ada@example.com")
    assert await _booking_count(db_session) == 1


@pytest.mark.asyncio
async def test_same_email_can_book_other_events(db_session, test_event, related_events):
    await booking_service.create_booking(db_session, test_event.id, "ada@example.com")
    await booking_service.create_booking(db_session, related_events[0].id, "ada@example.com")
    await db_session.commit()
    assert await _booking_count(db_session) == 2


@pytest.mark.asyncio
async def test_lost_race_is_reported_as_duplicate(db_session, test_event, monkeypatch):
    """
    Simulate two concurrent requests: the other request's row is already
    committed but our pre-check did not see it. The unique constraint
    must still reject the insert.
    """
    db_session.add(Booking(event_id=test_event.id, email="ada@example.com"))
    await db_session.commit()

    async def missed_check(db, event_id, email):
        return None

    monkeypatch.setattr(booking_service, "_find_booking", missed_check)

    with pytest.raises(DuplicateBookingError):
        await booking_service.create_booking(db_session, test_event.id, "ada@example.com")
    assert await _booking_count(db_session) == 1


@pytest.mark.asyncio
async def test_unique_constraint_exists_in_schema(db_session, test_event):
    db_session.add(Booking(event_id=test_event.id, email="ada@example.com"))
    db_session.add(Booking(event_id=test_event.id, email="ada@example.com"))
    with pytest.raises(IntegrityError):
        await db_session.flush()
    await db_session.rollback()


def test_booking_references_event_by_id_only():
    """Bookings hold a plain event_id; no ORM relationship is mapped either way."""
    assert not inspect(Booking).relationships
    assert not inspect(Event).relationships


@pytest.mark.asyncio
async def test_list_event_bookings(db_session, test_event):
    await booking_service.create_booking(db_session, test_event.id, "ada@example.com")
    await booking_service.create_booking(db_session, test_event.id, "grace@example.com")
    await db_session.commit()

    bookings = await booking_service.list_event_bookings(db_session, test_event.id)
    assert [b.email for b in bookings] == ["ada@example.com", "grace@example.com"]


@pytest.mark.asyncio
async def test_list_bookings_unknown_event(db_session):
    with pytest.raises(EventNotFoundError):
        await booking_service.list_event_bookings(db_session, 99999)
