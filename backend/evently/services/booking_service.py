"""
Booking service with storage-enforced uniqueness.

CONCURRENCY STRATEGY: Unique constraint as the source of truth
==============================================================

Problem:
  The same visitor submits the booking form twice (double click, two tabs).
  Both requests check "does (event, email) exist?", both see no row, both
  insert. Result: duplicate bookings.

Solution:
  The bookings table has UNIQUE (event_id, email). The application still
  runs the existence and duplicate checks first, so the common case gets a
  precise error without a failed INSERT, but the constraint is what makes
  the result correct under concurrency:

  1. Validate the email shape (no database access)
  2. SELECT the event; missing -> EventNotFoundError
  3. SELECT an existing booking for (event, email) -> DuplicateBookingError
  4. INSERT; IntegrityError means a concurrent request won the race
     -> roll back and raise DuplicateBookingError

  If the IntegrityError came from the foreign key instead (the event
  vanished between steps 2 and 4) the event is looked up again and
  EventNotFoundError is raised.
"""

from typing import Optional

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from evently.core.errors import (
    DuplicateBookingError,
    EventNotFoundError,
    InvalidEmailError,
)
from evently.core.logging import get_logger
from evently.core.metrics import booking_latency, record_booking_attempt
from evently.domain import validate_email
from evently.models.booking import Booking
from evently.models.event import Event

logger = get_logger(__name__)

# Largest value the INTEGER primary key can hold
MAX_EVENT_ID = 2**31 - 1


async def _event_exists(db: AsyncSession, event_id: int) -> bool:
    if not 1 <= event_id <= MAX_EVENT_ID:
        return False
    result = await db.execute(select(Event.id).where(Event.id == event_id))
    return result.scalar_one_or_none() is not None


async def _find_booking(db: AsyncSession, event_id: int, email: str) -> Optional[int]:
    result = await db.execute(
        select(Booking.id).where(Booking.event_id == event_id, Booking.email == email)
    )
    return result.scalar_one_or_none()


async def create_booking(db: AsyncSession, event_id: int, email: str) -> Booking:
    """Book `event_id` for `email`. Nothing is written unless every check passes."""
    with booking_latency.time():
        try:
            email = validate_email(email)
        except InvalidEmailError:
            record_booking_attempt("invalid")
            logger.info("booking_rejected", reason="invalid_email", event_id=event_id)
            raise

        if not await _event_exists(db, event_id):
            record_booking_attempt("not_found")
            logger.info("booking_rejected", reason="event_not_found", event_id=event_id)
            raise EventNotFoundError(event_id)

        if await _find_booking(db, event_id, email) is not None:
            record_booking_attempt("conflict")
            logger.info("booking_rejected", reason="duplicate", event_id=event_id)
            raise DuplicateBookingError(event_id, email)

        booking = Booking(event_id=event_id, email=email)
        db.add(booking)
        try:
            await db.flush()
        except IntegrityError as e:
            await db.rollback()
            if not await _event_exists(db, event_id):
                record_booking_attempt("not_found")
                raise EventNotFoundError(event_id) from e
            record_booking_attempt("conflict")
            logger.warning("booking_race_lost", event_id=event_id)
            raise DuplicateBookingError(event_id, email) from e

        await db.refresh(booking)

    record_booking_attempt("success")
    logger.info("booking_created", booking_id=booking.id, event_id=event_id)
    return booking


async def list_event_bookings(db: AsyncSession, event_id: int) -> list[Booking]:
    """Bookings for an event, oldest first."""
    if not await _event_exists(db, event_id):
        raise EventNotFoundError(event_id)

    result = await db.execute(
        select(Booking)
        .where(Booking.event_id == event_id)
        .order_by(Booking.created_at.asc(), Booking.id.asc())
    )
    return list(result.scalars().all())
