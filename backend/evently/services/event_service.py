"""
Event service: the write path around evently.domain.prepare_event.

Every create/update runs the pure validate-then-normalize pipeline first and
only then touches the session, so a rejected write never reaches the
database. Slug uniqueness is left to the `uq_events_slug` constraint; an
IntegrityError on flush is reported as SlugConflictError.
"""

from collections.abc import Mapping
from typing import Any

from sqlalchemy import select, func
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from evently.core.errors import (
    DomainError,
    EventNotFoundError,
    FieldValidationError,
    InvalidFormatError,
    SlugConflictError,
)
from evently.core.logging import get_logger
from evently.core.metrics import record_event_write
from evently.domain import prepare_event
from evently.domain.slug import SLUG_PATTERN
from evently.models.booking import Booking
from evently.models.event import Event

logger = get_logger(__name__)


def _prepare(operation: str, changes: Mapping[str, Any], current=None) -> dict[str, Any]:
    try:
        return prepare_event(changes, current=current)
    except FieldValidationError as e:
        record_event_write(operation, "invalid")
        logger.info(
            "event_rejected",
            operation=operation,
            code=e.code.value,
            field=e.field,
            index=e.index,
        )
        raise


async def _flush_or_conflict(db: AsyncSession, operation: str, slug: str) -> None:
    try:
        await db.flush()
    except IntegrityError as e:
        await db.rollback()
        record_event_write(operation, "conflict")
        logger.warning("event_slug_conflict", operation=operation, slug=slug)
        raise SlugConflictError(slug) from e


async def create_event(db: AsyncSession, changes: Mapping[str, Any]) -> Event:
    """Validate, normalize and insert a new event."""
    record = _prepare("create", changes)

    event = Event(**record)
    db.add(event)
    await _flush_or_conflict(db, "create", record["slug"])
    await db.refresh(event)

    record_event_write("create", "success")
    logger.info("event_created", event_id=event.id, slug=event.slug, date=event.date, time=event.time)
    return event


async def update_event(db: AsyncSession, slug: str, changes: Mapping[str, Any]) -> Event:
    """
    Apply a partial update. `changes` must contain only the fields the caller
    supplied; slug/date/time are re-derived only for those.
    """
    try:
        event = await get_event_by_slug(db, slug)
    except EventNotFoundError:
        record_event_write("update", "not_found")
        raise

    record = _prepare("update", changes, current=event.to_record())

    for field, value in record.items():
        setattr(event, field, value)
    await _flush_or_conflict(db, "update", record["slug"])
    await db.refresh(event)

    record_event_write("update", "success")
    logger.info("event_updated", event_id=event.id, slug=event.slug, fields=sorted(changes))
    return event


def _clean_slug(slug: str) -> str:
    cleaned = str(slug).strip().lower()
    if not SLUG_PATTERN.match(cleaned):
        raise InvalidFormatError("Invalid slug format", field="slug")
    return cleaned


async def get_event_by_slug(db: AsyncSession, slug: str) -> Event:
    cleaned = _clean_slug(slug)
    result = await db.execute(select(Event).where(Event.slug == cleaned))
    event = result.scalar_one_or_none()

    if not event:
        raise EventNotFoundError(cleaned)
    return event


async def list_events(db: AsyncSession) -> list[Event]:
    """All events, newest first."""
    result = await db.execute(select(Event).order_by(Event.created_at.desc(), Event.id.desc()))
    return list(result.scalars().all())


async def count_bookings(db: AsyncSession, event_id: int) -> int:
    result = await db.execute(
        select(func.count()).select_from(Booking).where(Booking.event_id == event_id)
    )
    return result.scalar() or 0


async def get_similar_events(db: AsyncSession, slug: str) -> list[Event]:
    """
    Other events sharing at least one tag with the given one.

    Best-effort read: an unknown slug or a database error degrades to an
    empty list (logged as a warning) instead of failing the caller. No other
    read in this service behaves this way.
    """
    try:
        event = await get_event_by_slug(db, slug)
        tags = set(event.tags or [])
        if not tags:
            return []
        result = await db.execute(
            select(Event)
            .where(Event.id != event.id)
            .order_by(Event.created_at.desc(), Event.id.desc())
        )
        return [other for other in result.scalars().all() if tags.intersection(other.tags or [])]
    except (DomainError, SQLAlchemyError) as e:
        logger.warning("similar_events_unavailable", slug=slug, error=str(e))
        return []
