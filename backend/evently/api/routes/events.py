"""
Event endpoints: listing, detail by slug, create and partial update.
"""

from fastapi import APIRouter, Depends, status
from sqlalchemy.ext.asyncio import AsyncSession

from evently.db.session import get_db
from evently.schemas.event import (
    EventCreate,
    EventUpdate,
    EventResponse,
    EventDetailResponse,
    EventListResponse,
)
from evently.schemas.error import ErrorResponse
from evently.services.event_service import (
    create_event,
    update_event,
    get_event_by_slug,
    get_similar_events,
    list_events,
    count_bookings,
)

router = APIRouter(prefix="/events", tags=["Events"])

ERROR_RESPONSES = {
    400: {"model": ErrorResponse},
    404: {"model": ErrorResponse},
    409: {"model": ErrorResponse},
}


@router.get("/", response_model=EventListResponse)
async def list_events_endpoint(db: AsyncSession = Depends(get_db)):
    """List all events, newest first."""
    events = await list_events(db)
    return EventListResponse(
        events=[EventResponse.model_validate(e) for e in events],
        total=len(events),
    )


@router.post(
    "/",
    response_model=EventResponse,
    status_code=status.HTTP_201_CREATED,
    responses=ERROR_RESPONSES,
)
async def create_event_endpoint(event_data: EventCreate, db: AsyncSession = Depends(get_db)):
    """
    Create an event. The slug is derived from the title; date and time are
    stored in canonical form whatever format was submitted.
    """
    return await create_event(db, event_data.model_dump())


@router.get("/{slug}", response_model=EventDetailResponse, responses=ERROR_RESPONSES)
async def get_event_endpoint(slug: str, db: AsyncSession = Depends(get_db)):
    event = await get_event_by_slug(db, slug)
    bookings = await count_bookings(db, event.id)
    return EventDetailResponse(
        **EventResponse.model_validate(event).model_dump(),
        bookings_count=bookings,
    )


@router.patch("/{slug}", response_model=EventResponse, responses=ERROR_RESPONSES)
async def update_event_endpoint(
    slug: str,
    event_data: EventUpdate,
    db: AsyncSession = Depends(get_db),
):
    """Update only the fields present in the body."""
    return await update_event(db, slug, event_data.model_dump(exclude_unset=True))


@router.get("/{slug}/similar", response_model=list[EventResponse])
async def similar_events_endpoint(slug: str, db: AsyncSession = Depends(get_db)):
    """Events sharing a tag with this one. Always 200; empty when unavailable."""
    return await get_similar_events(db, slug)
