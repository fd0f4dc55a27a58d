"""
Pydantic schemas for event-related request/response validation.

Request schemas only check shapes; trimming, length limits, slug/date/time
derivation and the non-empty rules live in evently.domain.
"""

from datetime import datetime
from typing import Optional
from pydantic import BaseModel, Field


class EventCreate(BaseModel):
    title: str
    description: str
    overview: str
    image: str = Field(..., description="URL of the already-hosted image")
    venue: str
    location: str
    date: str = Field(..., description="ISO-8601 date or date-time")
    time: str = Field(..., description="e.g. 18:30, 6:30pm, 9am")
    mode: str
    audience: str
    organizer: str
    agenda: list[str]
    tags: list[str]


class EventUpdate(BaseModel):
    """Partial update; only fields present in the request body are applied."""

    title: Optional[str] = None
    description: Optional[str] = None
    overview: Optional[str] = None
    image: Optional[str] = None
    venue: Optional[str] = None
    location: Optional[str] = None
    date: Optional[str] = None
    time: Optional[str] = None
    mode: Optional[str] = None
    audience: Optional[str] = None
    organizer: Optional[str] = None
    agenda: Optional[list[str]] = None
    tags: Optional[list[str]] = None


class EventResponse(BaseModel):
    id: int
    title: str
    slug: str
    description: str
    overview: str
    image: str
    venue: str
    location: str
    date: str
    time: str
    mode: str
    audience: str
    organizer: str
    agenda: list[str]
    tags: list[str]
    created_at: datetime
    updated_at: datetime

    model_config = {"from_attributes": True}


class EventDetailResponse(EventResponse):
    bookings_count: int = 0


class EventListResponse(BaseModel):
    events: list[EventResponse]
    total: int
