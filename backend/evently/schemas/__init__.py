from evently.schemas.event import (
    EventCreate,
    EventUpdate,
    EventResponse,
    EventDetailResponse,
    EventListResponse,
)
from evently.schemas.booking import BookingCreate, BookingResponse
from evently.schemas.error import ErrorResponse

__all__ = [
    "EventCreate", "EventUpdate", "EventResponse", "EventDetailResponse", "EventListResponse",
    "BookingCreate", "BookingResponse",
    "ErrorResponse",
]
