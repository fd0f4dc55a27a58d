"""
Booking endpoints.
"""

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.ext.asyncio import AsyncSession

from evently.db.session import get_db
from evently.schemas.booking import BookingCreate, BookingResponse
from evently.schemas.error import ErrorResponse
from evently.services.booking_service import create_booking, list_event_bookings

router = APIRouter(prefix="/bookings", tags=["Bookings"])


@router.post(
    "/",
    response_model=BookingResponse,
    status_code=status.HTTP_201_CREATED,
    responses={
        400: {"model": ErrorResponse},
        404: {"model": ErrorResponse},
        409: {"model": ErrorResponse},
    },
)
async def create_booking_endpoint(booking_data: BookingCreate, db: AsyncSession = Depends(get_db)):
    """
    Book an event for an email address.

    An email can book a given event once; a second attempt (including a
    concurrent one) returns 409.
    """
    return await create_booking(db, booking_data.event_id, booking_data.email)


@router.get("/", response_model=list[BookingResponse], responses={404: {"model": ErrorResponse}})
async def list_bookings_endpoint(
    event_id: int = Query(..., ge=1),
    db: AsyncSession = Depends(get_db),
):
    """Bookings for one event, oldest first."""
    return await list_event_bookings(db, event_id)
