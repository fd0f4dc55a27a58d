from evently.models.event import Event
from evently.models.booking import Booking

__all__ = ["Event", "Booking"]
