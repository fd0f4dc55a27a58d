"""
Booking model representing one visitor's reservation for an event.

Key design decisions:
- Unique constraint on (event_id, email): an email books an event at most
  once, enforced by the database so two simultaneous requests cannot both win
- event_id is a plain reference; the event is never embedded
"""

from sqlalchemy import Column, Integer, String, ForeignKey, UniqueConstraint

from evently.db.base import Base, TimestampMixin


class Booking(Base, TimestampMixin):
    __tablename__ = "bookings"

    id = Column(Integer, primary_key=True, index=True)
    event_id = Column(Integer, ForeignKey("events.id"), nullable=False, index=True)
    email = Column(String(320), nullable=False)

    __table_args__ = (
        UniqueConstraint("event_id", "email", name="uq_booking_event_email"),
    )

    def __repr__(self) -> str:
        return f"<Booking(id={self.id}, event={self.event_id}, email={self.email})>"
