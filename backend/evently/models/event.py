"""
Event model.

Key design decisions:
- `slug` carries a unique constraint; concurrent creates with the same
  title are settled by the database, not by a check-then-insert
- `date` and `time` are stored as canonical strings (YYYY-MM-DD, HH:MM)
- `agenda` and `tags` are ordered JSON arrays of strings
"""

from typing import Any

from sqlalchemy import Column, Integer, String, JSON, Index, UniqueConstraint

from evently.db.base import Base, TimestampMixin


class Event(Base, TimestampMixin):
    __tablename__ = "events"

    id = Column(Integer, primary_key=True, index=True)
    title = Column(String(255), nullable=False)
    slug = Column(String(255), nullable=False)
    description = Column(String(2000), nullable=False)
    overview = Column(String(2000), nullable=False)
    image = Column(String(1000), nullable=False)
    venue = Column(String(255), nullable=False)
    location = Column(String(255), nullable=False)
    date = Column(String(10), nullable=False)
    time = Column(String(5), nullable=False)
    mode = Column(String(50), nullable=False)
    audience = Column(String(255), nullable=False)
    organizer = Column(String(255), nullable=False)
    agenda = Column(JSON, nullable=False, default=list)
    tags = Column(JSON, nullable=False, default=list)

    __table_args__ = (
        UniqueConstraint("slug", name="uq_events_slug"),
        # Listing is newest first
        Index("ix_events_created_at", "created_at"),
    )

    def to_record(self) -> dict[str, Any]:
        """Current stored values, as consumed by prepare_event()."""
        return {
            "title": self.title,
            "slug": self.slug,
            "description": self.description,
            "overview": self.overview,
            "image": self.image,
            "venue": self.venue,
            "location": self.location,
            "date": self.date,
            "time": self.time,
            "mode": self.mode,
            "audience": self.audience,
            "organizer": self.organizer,
            "agenda": list(self.agenda or []),
            "tags": list(self.tags or []),
        }

    def __repr__(self) -> str:
        return f"<Event(id={self.id}, slug={self.slug}, date={self.date} {self.time})>"
