"""
Pure validation and normalization for event and booking records.

Nothing in this package touches the database or HTTP; the services call
these functions explicitly before every write.
"""

from .slug import generate_slug
from .normalizers import normalize_date, normalize_time
from .validation import validate_fields, validate_email
from .event_record import prepare_event, EVENT_STRING_FIELDS, EVENT_ARRAY_FIELDS

__all__ = [
    "generate_slug",
    "normalize_date",
    "normalize_time",
    "validate_fields",
    "validate_email",
    "prepare_event",
    "EVENT_STRING_FIELDS",
    "EVENT_ARRAY_FIELDS",
]
