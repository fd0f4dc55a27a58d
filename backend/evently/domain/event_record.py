"""
Validate-then-normalize pipeline for event writes.

``prepare_event`` is called by the event service before every insert or
update. It takes the change-set (only the fields the caller actually
supplied) and, for updates, the currently stored values, and returns the
complete record to write:

- create: slug derived from title, date and time normalized
- update: slug/date/time re-derived only when title/date/time are in the
  change-set; otherwise the stored canonical value is kept
"""

from collections.abc import Mapping
from typing import Any, Optional

from evently.core.errors import InvalidValueError
from evently.domain.normalizers import normalize_date, normalize_time
from evently.domain.slug import generate_slug
from evently.domain.validation import validate_fields

EVENT_STRING_FIELDS = (
    "title",
    "description",
    "overview",
    "image",
    "venue",
    "location",
    "date",
    "time",
    "mode",
    "audience",
    "organizer",
)
EVENT_ARRAY_FIELDS = ("agenda", "tags")
# Column widths, checked on the trimmed value. date and time are normalized
# to fixed-width strings, so their raw input length is not limited.
EVENT_MAX_LENGTHS = {
    "title": 255,
    "description": 2000,
    "overview": 2000,
    "image": 1000,
    "venue": 255,
    "location": 255,
    "mode": 50,
    "audience": 255,
    "organizer": 255,
}


def prepare_event(
    changes: Mapping[str, Any],
    current: Optional[Mapping[str, Any]] = None,
) -> dict[str, Any]:
    writable = EVENT_STRING_FIELDS + EVENT_ARRAY_FIELDS
    # slug is never taken from the caller
    changed = {key: value for key, value in changes.items() if key in writable}
    creating = current is None

    merged = {} if creating else {field: current.get(field) for field in writable}
    merged.update(changed)

    record = validate_fields(merged, EVENT_STRING_FIELDS, EVENT_ARRAY_FIELDS)
    for field, limit in EVENT_MAX_LENGTHS.items():
        if len(record[field]) > limit:
            raise InvalidValueError(f"{field} must be at most {limit} characters", field=field)

    if creating or "title" in changed:
        slug = generate_slug(record["title"])
        if not slug:
            raise InvalidValueError(
                "title must contain at least one letter or digit",
                field="title",
            )
        record["slug"] = slug
    else:
        record["slug"] = current["slug"]

    if creating or "date" in changed:
        record["date"] = normalize_date(record["date"])
    if creating or "time" in changed:
        record["time"] = normalize_time(record["time"])

    return record
