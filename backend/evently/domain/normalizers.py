"""
Date and time normalization.

Dates are stored as ``YYYY-MM-DD`` and times as 24-hour ``HH:MM`` no
matter how they were submitted. Both functions return canonical input
unchanged.

Date policy: only ISO-8601 dates and date-times are accepted, parsed with
pydantic's datetime parser. Values with a UTC offset are converted to UTC
before the calendar fields are taken; naive values are read as UTC.
Impossible dates such as 2024-02-30 are rejected rather than rolled over.
"""

import re
from datetime import datetime, timezone

from pydantic import TypeAdapter, ValidationError

from evently.core.errors import InvalidFormatError, InvalidValueError

_ISO_DATE_PREFIX = re.compile(r"^\d{4}-\d{2}-\d{2}(?:$|[T ])")
_TIME = re.compile(r"^(\d{1,2})(?::(\d{2}))?\s*(am|pm)?$", re.IGNORECASE)

_datetime_adapter = TypeAdapter(datetime)


def normalize_date(value: str, field: str = "date") -> str:
    raw = value.strip()
    # Rejects bare numbers, which pydantic would read as Unix timestamps
    if not _ISO_DATE_PREFIX.match(raw):
        raise InvalidFormatError("Invalid date format, expected YYYY-MM-DD", field=field)

    try:
        parsed = _datetime_adapter.validate_python(raw)
    except ValidationError as exc:
        raise InvalidFormatError(f"Invalid date: {raw}", field=field) from exc

    if parsed.tzinfo is not None:
        try:
            parsed = parsed.astimezone(timezone.utc)
        except OverflowError as exc:
            # e.g. 9999-12-31T23:00-05:00 is past the last representable day
            raise InvalidValueError(f"Date out of range: {raw}", field=field) from exc
    return f"{parsed.year:04d}-{parsed.month:02d}-{parsed.day:02d}"


def normalize_time(value: str, field: str = "time") -> str:
    """
    Convert ``9``, ``9:30``, ``9:30pm``, ``12am`` etc. to ``HH:MM``.

    Without a meridiem the hour is read as 24-hour. With one, the hour must
    be 1-12, so ``13pm`` and ``0am`` are rejected as out of range.
    """
    raw = value.strip()
    match = _TIME.match(raw)
    if not match:
        raise InvalidFormatError("Invalid time format, expected H[:MM][am|pm]", field=field)

    hour = int(match.group(1))
    minute = int(match.group(2)) if match.group(2) else 0
    meridiem = match.group(3).lower() if match.group(3) else None

    if meridiem:
        if not 1 <= hour <= 12:
            raise InvalidValueError(f"Invalid time value: {raw}", field=field)
        if meridiem == "pm" and hour < 12:
            hour += 12
        elif meridiem == "am" and hour == 12:
            hour = 0

    if not (0 <= hour <= 23 and 0 <= minute <= 59):
        raise InvalidValueError(f"Invalid time value: {raw}", field=field)
    return f"{hour:02d}:{minute:02d}"
