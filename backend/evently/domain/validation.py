"""
Required-field validation for raw record values.

Fields are checked in the order given and the first failure is raised;
callers never receive a partially validated record.
"""

import re
from collections.abc import Iterable, Mapping
from typing import Any

from evently.core.errors import (
    EmptyFieldError,
    InvalidArrayElementError,
    InvalidEmailError,
    InvalidValueError,
    MissingFieldError,
)

# Practical, not RFC 5322
EMAIL_PATTERN = re.compile(r"^[^\s@]+@[^\s@]+\.[^\s@]+$")
# Width of the bookings.email column
MAX_EMAIL_LENGTH = 320


def require_string(record: Mapping[str, Any], field: str) -> str:
    value = record.get(field)
    if value is None:
        raise MissingFieldError(field)
    if not isinstance(value, str):
        raise InvalidValueError(f"{field} must be a string", field=field)
    trimmed = value.strip()
    if not trimmed:
        raise EmptyFieldError(field)
    return trimmed


def require_string_array(record: Mapping[str, Any], field: str) -> list[str]:
    value = record.get(field)
    if value is None:
        raise MissingFieldError(field)
    if not isinstance(value, (list, tuple)):
        raise InvalidValueError(f"{field} must be an array of non-empty strings", field=field)

    items = []
    for index, item in enumerate(value):
        if not isinstance(item, str) or not item.strip():
            raise InvalidArrayElementError(field, index)
        items.append(item.strip())
    return items


def validate_fields(
    record: Mapping[str, Any],
    string_fields: Iterable[str],
    array_fields: Iterable[str] = (),
) -> dict[str, Any]:
    """
    Return a copy of ``record`` with every required string trimmed and every
    array field trimmed element-wise. Keys not named as required are copied
    through untouched.
    """
    normalized = dict(record)
    for field in string_fields:
        normalized[field] = require_string(record, field)
    for field in array_fields:
        normalized[field] = require_string_array(record, field)
    return normalized


def validate_email(email: Any) -> str:
    if not isinstance(email, str):
        raise InvalidEmailError()
    candidate = email.strip()
    if len(candidate) > MAX_EMAIL_LENGTH or not EMAIL_PATTERN.match(candidate):
        raise InvalidEmailError()
    return candidate
