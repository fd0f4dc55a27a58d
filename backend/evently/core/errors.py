"""
Domain error taxonomy.

Every error carries a machine-readable code, a user-safe message and, for
validation failures, the offending field (and array index where relevant).
The API layer maps the classes to HTTP status codes; nothing below the
routes knows about HTTP.
"""

from enum import Enum
from typing import Any, Optional


class ErrorCode(str, Enum):
    INVALID_FORMAT = "INVALID_FORMAT"
    INVALID_VALUE = "INVALID_VALUE"
    MISSING_FIELD = "MISSING_FIELD"
    EMPTY_FIELD = "EMPTY_FIELD"
    INVALID_ARRAY_ELEMENT = "INVALID_ARRAY_ELEMENT"
    INVALID_EMAIL = "INVALID_EMAIL"
    CONFLICT = "CONFLICT"
    NOT_FOUND = "NOT_FOUND"
    STORE_UNAVAILABLE = "STORE_UNAVAILABLE"


class DomainError(Exception):
    """Base domain error with code and user-safe message."""

    code: ErrorCode

    def __init__(
        self,
        message: str,
        *,
        field: Optional[str] = None,
        index: Optional[int] = None,
    ) -> None:
        super().__init__(message)
        self.message = message
        self.field = field
        self.index = index

    def __str__(self) -> str:
        return f"{self.code.value}: {self.message}"

    def to_dict(self) -> dict[str, Any]:
        payload: dict[str, Any] = {"code": self.code.value, "message": self.message}
        if self.field is not None:
            payload["field"] = self.field
        if self.index is not None:
            payload["index"] = self.index
        return payload


class FieldValidationError(DomainError):
    """A submitted value failed validation or normalization."""


class InvalidFormatError(FieldValidationError):
    code = ErrorCode.INVALID_FORMAT


class InvalidValueError(FieldValidationError):
    code = ErrorCode.INVALID_VALUE


class MissingFieldError(FieldValidationError):
    code = ErrorCode.MISSING_FIELD

    def __init__(self, field: str) -> None:
        super().__init__(f"{field} is required", field=field)


class EmptyFieldError(FieldValidationError):
    code = ErrorCode.EMPTY_FIELD

    def __init__(self, field: str) -> None:
        super().__init__(f"{field} is required and must be non-empty", field=field)


class InvalidArrayElementError(FieldValidationError):
    code = ErrorCode.INVALID_ARRAY_ELEMENT

    def __init__(self, field: str, index: int) -> None:
        super().__init__(
            f"{field}[{index}] must be a non-empty string",
            field=field,
            index=index,
        )


class InvalidEmailError(FieldValidationError):
    code = ErrorCode.INVALID_EMAIL

    def __init__(self) -> None:
        super().__init__("Invalid email format", field="email")


class ConflictError(DomainError):
    """A write collided with a uniqueness constraint."""

    code = ErrorCode.CONFLICT


class SlugConflictError(ConflictError):
    def __init__(self, slug: str) -> None:
        super().__init__(f"An event with slug '{slug}' already exists", field="slug")
        self.slug = slug


class DuplicateBookingError(ConflictError):
    def __init__(self, event_id: int, email: str) -> None:
        super().__init__("This email has already booked this event", field="email")
        self.event_id = event_id
        self.email = email


class NotFoundError(DomainError):
    code = ErrorCode.NOT_FOUND


class EventNotFoundError(NotFoundError):
    """Raised when a referenced event does not exist."""

    def __init__(self, identifier: Any) -> None:
        super().__init__(f"Event {identifier} not found")
        self.identifier = identifier


class StoreUnavailableError(DomainError):
    """The database could not be reached; no write was applied."""

    code = ErrorCode.STORE_UNAVAILABLE

    def __init__(self, message: str = "Database is unavailable") -> None:
        super().__init__(message)
