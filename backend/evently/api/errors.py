"""
Exception handlers mapping domain errors to HTTP responses.

Field validation -> 400, not found -> 404, uniqueness conflict -> 409,
database unreachable -> 503. Anything unexpected is logged with its
traceback and answered with a generic 500 so internals never leak.
"""

from fastapi import FastAPI, Request, status
from fastapi.responses import JSONResponse

from evently.core.errors import (
    ConflictError,
    DomainError,
    FieldValidationError,
    NotFoundError,
    StoreUnavailableError,
)
from evently.core.logging import get_logger

logger = get_logger(__name__)

STATUS_BY_ERROR = (
    (FieldValidationError, status.HTTP_400_BAD_REQUEST),
    (NotFoundError, status.HTTP_404_NOT_FOUND),
    (ConflictError, status.HTTP_409_CONFLICT),
    (StoreUnavailableError, status.HTTP_503_SERVICE_UNAVAILABLE),
)


def status_for(error: DomainError) -> int:
    for error_type, status_code in STATUS_BY_ERROR:
        if isinstance(error, error_type):
            return status_code
    return status.HTTP_500_INTERNAL_SERVER_ERROR


async def domain_error_handler(request: Request, exc: DomainError) -> JSONResponse:
    status_code = status_for(exc)
    logger.info("domain_error", code=exc.code.value, field=exc.field, status_code=status_code)
    return JSONResponse(status_code=status_code, content={"error": exc.to_dict()})


async def unhandled_error_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.exception("unhandled_error", error=str(exc))
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={"error": {"code": "INTERNAL_ERROR", "message": "Internal server error"}},
    )


def register_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(DomainError, domain_error_handler)
    app.add_exception_handler(Exception, unhandled_error_handler)
