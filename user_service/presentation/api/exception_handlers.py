"""Exception → HTTP response mapping.

Domain exceptions carry message + context; here they become JSON error
bodies. Storage and unexpected failures are logged with full detail and
answered with a generic 500 (internals never reach the client).
"""

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from user_service.application.shared import EventPublishError
from user_service.config import get_logger
from user_service.domain.shared import (
    BusinessRuleError,
    DomainException,
    DuplicateError,
    NoFieldsToUpdateError,
    NotFoundError,
    RepositoryError,
    ValidationError,
)

logger = get_logger(__name__)

INTERNAL_ERROR_BODY = {
    "error": "InternalServerError",
    "message": "An unexpected error occurred. Please try again later.",
}

# First match wins (subclasses before their bases)
DOMAIN_STATUS_CODES: list[tuple[type[DomainException], int]] = [
    (ValidationError, status.HTTP_400_BAD_REQUEST),
    (NoFieldsToUpdateError, status.HTTP_400_BAD_REQUEST),
    (DuplicateError, status.HTTP_409_CONFLICT),
    (NotFoundError, status.HTTP_404_NOT_FOUND),
    (BusinessRuleError, status.HTTP_422_UNPROCESSABLE_ENTITY),
    (RepositoryError, status.HTTP_500_INTERNAL_SERVER_ERROR),
]

# Request location prefixes stripped from error paths ("body.name" → "name")
_LOCATION_PREFIXES = ("body", "query", "path", "header")


def domain_status_code(exc: DomainException) -> int:
    """HTTP status for a domain exception (500 when unmapped)."""
    for exc_type, status_code in DOMAIN_STATUS_CODES:
        if isinstance(exc, exc_type):
            return status_code
    return status.HTTP_500_INTERNAL_SERVER_ERROR


def format_validation_errors(exc: RequestValidationError) -> list[dict[str, str]]:
    """Flatten pydantic errors into [{path, message, code}]."""
    errors = []
    for error in exc.errors():
        loc = list(error.get("loc", ()))
        if loc and loc[0] in _LOCATION_PREFIXES:
            loc = loc[1:]
        errors.append(
            {
                "path": ".".join(str(part) for part in loc),
                "message": error.get("msg", ""),
                "code": error.get("type", ""),
            }
        )
    return errors


async def request_validation_exception_handler(
    request: Request, exc: RequestValidationError
) -> JSONResponse:
    """Handle request shape errors (pydantic) → 400."""
    errors = format_validation_errors(exc)
    logger.warning(
        "api.validation_error",
        path=request.url.path,
        errors=errors,
    )

    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content={
            "error": "ValidationError",
            "message": "Request validation failed",
            "errors": errors,
        },
    )


async def domain_exception_handler(
    request: Request, exc: DomainException
) -> JSONResponse:
    """Handle domain exceptions (status by DOMAIN_STATUS_CODES)."""
    status_code = domain_status_code(exc)

    if status_code >= status.HTTP_500_INTERNAL_SERVER_ERROR:
        logger.error(
            "api.domain_error",
            path=request.url.path,
            error=str(exc),
            error_type=type(exc).__name__,
            exc_info=exc,
        )
        return JSONResponse(status_code=status_code, content=INTERNAL_ERROR_BODY)

    logger.info(
        "api.domain_error",
        path=request.url.path,
        error=exc.message,
        error_type=type(exc).__name__,
        status_code=status_code,
    )

    content: dict = {"error": type(exc).__name__, "message": exc.message}
    if isinstance(exc, ValidationError) and exc.field is not None:
        content["field"] = exc.field
    if isinstance(exc, NotFoundError):
        content["entityType"] = exc.entity_type
        content["identifier"] = exc.identifier

    return JSONResponse(status_code=status_code, content=content)


async def event_publish_exception_handler(
    request: Request, exc: EventPublishError
) -> JSONResponse:
    """Handle publish failure after a committed write → generic 500."""
    logger.error(
        "api.event_publish_failed",
        path=request.url.path,
        event_type=exc.event.event_type,
        event_id=exc.event.event_id,
        aggregate_id=exc.event.aggregate_id,
        exc_info=exc,
    )
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content=INTERNAL_ERROR_BODY,
    )


async def generic_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    """Handle unexpected exceptions."""
    logger.exception(
        "api.unhandled_exception",
        path=request.url.path,
        error=str(exc),
        error_type=type(exc).__name__,
    )

    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content=INTERNAL_ERROR_BODY,
    )


def register_exception_handlers(app: FastAPI) -> None:
    """Attach all handlers to app."""
    app.add_exception_handler(RequestValidationError, request_validation_exception_handler)
    app.add_exception_handler(DomainException, domain_exception_handler)
    app.add_exception_handler(EventPublishError, event_publish_exception_handler)
    app.add_exception_handler(Exception, generic_exception_handler)
