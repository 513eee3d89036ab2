"""
API error handling and exception mapping.

Converts domain errors, validation errors and unexpected failures into
JSON error responses with a uniform body.
"""

from fastapi import FastAPI, HTTPException, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from studycards.api.schemas.base import ErrorResponse
from studycards.domain.exceptions import (
    DeckNotFoundException,
    DomainException,
    StorageUnavailableException,
)
from studycards.infra.config.logging_config import get_logger

logger = get_logger("api.errors")


def _error(status_code: int, error: str, detail: str) -> JSONResponse:
    body = ErrorResponse(error=error, detail=detail)
    return JSONResponse(status_code=status_code, content=body.model_dump(mode="json"))


async def domain_error_handler(request: Request, exc: DomainException) -> JSONResponse:
    """Map domain exceptions to HTTP status codes."""
    if isinstance(exc, DeckNotFoundException):
        logger.info("error.deck_not_found", deck_id=exc.deck_id)
        return _error(status.HTTP_404_NOT_FOUND, "DECK_NOT_FOUND", str(exc))

    if isinstance(exc, StorageUnavailableException):
        logger.warning("error.storage_unavailable", reason=exc.reason)
        return _error(
            status.HTTP_503_SERVICE_UNAVAILABLE, "STORAGE_UNAVAILABLE", str(exc)
        )

    logger.warning("error.domain", error=str(exc))
    return _error(status.HTTP_400_BAD_REQUEST, "DOMAIN_ERROR", str(exc))


async def value_error_handler(request: Request, exc: ValueError) -> JSONResponse:
    """Business-rule violations raised by validators."""
    logger.info("error.validation", error=str(exc))
    return _error(status.HTTP_422_UNPROCESSABLE_ENTITY, "VALIDATION_ERROR", str(exc))


async def validation_error_handler(
    request: Request, exc: RequestValidationError
) -> JSONResponse:
    """Request body/path validation failures."""
    formatted_errors = []
    for error in exc.errors():
        location = " -> ".join(str(loc) for loc in error["loc"])
        formatted_errors.append(f"{location}: {error['msg']}")

    detail = "Validation failed: " + "; ".join(formatted_errors)
    logger.info("error.request_validation", detail=detail)
    return _error(status.HTTP_422_UNPROCESSABLE_ENTITY, "VALIDATION_ERROR", detail)


async def http_exception_handler(request: Request, exc: HTTPException) -> JSONResponse:
    logger.info("error.http", status_code=exc.status_code, detail=str(exc.detail))
    return _error(exc.status_code, f"HTTP_{exc.status_code}", str(exc.detail))


async def general_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.exception("error.unexpected", error_type=type(exc).__name__)
    return _error(
        status.HTTP_500_INTERNAL_SERVER_ERROR,
        "INTERNAL_SERVER_ERROR",
        "An unexpected error occurred. Please try again later.",
    )


def setup_error_handlers(app: FastAPI) -> None:
    app.add_exception_handler(DomainException, domain_error_handler)
    app.add_exception_handler(RequestValidationError, validation_error_handler)
    app.add_exception_handler(ValueError, value_error_handler)
    app.add_exception_handler(HTTPException, http_exception_handler)
    app.add_exception_handler(Exception, general_exception_handler)
