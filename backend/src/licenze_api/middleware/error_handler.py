"""Exception handlers mapping domain errors to sanitized HTTP responses."""

import logging

from fastapi import Request, status
from fastapi.responses import JSONResponse
from sqlalchemy.exc import SQLAlchemyError

from licenze_api.exceptions import (
    ConflictError,
    LicenzeAPIError,
    NotFoundError,
)
from licenze_api.utils.secure_logging import log_error

logger = logging.getLogger(__name__)


def _status_for(exc: LicenzeAPIError) -> int:
    if isinstance(exc, NotFoundError):
        return status.HTTP_404_NOT_FOUND
    if isinstance(exc, ConflictError):
        return status.HTTP_409_CONFLICT
    return status.HTTP_422_UNPROCESSABLE_ENTITY


async def domain_exception_handler(request: Request, exc: LicenzeAPIError) -> JSONResponse:
    """Return the domain error message; details are kept out of responses."""
    return JSONResponse(status_code=_status_for(exc), content={"detail": exc.message})


async def sqlalchemy_exception_handler(request: Request, exc: SQLAlchemyError) -> JSONResponse:
    """Hide database errors behind a generic 500."""
    log_error(logger, f"Database error on {request.method} {request.url.path}", exc)
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={"detail": "Internal server error"},
    )


async def generic_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    """Catch-all handler for unexpected errors."""
    log_error(logger, f"Unhandled error on {request.method} {request.url.path}", exc)
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={"detail": "Internal server error"},
    )
