from __future__ import annotations

import logging

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from hiretrack.core.errors import (
    AuthenticationError,
    AuthorizationError,
    ConflictError,
    HireTrackError,
    InvalidTransitionError,
    NotAvailableError,
    NotFoundError,
    StorageFailure,
)

logger = logging.getLogger(__name__)

# First match wins, so subclasses come before their parents.
_STATUS_BY_ERROR = (
    (NotFoundError, 404),
    (NotAvailableError, 409),
    (ConflictError, 409),
    (InvalidTransitionError, 422),
    (AuthenticationError, 401),
    (AuthorizationError, 403),
    (StorageFailure, 503),
)


def status_for(error: HireTrackError) -> int:
    for error_type, status in _STATUS_BY_ERROR:
        if isinstance(error, error_type):
            return status
    return 500


async def hiretrack_error_handler(request: Request, exc: HireTrackError) -> JSONResponse:
    status = status_for(exc)
    if status >= 500:
        logger.error("%s %s failed: %s", request.method, request.url.path, exc)
    headers = {"WWW-Authenticate": "Bearer"} if status == 401 else None
    return JSONResponse(status_code=status, content={"error": exc.to_dict()}, headers=headers)


def install_error_handlers(app: FastAPI) -> None:
    app.add_exception_handler(HireTrackError, hiretrack_error_handler)
