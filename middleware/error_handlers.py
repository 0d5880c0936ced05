"""
Shared application-level exception handlers.
Maps pagination failures, request validation errors, and unexpected exceptions to consistent JSON error responses.


Copyright (c) 2026 Stefan Kumarasinghe

Licensed under the Apache License, Version 2.0 (the "License");
you may not use this file except in compliance with the License.
You may obtain a copy of the License at http://www.apache.org/licenses/LICENSE-2.0
"""

import logging

from fastapi import Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from sqlalchemy.exc import OperationalError

from services.paginator import PaginationError

logger = logging.getLogger(__name__)


def pagination_status_code(exc: PaginationError) -> int:
    cause = exc.__cause__
    if isinstance(cause, (ValueError, TypeError, OverflowError)):
        return status.HTTP_400_BAD_REQUEST
    if isinstance(cause, OperationalError):
        return status.HTTP_503_SERVICE_UNAVAILABLE
    return status.HTTP_500_INTERNAL_SERVER_ERROR


def pagination_exception_handler(
    request: Request,
    exc: PaginationError,
) -> JSONResponse:
    status_code = pagination_status_code(exc)
    if status_code == status.HTTP_400_BAD_REQUEST:
        return JSONResponse(status_code=status_code, content={"detail": str(exc) or "Invalid list query"})

    logger.error("List query failed during %s on %s: %s", exc.stage, request.url.path, exc)
    detail = "Database unavailable" if status_code == status.HTTP_503_SERVICE_UNAVAILABLE else "Internal server error"
    return JSONResponse(status_code=status_code, content={"detail": detail})


def validation_exception_handler(
    request: Request,
    exc: RequestValidationError,
) -> JSONResponse:
    return JSONResponse(
        status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
        content={"detail": exc.errors()},
    )


def general_exception_handler(
    request: Request,
    exc: Exception,
) -> JSONResponse:
    logger.exception("Unhandled exception: %s", exc)
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={"detail": "Internal server error"},
    )
