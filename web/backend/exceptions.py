#!/usr/bin/env python3
"""
Error handlers for the web application.

Service layer exceptions live in core.exceptions; this module maps them
onto HTTP responses with a consistent {success, error, type} body.
"""

import logging
from fastapi import Request, HTTPException
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from core.exceptions import (
    ServiceException,
    PreferenceNotFoundException,
    ProfileNotFoundException,
    NotificationNotFoundException,
    PreferenceValidationException,
    ProfileRequiredException,
    InvalidPaginationException,
)

logger = logging.getLogger(__name__)

NOT_FOUND_EXCEPTIONS = (
    PreferenceNotFoundException,
    ProfileNotFoundException,
    NotificationNotFoundException,
)

BAD_REQUEST_EXCEPTIONS = (
    PreferenceValidationException,
    ProfileRequiredException,
    InvalidPaginationException,
)


async def service_exception_handler(
    request: Request,
    exc: ServiceException
) -> JSONResponse:
    """
    Handle service layer exceptions.

    Args:
        request: The FastAPI request.
        exc: The service exception.

    Returns:
        JSONResponse with error details.
    """
    status_code = 500
    if isinstance(exc, NOT_FOUND_EXCEPTIONS):
        status_code = 404
    elif isinstance(exc, BAD_REQUEST_EXCEPTIONS):
        status_code = 400

    if status_code == 500:
        logger.error(f"Service error in {request.url.path}: {exc}", exc_info=True)
    else:
        logger.info(f"{exc.__class__.__name__} in {request.url.path}: {exc}")

    content = {
        "success": False,
        "error": str(exc),
        "type": exc.__class__.__name__
    }
    if isinstance(exc, PreferenceValidationException) and exc.errors:
        content["errors"] = jsonable_encoder(exc.errors)

    return JSONResponse(status_code=status_code, content=content)


async def validation_exception_handler(
    request: Request,
    exc: RequestValidationError
) -> JSONResponse:
    """Render request body/query validation failures as 400s."""
    return JSONResponse(
        status_code=400,
        content={
            "success": False,
            "error": "Invalid request",
            "type": "ValidationError",
            "errors": jsonable_encoder(
                [{k: v for k, v in err.items() if k != "ctx"} for err in exc.errors()]
            )
        }
    )


async def http_exception_handler(
    request: Request,
    exc: HTTPException
) -> JSONResponse:
    """Render HTTPException (e.g. a missing X-User-Id) in the common error shape."""
    return JSONResponse(
        status_code=exc.status_code,
        content={
            "success": False,
            "error": exc.detail,
            "type": "HTTPException"
        }
    )


async def general_exception_handler(
    request: Request,
    exc: Exception
) -> JSONResponse:
    """Last-resort handler; details go to the log, never to the client."""
    logger.exception(f"Unexpected error in {request.url.path}")

    return JSONResponse(
        status_code=500,
        content={
            "success": False,
            "error": "Internal server error",
            "type": "InternalError"
        }
    )
