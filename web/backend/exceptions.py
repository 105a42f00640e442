#!/usr/bin/env python3
"""
Error handlers for the web application.

Every failure answers with the same envelope:
    {"success": false, "error": "...", "type": "..."}
"""

import logging

from fastapi import Request, HTTPException
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from core.exceptions import MatchmakingError, RetrievalError, ValidationError

logger = logging.getLogger(__name__)


def _error_response(status_code: int, message: str, error_type: str) -> JSONResponse:
    return JSONResponse(
        status_code=status_code,
        content={
            "success": False,
            "error": message,
            "type": error_type
        }
    )


async def matchmaking_exception_handler(
    request: Request,
    exc: MatchmakingError
) -> JSONResponse:
    """
    Handle core exceptions.

    ValidationError messages are surfaced as-is; everything else is sanitized
    and only logged in full.

    Args:
        request: The FastAPI request.
        exc: The core exception.

    Returns:
        JSONResponse with error details.
    """
    if isinstance(exc, ValidationError):
        logger.info(f"Rejected request to {request.url.path}: {exc}")
        return _error_response(400, str(exc), exc.__class__.__name__)

    logger.error(f"Service error in {request.url.path}: {exc}", exc_info=True)
    message = "Failed to retrieve businesses" if isinstance(exc, RetrievalError) else "Internal server error"
    return _error_response(500, message, exc.__class__.__name__)


async def request_validation_exception_handler(
    request: Request,
    exc: RequestValidationError
) -> JSONResponse:
    """Report the first invalid parameter by name with a 400."""
    errors = exc.errors()
    first = errors[0] if errors else {}
    field_name = ".".join(str(p) for p in first.get("loc", ()) if p not in ("body", "query")) or "body"
    return _error_response(400, f"Invalid field {field_name}: {first.get('msg', 'invalid')}", "ValidationError")


async def http_exception_handler(
    request: Request,
    exc: HTTPException
) -> JSONResponse:
    """
    Handle FastAPI HTTP exceptions with consistent format.
    """
    return _error_response(exc.status_code, exc.detail, "HTTPException")


async def general_exception_handler(
    request: Request,
    exc: Exception
) -> JSONResponse:
    """
    Handle unexpected exceptions.
    """
    logger.exception(f"Unexpected error in {request.url.path}")
    return _error_response(500, "Internal server error", "InternalError")
