#!/usr/bin/env python3
"""
Match endpoint - the task dispatcher for search and matchmaking.
"""

import logging
from typing import Any

from fastapi import APIRouter, Body, Depends, Request
from fastapi.responses import JSONResponse

from slowapi import Limiter
from slowapi.util import get_remote_address
from slowapi.errors import RateLimitExceeded

from core.router import RequestRouter
from ..config import get_config
from ..dependencies import get_request_router

logger = logging.getLogger(__name__)

limiter = Limiter(key_func=get_remote_address)

router = APIRouter(tags=["match"])


def add_rate_limit_handlers(app):
    """Add rate limit exception handlers to the FastAPI app."""
    app.state.limiter = limiter
    app.add_exception_handler(RateLimitExceeded, _rate_limit_exceeded_handler)


async def _rate_limit_exceeded_handler(request: Request, exc: RateLimitExceeded):
    return JSONResponse(
        status_code=429,
        content={"success": False, "error": f"Rate limit exceeded: {exc.detail}"}
    )


def _match_rate_limit() -> str:
    return get_config().web.match_rate_limit


@router.post("/match")
@limiter.limit(_match_rate_limit)
def match(
    request: Request,
    body: Any = Body(None),
    dispatcher: RequestRouter = Depends(get_request_router)
):
    """
    Dispatch a `{task, payload}` request.

    Tasks: find_and_score, semantic_search_only, get_ml_score, match.
    Answers `{success: true, data}` or `{success: false, error}` with
    400 for bad requests and 500 for internal failures.
    """
    response = dispatcher.dispatch(body)
    return JSONResponse(status_code=response.status_code, content=response.body)
