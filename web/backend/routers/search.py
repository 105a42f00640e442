#!/usr/bin/env python3
"""
Search endpoints - paginated directory search, suggestions and click tracking.
"""

import logging
from typing import List, Optional

import pydantic
from fastapi import APIRouter, Depends, Query, Request

from core.app_context import AppContext
from core.exceptions import ValidationError
from core.retriever.filters import SearchFilters
from core.search.service import SearchService
from ..dependencies import get_context, get_search_service
from ..models.requests import ClickRequest
from ..models.responses import ClickResponse, SuggestionsResponse

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/search", tags=["search"])


@router.get("")
def search(
    request: Request,
    q: str = Query(default="", description="Free-text query"),
    category: Optional[str] = Query(default=None, description="Category (industry) filter"),
    location: Optional[str] = Query(default=None, description="Location substring filter"),
    tags: Optional[List[str]] = Query(default=None, description="Any of these tags"),
    verified: Optional[bool] = Query(default=None),
    rating: Optional[float] = Query(default=None, ge=0, le=5, description="Minimum rating"),
    founded_after: Optional[int] = Query(default=None, alias="foundedAfter"),
    employee_range: Optional[str] = Query(default=None, alias="employeeRange", description="e.g. 11-50 or 500+"),
    page: int = Query(default=0, ge=0, description="Zero-based page number"),
    page_size: Optional[int] = Query(default=None, ge=1, le=100, alias="pageSize"),
    session_id: Optional[str] = Query(default=None, alias="sessionId"),
    service: SearchService = Depends(get_search_service)
):
    """
    Search the business directory.

    Returns a page of results with facets over the full result set. A failed
    search still answers 200 with empty results and `error` set.
    """
    try:
        filters = SearchFilters(
            category=category,
            location=location,
            tags=tags or [],
            verified=verified,
            rating=rating,
            founded_after=founded_after,
            employee_range=employee_range
        )
    except pydantic.ValidationError as e:
        raise ValidationError(f"Invalid search filters: {e.errors()[0]['msg']}", field="filters") from e

    response = service.search(
        query=q,
        filters=filters,
        page=page,
        page_size=page_size,
        session_id=session_id,
        user_agent=request.headers.get("user-agent")
    )
    return response.model_dump(mode='json', by_alias=True)


@router.get("/suggestions", response_model=SuggestionsResponse)
def suggestions(
    q: str = Query(default="", description="Partial query"),
    service: SearchService = Depends(get_search_service)
):
    """Up to five query completions ordered by popularity."""
    return SuggestionsResponse(suggestions=service.suggest(q))


@router.post("/click", response_model=ClickResponse)
def track_click(
    click: ClickRequest,
    context: AppContext = Depends(get_context)
):
    """Record that a search result was clicked. Best-effort; always succeeds."""
    context.analytics.track_click(click.business_id, click.query, click.session_id)
    return ClickResponse()
