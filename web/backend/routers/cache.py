#!/usr/bin/env python3
"""
Cache endpoints - tag invalidation and stats for the query cache.
"""

import logging

from fastapi import APIRouter, Depends

from core.app_context import AppContext
from ..dependencies import get_context
from ..models.requests import CacheInvalidateRequest
from ..models.responses import CacheInvalidateResponse, CacheStatsResponse

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/cache", tags=["cache"])


@router.post("/invalidate", response_model=CacheInvalidateResponse)
def invalidate(
    body: CacheInvalidateRequest,
    context: AppContext = Depends(get_context)
):
    """Invalidate every cached response registered under a tag."""
    if context.cache is None:
        return CacheInvalidateResponse(tag=body.tag, invalidated=0)

    invalidated = context.cache.invalidate_tag(body.tag)
    logger.info(f"Invalidated tag {body.tag!r}: {invalidated} entries")
    return CacheInvalidateResponse(tag=body.tag, invalidated=invalidated)


@router.get("/stats", response_model=CacheStatsResponse)
def stats(context: AppContext = Depends(get_context)):
    if context.cache is None:
        return CacheStatsResponse(available=False)

    data = context.cache.get_cache_stats()
    return CacheStatsResponse(
        available=data.get("available", False),
        query_cache_keys=data.get("query_cache_keys"),
        hits=data.get("hits"),
        misses=data.get("misses"),
        ttl_seconds=data.get("ttl_seconds")
    )
