#!/usr/bin/env python3
"""
Response models for API endpoints.
"""

from pydantic import BaseModel, ConfigDict, Field
from typing import List, Optional


class SuggestionsResponse(BaseModel):
    """Query completions ordered by popularity."""
    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "success": True,
                "suggestions": ["machine learning", "machine vision"]
            }
        }
    )

    success: bool = True
    suggestions: List[str] = Field(default_factory=list, max_length=5)


class ClickResponse(BaseModel):
    success: bool = True


class CacheInvalidateResponse(BaseModel):
    success: bool = True
    tag: str
    invalidated: int = Field(ge=0)


class CacheStatsResponse(BaseModel):
    success: bool = True
    available: bool
    query_cache_keys: Optional[int] = None
    hits: Optional[int] = None
    misses: Optional[int] = None
    ttl_seconds: Optional[int] = None


class HealthResponse(BaseModel):
    status: str
    service: str
