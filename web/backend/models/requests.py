#!/usr/bin/env python3
"""
Request models for API endpoints.
"""

from pydantic import AliasChoices, BaseModel, Field
from typing import Optional


class ClickRequest(BaseModel):
    """A user clicked a business in the results of a search."""
    business_id: int = Field(validation_alias=AliasChoices('business_id', 'businessId'))
    query: str = Field(default="", description="The search query the click came from")
    session_id: Optional[str] = Field(None, validation_alias=AliasChoices('session_id', 'sessionId'))


class CacheInvalidateRequest(BaseModel):
    """Drop every cached response registered under a tag."""
    tag: str = Field(..., min_length=1, description="Cache tag, e.g. 'search' or 'category:healthcare'")
