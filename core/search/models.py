"""
Search Models - the paginated search envelope.

Facets and suggestions are always lists; a failed or skipped aggregation
yields an empty list, never None.
"""

from typing import List, Optional

from pydantic import BaseModel, Field

from core.retriever.dto import OUTPUT_MODEL_CONFIG, BusinessRecord


class SearchResult(BaseModel):
    model_config = OUTPUT_MODEL_CONFIG

    business: BusinessRecord
    relevance_score: float = Field(ge=0, le=100)
    highlights: List[str] = Field(default_factory=list)


class FacetCount(BaseModel):
    model_config = OUTPUT_MODEL_CONFIG

    value: str
    count: int


class RatingFacet(BaseModel):
    model_config = OUTPUT_MODEL_CONFIG

    label: str
    min_rating: float
    count: int


class VerifiedFacet(BaseModel):
    model_config = OUTPUT_MODEL_CONFIG

    verified: bool
    count: int


class SearchFacets(BaseModel):
    model_config = OUTPUT_MODEL_CONFIG

    categories: List[FacetCount] = Field(default_factory=list)
    locations: List[FacetCount] = Field(default_factory=list)
    ratings: List[RatingFacet] = Field(default_factory=list)
    verified: List[VerifiedFacet] = Field(default_factory=list)


class SearchResponse(BaseModel):
    model_config = OUTPUT_MODEL_CONFIG

    results: List[SearchResult] = Field(default_factory=list)
    total_count: int = 0
    suggestions: List[str] = Field(default_factory=list, max_length=5)
    facets: SearchFacets = Field(default_factory=SearchFacets)
    search_time_ms: int = 0
    page: int = 0
    page_size: int = 20
    error: Optional[str] = None
