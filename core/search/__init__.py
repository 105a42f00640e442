"""
Search Module - paginated search, facets, suggestions and analytics.
"""

from core.search.models import (
    SearchResult,
    FacetCount,
    RatingFacet,
    VerifiedFacet,
    SearchFacets,
    SearchResponse,
)
from core.search.facets import FacetAggregator
from core.search.builder import SearchResponseBuilder

__all__ = [
    'SearchResult',
    'FacetCount',
    'RatingFacet',
    'VerifiedFacet',
    'SearchFacets',
    'SearchResponse',
    'FacetAggregator',
    'SearchResponseBuilder',
]
