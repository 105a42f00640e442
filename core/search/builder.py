"""
Search Response Builder - ranking, pagination and envelope assembly.
"""

import time
from typing import List, Optional

from core.search.facets import FacetAggregator
from core.search.models import SearchFacets, SearchResponse, SearchResult


def paginate(items: List, page: int, page_size: int) -> List:
    """Zero-based page slice [page * page_size, page * page_size + page_size)."""
    start = page * page_size
    return items[start:start + page_size]


class SearchResponseBuilder:

    def __init__(self, facet_aggregator: Optional[FacetAggregator] = None, max_suggestions: int = 5):
        self.facet_aggregator = facet_aggregator or FacetAggregator()
        self.max_suggestions = max_suggestions

    def build(
        self,
        results: List[SearchResult],
        page: int,
        page_size: int,
        facets: Optional[SearchFacets] = None,
        suggestions: Optional[List[str]] = None,
        started_at: Optional[float] = None
    ) -> SearchResponse:
        """Assemble one page of results.

        Args:
            results: Full, unpaginated result set in retrieval order
            page: Zero-based page number
            page_size: Results per page
            facets: Precomputed facets; computed from `results` when None
            suggestions: Query completions, truncated to max_suggestions
            started_at: time.perf_counter() at search start, for search_time_ms

        Returns:
            SearchResponse with total_count of the full set
        """
        # sorted() is stable: equal relevance keeps retrieval order
        ranked = sorted(results, key=lambda r: r.relevance_score, reverse=True)

        if facets is None:
            facets = self.facet_aggregator.aggregate([r.business for r in ranked])

        elapsed_ms = int((time.perf_counter() - started_at) * 1000) if started_at is not None else 0

        return SearchResponse(
            results=paginate(ranked, page, page_size),
            total_count=len(ranked),
            suggestions=(suggestions or [])[:self.max_suggestions],
            facets=facets,
            search_time_ms=elapsed_ms,
            page=page,
            page_size=page_size,
        )

    @staticmethod
    def empty(page: int, page_size: int, error: Optional[str] = None, started_at: Optional[float] = None) -> SearchResponse:
        elapsed_ms = int((time.perf_counter() - started_at) * 1000) if started_at is not None else 0
        return SearchResponse(page=page, page_size=page_size, error=error, search_time_ms=elapsed_ms)
