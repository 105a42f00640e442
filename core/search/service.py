#!/usr/bin/env python3
"""
Search Service - paginated keyword/filter search with facets and suggestions.

Flow:
1. Cache lookup (optional, keyed by query, filters and page)
2. CandidateRetriever over the full search window
3. Relevance ranking, facets, suggestions, pagination
4. Best-effort analytics

Retrieval failures yield an empty response with `error` set, never a crash.
"""

import logging
import time
from typing import List, Optional

from core.cache import QueryCacheService
from core.config_loader import RetrievalConfig, SearchConfig
from core.exceptions import RetrievalError
from core.retriever.filters import SearchFilters
from core.retriever.service import CandidateRetriever
from core.search.analytics import AnalyticsRecorder
from core.search.builder import SearchResponseBuilder
from core.search.facets import FacetAggregator
from core.search.models import SearchResponse, SearchResult
from core.search.suggestions import SuggestionProvider

logger = logging.getLogger(__name__)

SEARCH_UNAVAILABLE = "Search is temporarily unavailable. Please try again."


def cache_tags(filters: SearchFilters) -> List[str]:
    tags = ['search']
    if filters.category:
        tags.append(f"category:{filters.category.lower()}")
    return tags


class SearchService:
    """
    Plain directory search.

    Everything except the retriever is optional so the service can run
    without Redis, analytics or a suggestion index.
    """

    def __init__(
        self,
        retriever: CandidateRetriever,
        business_repo=None,
        builder: Optional[SearchResponseBuilder] = None,
        suggestions: Optional[SuggestionProvider] = None,
        analytics: Optional[AnalyticsRecorder] = None,
        cache: Optional[QueryCacheService] = None,
        config: Optional[SearchConfig] = None,
        retrieval_config: Optional[RetrievalConfig] = None
    ):
        self.retriever = retriever
        self.business_repo = business_repo
        self.config = config or SearchConfig()
        self.retrieval_config = retrieval_config or RetrievalConfig()
        self.builder = builder or SearchResponseBuilder(
            FacetAggregator(self.config.facet_limit),
            self.config.max_suggestions
        )
        self.suggestions = suggestions
        self.analytics = analytics
        self.cache = cache

    def search(
        self,
        query: str = "",
        filters: Optional[SearchFilters] = None,
        page: int = 0,
        page_size: Optional[int] = None,
        session_id: Optional[str] = None,
        user_agent: Optional[str] = None
    ) -> SearchResponse:
        started_at = time.perf_counter()
        query = (query or "").strip()
        filters = filters or SearchFilters()
        page = max(0, page)
        page_size = min(page_size or self.config.default_page_size, self.config.max_page_size)

        cache_key = None
        response = None
        if self.cache is not None:
            cache_key = self.cache.make_key('search', {
                'query': query.lower(),
                'filters': filters.model_dump(mode='json'),
                'page': page,
                'page_size': page_size,
            })
            cached = self.cache.get(cache_key)
            if cached is not None:
                response = SearchResponse.model_validate(cached)

        if response is None:
            try:
                response = self._search_uncached(query, filters, page, page_size, started_at)
            except RetrievalError as e:
                logger.error(f"Search failed for {query!r}: {e}")
                return self.builder.empty(page, page_size, error=SEARCH_UNAVAILABLE, started_at=started_at)

            if cache_key is not None:
                self.cache.set(cache_key, response.model_dump(mode='json'), tags=cache_tags(filters))

        response.search_time_ms = int((time.perf_counter() - started_at) * 1000)

        if self.analytics is not None:
            self.analytics.record(
                query=query,
                filters=filters.model_dump(mode='json', exclude_defaults=True),
                results_count=response.total_count,
                duration_ms=response.search_time_ms,
                session_id=session_id,
                user_agent=user_agent,
                category=filters.category
            )

        return response

    def suggest(self, partial_query: str) -> List[str]:
        if self.suggestions is None:
            return []
        return self.suggestions.suggest(partial_query)

    def _search_uncached(
        self,
        query: str,
        filters: SearchFilters,
        page: int,
        page_size: int,
        started_at: float
    ) -> SearchResponse:
        candidates = self.retriever.retrieve(
            query=query,
            filters=filters,
            limit=self.retrieval_config.search_limit
        )
        results = [
            SearchResult(
                business=c.business,
                relevance_score=c.base_score,
                highlights=c.reasons
            )
            for c in candidates
        ]

        businesses = [c.business for c in candidates]
        if not query and self.business_repo is not None:
            facets = self.builder.facet_aggregator.aggregate_catalog(businesses, self.business_repo, filters)
        else:
            facets = self.builder.facet_aggregator.aggregate(businesses)

        suggestions = self.suggest(query) if query else []

        return self.builder.build(
            results,
            page=page,
            page_size=page_size,
            facets=facets,
            suggestions=suggestions,
            started_at=started_at
        )
