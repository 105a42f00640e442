#!/usr/bin/env python3
"""
Candidate Retriever - Stage 1: fetch and deduplicate candidate businesses.

Passes, merged in this order with the first occurrence of a business winning:
1. Vector similarity (only when a query and an embedding provider exist)
2. Keyword substring match over name, description, category, location, tags
3. Structured filter pass (only when filters are set)

With neither a query nor filters the top-rated businesses are returned.
Retrieval is read-only; persistence failures surface as RetrievalError.
"""

import logging
from typing import Any, Dict, List, Optional

from sqlalchemy.exc import SQLAlchemyError

from core.config_loader import RetrievalConfig
from core.exceptions import RetrievalError, ScoringDegraded
from core.llm.interfaces import EmbeddingProvider
from core.retriever.dto import BusinessRecord, SimilarityHit
from core.retriever.filters import SearchFilters
from core.retriever.models import CandidateMatch
from core.retriever.relevance import keyword_highlights, keyword_relevance
from core.utils import normalize_terms

logger = logging.getLogger(__name__)


class CandidateRetriever:
    """
    Retrieves a bounded, deduplicated candidate set for scoring.

    Repositories are bound to the caller's session; the retriever holds no
    per-request state of its own.
    """

    def __init__(
        self,
        business_repo,
        embedding_repo=None,
        embedder: Optional[EmbeddingProvider] = None,
        config: Optional[RetrievalConfig] = None
    ):
        self.business_repo = business_repo
        self.embedding_repo = embedding_repo
        self.embedder = embedder
        self.config = config or RetrievalConfig()

    def retrieve(
        self,
        query: str = "",
        filters: Optional[SearchFilters] = None,
        limit: Optional[int] = None,
        similarity_threshold: Optional[float] = None,
        semantic_limit: Optional[int] = None
    ) -> List[CandidateMatch]:
        """Run the retrieval passes and return at most `limit` candidates.

        Args:
            query: Free-text query; may be empty
            filters: Structured filters; None or empty means no filter pass
            limit: Candidate cap (defaults to config.candidate_limit)
            similarity_threshold: Override for the vector pass threshold
            semantic_limit: Override for the vector pass result cap

        Returns:
            CandidateMatch list in retrieval order

        Raises:
            RetrievalError: if the business store cannot be queried
        """
        limit = limit or self.config.candidate_limit
        query = (query or "").strip()
        terms = normalize_terms(query)
        has_filters = filters is not None and not filters.is_empty()

        merged: Dict[Any, CandidateMatch] = {}

        try:
            if not terms and not has_filters:
                for row in self.business_repo.top_rated(limit):
                    self._add(merged, row, terms)
                logger.debug(f"Empty query: {len(merged)} top-rated candidates")
                return list(merged.values())

            if terms:
                for row, similarity in self._vector_pass(query, similarity_threshold, semantic_limit):
                    self._add(merged, row, terms, similarity=similarity)

                for row in self.business_repo.search_by_keywords(terms, limit):
                    self._add(merged, row, terms)

            if has_filters:
                for row in self.business_repo.filter_businesses(filters, limit):
                    self._add(merged, row, terms)

        except SQLAlchemyError as e:
            logger.error(f"Candidate retrieval failed: {e}", exc_info=True)
            raise RetrievalError("Failed to retrieve candidate businesses") from e

        candidates = list(merged.values())[:limit]
        logger.info(f"Retrieved {len(candidates)} candidates (query={query!r}, filters={has_filters})")
        return candidates

    def semantic_search(
        self,
        query: str,
        threshold: Optional[float] = None,
        limit: Optional[int] = None
    ) -> List[SimilarityHit]:
        """Raw vector hits, ordered by similarity, without scoring.

        Raises:
            ScoringDegraded: if no embedding provider is configured or it fails
            RetrievalError: if the vector index cannot be queried
        """
        if self.embedder is None or self.embedding_repo is None:
            raise ScoringDegraded("Semantic search is not configured")

        threshold = self.config.similarity_threshold if threshold is None else threshold
        limit = limit or self.config.semantic_limit

        embedding = self.embedder.generate_embedding(query)
        try:
            rows = self.embedding_repo.find_similar_businesses(embedding, threshold=threshold, top_k=limit)
        except SQLAlchemyError as e:
            logger.error(f"Vector search failed: {e}", exc_info=True)
            raise RetrievalError("Failed to search business embeddings") from e

        return [
            SimilarityHit(
                id=str(embedding_row.id),
                business_id=business.id,
                name=business.name,
                description=business.description,
                similarity=similarity,
            )
            for embedding_row, business, similarity in rows
        ]

    def _vector_pass(self, query: str, threshold: Optional[float], limit: Optional[int]):
        if self.embedder is None or self.embedding_repo is None:
            return []

        threshold = self.config.similarity_threshold if threshold is None else threshold
        limit = limit or self.config.semantic_limit

        try:
            embedding = self.embedder.generate_embedding(query)
        except ScoringDegraded as e:
            logger.warning(f"Embedding unavailable, falling back to keyword retrieval: {e}")
            return []

        rows = self.embedding_repo.find_similar_businesses(embedding, threshold=threshold, top_k=limit)
        return [(business, similarity) for _, business, similarity in rows]

    @staticmethod
    def _add(
        merged: Dict[Any, CandidateMatch],
        row,
        terms: List[str],
        similarity: Optional[float] = None
    ) -> None:
        business = BusinessRecord.model_validate(row)
        if business.id in merged:
            return
        merged[business.id] = CandidateMatch(
            business=business,
            base_score=keyword_relevance(business, terms),
            reasons=keyword_highlights(business, terms),
            similarity=similarity,
        )
