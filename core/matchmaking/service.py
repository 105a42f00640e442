#!/usr/bin/env python3
"""
Matchmaking Service - retrieve, score, explain.

Glues the pipeline stages for a typed match request:
1. CandidateRetriever builds the candidate set
2. The optional success predictor adds a probability per candidate (best-effort)
3. ScoringService ranks candidates (stable on ties)
4. ReasonGenerator attaches reasons, confidence and recommendations
"""

import logging
from typing import List, Optional

from core.exceptions import ScoringDegraded
from core.matchmaking.models import MatchResult
from core.prediction import SuccessPredictor, build_feature_vector
from core.retriever.filters import SearchFilters
from core.retriever.models import CandidateMatch
from core.retriever.service import CandidateRetriever
from core.scorer import ReasonGenerator, ScoringService

logger = logging.getLogger(__name__)


def filters_from_requirements(request) -> Optional[SearchFilters]:
    """Location and industry requirements double as a structured filter pass."""
    requirements = request.requirements
    filters = SearchFilters(location=requirements.location, category=requirements.industry)
    return None if filters.is_empty() else filters


class MatchmakingService:
    """
    Runs a match request through retrieval, scoring and reason generation.

    All collaborators are injected; nothing here outlives the request except
    configuration.
    """

    def __init__(
        self,
        retriever: CandidateRetriever,
        scorer: ScoringService,
        reason_generator: ReasonGenerator,
        predictor: Optional[SuccessPredictor] = None
    ):
        self.retriever = retriever
        self.scorer = scorer
        self.reason_generator = reason_generator
        self.predictor = predictor

    def find_matches(
        self,
        request,
        limit: Optional[int] = None,
        filters: Optional[SearchFilters] = None,
        similarity_threshold: Optional[float] = None,
        semantic_limit: Optional[int] = None
    ) -> List[MatchResult]:
        """Ranked MatchResults for a request, at most `limit` of them.

        Raises:
            RetrievalError: if candidates cannot be retrieved
        """
        if filters is None:
            filters = filters_from_requirements(request)

        candidates = self.retriever.retrieve(
            query=request.description,
            filters=filters,
            similarity_threshold=similarity_threshold,
            semantic_limit=semantic_limit
        )
        self._attach_success_probability(candidates)

        ranked = self.scorer.rank(candidates, request)
        if limit is not None:
            ranked = ranked[:limit]

        results = [
            self.build_result(scored.candidate, scored.score, request)
            for scored in ranked
        ]
        logger.info(f"{request.kind} match: {len(candidates)} candidates, returning {len(results)}")
        return results

    def build_result(self, candidate: CandidateMatch, score: int, request) -> MatchResult:
        return MatchResult(
            business=candidate.business,
            match_score=score,
            match_reasons=self.reason_generator.reasons(candidate, request),
            confidence_level=self.reason_generator.confidence_level(score, candidate),
            recommendations=self.reason_generator.recommendations(candidate, request),
            similarity=candidate.similarity,
            success_probability=candidate.success_probability,
        )

    def _attach_success_probability(self, candidates: List[CandidateMatch]) -> None:
        """Best-effort probabilities; the first failure disables the predictor for this request."""
        if self.predictor is None:
            return

        for index, candidate in enumerate(candidates):
            features = build_feature_vector(candidate.business, self.scorer.current_year)
            try:
                candidate.success_probability = self.predictor.predict(features)
            except ScoringDegraded as e:
                logger.warning(
                    f"Success probability unavailable, skipping predictor for "
                    f"{len(candidates) - index} remaining candidates: {e}"
                )
                return
