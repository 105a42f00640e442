#!/usr/bin/env python3
"""
Scoring Service - Stage 2: additive, rule-based match scoring.

Composite score per candidate:
- Base relevance carried from retrieval
- Kind-specific bonus (b2b / candidate_to_job / startup_to_investor)
- Budget, company size and industry compatibility
- Similarity contribution: round(similarity * similarity_max_points)
- Success probability contribution: round(p * success_probability_max_points)

The raw sum is rounded and clamped to [0, 100]. Scoring is a pure function of
(candidate, request, config, current_year); ranking is a stable sort so equal
scores keep retrieval order.
"""

import logging
import math
from datetime import date
from typing import Dict, List, Optional, Tuple

from core.config_loader import ScoringConfig
from core.matchmaking.models import MatchKind
from core.retriever.models import CandidateMatch
from core.scorer import compatibility
from core.scorer import kind_bonus
from core.scorer.models import ScoredCandidate

logger = logging.getLogger(__name__)


def round_half_up(value: float) -> int:
    """Round .5 away from zero for positive values, unlike Python's banker's rounding."""
    return int(math.floor(value + 0.5))


def clamp_score(raw: float) -> int:
    return max(0, min(100, round_half_up(raw)))


class ScoringService:
    """
    Computes match scores for retrieved candidates.

    Holds only configuration; safe to share between concurrent requests.
    """

    def __init__(self, config: Optional[ScoringConfig] = None, current_year: Optional[int] = None):
        self.config = config or ScoringConfig()
        self._current_year = current_year

    @property
    def current_year(self) -> int:
        return self._current_year or date.today().year

    def score(self, candidate: CandidateMatch, request) -> int:
        """Match score in [0, 100] for one candidate."""
        return self.score_with_breakdown(candidate, request)[0]

    def score_with_breakdown(self, candidate: CandidateMatch, request) -> Tuple[int, Dict[str, float]]:
        """Match score plus every contribution that went into it.

        Args:
            candidate: Retrieved candidate with base relevance and optional inputs
            request: One of the MatchRequest variants

        Returns:
            Tuple of (clamped score, breakdown dict with a 'raw' total)
        """
        business = candidate.business
        requirements = request.requirements

        breakdown: Dict[str, float] = {'base': float(candidate.base_score)}
        breakdown.update(self._kind_bonus(candidate, request))

        breakdown['budget'] = compatibility.budget_points(business, requirements.budget_band, self.config)
        breakdown['size'] = compatibility.size_points(business, requirements.company_size_band, self.config)
        breakdown['industry'] = compatibility.industry_points(business, requirements.industry, self.config)

        if candidate.similarity is not None:
            breakdown['similarity'] = float(
                round_half_up(candidate.similarity * self.config.similarity_max_points)
            )
        if candidate.success_probability is not None:
            breakdown['success_probability'] = float(
                round_half_up(candidate.success_probability * self.config.success_probability_max_points)
            )

        raw = sum(breakdown.values())
        breakdown['raw'] = raw
        score = clamp_score(raw)

        logger.debug(f"Business {business.id}: raw={raw:.2f}, score={score}")
        return score, breakdown

    def rank(self, candidates: List[CandidateMatch], request) -> List[ScoredCandidate]:
        """Score candidates and sort by score, highest first.

        list.sort is stable, so candidates with equal scores stay in
        retrieval order.
        """
        scored = []
        for candidate in candidates:
            score, breakdown = self.score_with_breakdown(candidate, request)
            scored.append(ScoredCandidate(candidate=candidate, score=score, breakdown=breakdown))

        scored.sort(key=lambda s: s.score, reverse=True)
        return scored

    def _kind_bonus(self, candidate: CandidateMatch, request) -> Dict[str, float]:
        business = candidate.business
        kind = MatchKind(request.kind)

        if kind is MatchKind.B2B:
            return kind_bonus.b2b_bonus(business, request.description, self.current_year, self.config)
        if kind is MatchKind.CANDIDATE_TO_JOB:
            return kind_bonus.job_bonus(business, self.config)
        return kind_bonus.investor_bonus(business, self.config)
