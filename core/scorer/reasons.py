#!/usr/bin/env python3
"""
Reason Generator - match reasons, confidence level and next steps.

Uses the same inputs and thresholds as the scorer so the explanation always
agrees with the score.
"""

from typing import List

from core.config_loader import ScoringConfig
from core.matchmaking.models import MatchKind
from core.retriever.models import CandidateMatch

VERIFIED_REASON = "Verified company profile"
LOCATION_REASON = "Located in your preferred area"
RIGHT_SIZED_REASON = "Right-sized team for personalized service"
LARGE_COMPANY_REASON = "Large, established company with extensive resources"

RIGHT_SIZED_MIN_EMPLOYEES = 10
RIGHT_SIZED_MAX_EMPLOYEES = 200

RECOMMENDATIONS = {
    MatchKind.CANDIDATE_TO_JOB: [
        "Check their current job openings",
        "Connect with their HR team or hiring manager",
        "Research the company culture and benefits",
    ],
    MatchKind.STARTUP_TO_INVESTOR: [
        "Prepare a compelling pitch deck",
        "Research their investment criteria and portfolio",
        "Network through mutual connections if possible",
    ],
}


def _format_rating(rating: float) -> str:
    return f"{rating:g}"


class ReasonGenerator:
    """Deterministic explanations for a scored candidate."""

    def __init__(self, config: ScoringConfig = None):
        self.config = config or ScoringConfig()

    def reasons(self, candidate: CandidateMatch, request) -> List[str]:
        """Ordered, de-duplicated reasons, at most max_reasons entries.

        Order: retrieval highlights, verification, rating, location, team size.
        """
        business = candidate.business
        reasons = list(candidate.reasons)

        if business.verified:
            reasons.append(VERIFIED_REASON)

        if business.rating is not None and business.rating >= self.config.high_rating_threshold:
            reasons.append(f"High customer rating ({_format_rating(business.rating)}/5)")

        location = request.requirements.location
        if location and business.location and location.lower() in business.location.lower():
            reasons.append(LOCATION_REASON)

        employees = business.employees_count
        if employees is not None:
            if RIGHT_SIZED_MIN_EMPLOYEES <= employees <= RIGHT_SIZED_MAX_EMPLOYEES:
                reasons.append(RIGHT_SIZED_REASON)
            elif employees > RIGHT_SIZED_MAX_EMPLOYEES:
                reasons.append(LARGE_COMPANY_REASON)

        return list(dict.fromkeys(reasons))[:self.config.max_reasons]

    def confidence_level(self, score: int, candidate: CandidateMatch) -> str:
        """'high', 'medium' or 'low'; the high check runs first."""
        business = candidate.business
        high_rating = business.rating is not None and business.rating >= self.config.high_rating_threshold

        if score >= self.config.confidence_high_score and business.verified and high_rating:
            return 'high'
        if score >= self.config.confidence_medium_score or (
            score >= self.config.confidence_verified_medium_score and business.verified
        ):
            return 'medium'
        return 'low'

    def recommendations(self, candidate: CandidateMatch, request) -> List[str]:
        kind = MatchKind(request.kind)

        if kind is MatchKind.B2B:
            steps = ["Schedule a consultation to discuss your specific requirements"]
            if candidate.business.website:
                steps.append("Review their portfolio and case studies")
            steps.append("Request a detailed project proposal and timeline")
        else:
            steps = list(RECOMMENDATIONS[kind])

        return steps[:self.config.max_recommendations]
