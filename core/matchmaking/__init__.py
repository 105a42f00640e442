"""
Matchmaking Module - typed match requests and the end-to-end match pipeline.
"""

from core.matchmaking.models import (
    MatchKind,
    MatchRequirements,
    B2BMatchRequest,
    CandidateToJobRequest,
    StartupToInvestorRequest,
    MatchRequest,
    MatchResult,
    parse_match_request,
)

__all__ = [
    'MatchKind',
    'MatchRequirements',
    'B2BMatchRequest',
    'CandidateToJobRequest',
    'StartupToInvestorRequest',
    'MatchRequest',
    'MatchResult',
    'parse_match_request',
]
