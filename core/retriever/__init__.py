"""
Retriever Module - Stage 1: candidate retrieval.

Public API:
- CandidateRetriever: multi-pass retrieval over the business store
- CandidateMatch: per-request scoring context
- BusinessRecord, SimilarityHit: read-only DTOs
- SearchFilters: structured filters
"""

from core.retriever.dto import BusinessRecord, SimilarityHit
from core.retriever.filters import SearchFilters
from core.retriever.models import CandidateMatch
from core.retriever.service import CandidateRetriever

__all__ = [
    'BusinessRecord',
    'SimilarityHit',
    'SearchFilters',
    'CandidateMatch',
    'CandidateRetriever',
]
