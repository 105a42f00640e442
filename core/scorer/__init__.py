#!/usr/bin/env python3
"""
Scoring Module - Stage 2: Rule-based Scoring.

Public API:
- ScoringService: composite match score and stable ranking
- ReasonGenerator: reasons, confidence level and recommendations
- ScoredCandidate: Dataclass for scored candidates

Split into focused modules:

- models.py: Data structures (ScoredCandidate)
- kind_bonus.py: Per-kind bonuses (service vocabulary, hiring band, investor signals)
- compatibility.py: Budget, company size and industry checks
- reasons.py: ReasonGenerator
- service.py: ScoringService orchestrator
"""

from core.scorer.models import ScoredCandidate
from core.scorer.reasons import ReasonGenerator
from core.scorer.service import ScoringService

__all__ = ['ScoringService', 'ReasonGenerator', 'ScoredCandidate']
