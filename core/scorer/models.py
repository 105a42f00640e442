#!/usr/bin/env python3
"""
Scoring Models - Data structures for scoring results.
"""

from typing import Dict
from dataclasses import dataclass, field

from core.retriever.models import CandidateMatch


@dataclass
class ScoredCandidate:
    """A candidate with its clamped match score and the contributions behind it."""
    candidate: CandidateMatch
    score: int = 0
    breakdown: Dict[str, float] = field(default_factory=dict)

    @property
    def business(self):
        return self.candidate.business
