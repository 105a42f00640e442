"""
Retriever Models - per-request scoring context.
"""

from dataclasses import dataclass, field
from typing import List, Optional

from core.retriever.dto import BusinessRecord


@dataclass
class CandidateMatch:
    """A retrieved business plus everything retrieval learned about it.

    Built fresh for every request and discarded once the response is built.
    """
    business: BusinessRecord
    base_score: float = 50.0
    reasons: List[str] = field(default_factory=list)
    similarity: Optional[float] = None
    success_probability: Optional[float] = None

    @property
    def business_id(self):
        return self.business.id
