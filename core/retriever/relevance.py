"""
Keyword relevance - the base score every candidate carries into scoring.

Rules:
- 50 base
- per query term: +30 name, +20 category, +10 description, +5 anywhere
- +15 verified, +10 rating above 4
- capped at 100
"""

from typing import List, Sequence

from core.retriever.dto import BusinessRecord

BASE_RELEVANCE = 50
NAME_MATCH_POINTS = 30
CATEGORY_MATCH_POINTS = 20
DESCRIPTION_MATCH_POINTS = 10
TEXT_MATCH_POINTS = 5
VERIFIED_POINTS = 15
HIGH_RATING_POINTS = 10
HIGH_RATING_THRESHOLD = 4.0
MAX_RELEVANCE = 100


def _contains(field_value, term: str) -> bool:
    return bool(field_value) and term in field_value.lower()


def keyword_relevance(business: BusinessRecord, terms: Sequence[str]) -> float:
    score = BASE_RELEVANCE
    text = business.searchable_text()

    for term in terms:
        if _contains(business.name, term):
            score += NAME_MATCH_POINTS
        if _contains(business.category, term):
            score += CATEGORY_MATCH_POINTS
        if _contains(business.description, term):
            score += DESCRIPTION_MATCH_POINTS
        if term in text:
            score += TEXT_MATCH_POINTS

    if business.verified:
        score += VERIFIED_POINTS
    if business.rating is not None and business.rating > HIGH_RATING_THRESHOLD:
        score += HIGH_RATING_POINTS

    return min(MAX_RELEVANCE, score)


def keyword_highlights(business: BusinessRecord, terms: Sequence[str]) -> List[str]:
    """Human-readable notes on which terms hit the name or category, de-duplicated."""
    highlights = []
    for term in terms:
        if _contains(business.name, term):
            highlights.append(f'Business name matches "{term}"')
        if _contains(business.category, term):
            highlights.append(f"Category: {business.category}")
    return list(dict.fromkeys(highlights))
