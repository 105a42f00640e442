#!/usr/bin/env python3
"""
Cross-cutting compatibility checks applied regardless of request kind.
"""

import math
from typing import Optional

from core.config_loader import ScoringConfig
from core.retriever.dto import BusinessRecord

BUDGET_BANDS = {
    'under-10k': (0, 10_000),
    '10k-50k': (10_000, 50_000),
    '50k-100k': (50_000, 100_000),
    '100k-500k': (100_000, 500_000),
    'over-500k': (500_000, math.inf),
}

SIZE_BANDS = {
    'startup': (1, 20),
    'small': (21, 100),
    'medium': (101, 500),
    'large': (501, math.inf),
}


def budget_points(business: BusinessRecord, budget_band: Optional[str], config: ScoringConfig) -> float:
    """+budget_match_points on overlap, -budget_mismatch_penalty when disjoint, 0 without data.

    A business listing only a minimum is assumed to go up to
    budget_max_multiplier times that minimum.
    """
    band = BUDGET_BANDS.get(budget_band) if budget_band else None
    if band is None or business.project_budget_min is None:
        return 0.0

    request_low, request_high = band
    business_low = business.project_budget_min
    business_high = business.project_budget_max
    if business_high is None:
        business_high = business_low * config.budget_max_multiplier

    if request_high >= business_low and request_low <= business_high:
        return config.budget_match_points
    return -config.budget_mismatch_penalty


def size_points(business: BusinessRecord, size_band: Optional[str], config: ScoringConfig) -> float:
    band = SIZE_BANDS.get(size_band) if size_band else None
    if band is None or business.employees_count is None:
        return 0.0
    low, high = band
    return config.size_match_points if low <= business.employees_count <= high else 0.0


def industry_points(business: BusinessRecord, industry: Optional[str], config: ScoringConfig) -> float:
    """Case-insensitive substring match in either direction between industry and category."""
    if not industry or not business.category:
        return 0.0
    category = business.category.lower()
    industry = industry.lower()
    if industry in category or category in industry:
        return config.industry_match_points
    return 0.0
