#!/usr/bin/env python3
"""
Kind-specific bonuses.

Each request kind rewards different signals:
- b2b: capability overlap with a fixed service vocabulary, business age, certifications
- candidate_to_job: employee count inside the active hiring band
- startup_to_investor: verification and rating
"""

from typing import List

from core.config_loader import ScoringConfig
from core.retriever.dto import BusinessRecord

SERVICE_VOCABULARY = (
    'automation', 'analytics', 'prediction', 'optimization', 'classification',
    'detection', 'recognition', 'processing', 'generation', 'recommendation',
    'chatbot', 'virtual assistant', 'machine learning', 'deep learning',
    'computer vision', 'natural language', 'speech recognition', 'robotics',
)


def extract_service_terms(text: str) -> List[str]:
    """Vocabulary terms present in the request text, in vocabulary order."""
    text = (text or '').lower()
    return [term for term in SERVICE_VOCABULARY if term in text]


def matched_capabilities(business: BusinessRecord, terms: List[str]) -> List[str]:
    """Terms that also appear in any of the business's capability texts."""
    capabilities = [c.lower() for c in business.capability_texts()]
    return [term for term in terms if any(term in cap for cap in capabilities)]


def capability_points(business: BusinessRecord, description: str, config: ScoringConfig) -> float:
    """Up to capability_max_points, proportional to matched terms over the full vocabulary."""
    matched = matched_capabilities(business, extract_service_terms(description))
    return config.capability_max_points * len(matched) / len(SERVICE_VOCABULARY)


def experience_points(business: BusinessRecord, current_year: int, config: ScoringConfig) -> float:
    if not business.founded_year:
        return 0.0
    years = max(0, current_year - business.founded_year)
    return min(years * config.experience_points_per_year, config.experience_max_points)


def certification_points(business: BusinessRecord, config: ScoringConfig) -> float:
    return config.certification_points if business.certifications else 0.0


def b2b_bonus(business: BusinessRecord, description: str, current_year: int, config: ScoringConfig) -> dict:
    return {
        'capability': capability_points(business, description, config),
        'experience': experience_points(business, current_year, config),
        'certification': certification_points(business, config),
    }


def job_bonus(business: BusinessRecord, config: ScoringConfig) -> dict:
    employees = business.employees_count
    in_band = (
        employees is not None
        and config.hiring_band_min_employees <= employees <= config.hiring_band_max_employees
    )
    return {'hiring_band': config.hiring_band_points if in_band else 0.0}


def investor_bonus(business: BusinessRecord, config: ScoringConfig) -> dict:
    high_rating = business.rating is not None and business.rating >= config.high_rating_threshold
    return {
        'verified': config.investor_verified_points if business.verified else 0.0,
        'rating': config.investor_rating_points if high_rating else 0.0,
    }
