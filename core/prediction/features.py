"""Feature vector construction for the success predictor."""

import math
from datetime import date
from typing import Iterable, List, Optional

from core.prediction.interfaces import FEATURE_COUNT
from core.retriever.dto import BusinessRecord


def _to_feature(value) -> Optional[float]:
    """Numeric value of an entry, or None when it is not a finite number."""
    if isinstance(value, bool):
        return None
    try:
        number = float(value)
    except (TypeError, ValueError):
        return None
    if math.isnan(number) or math.isinf(number):
        return None
    return number


def pad_features(values: Iterable, size: int = FEATURE_COUNT) -> List[float]:
    """Coerce entries to finite floats (dropping the rest), then pad with zeros or truncate to `size`."""
    numeric = [n for n in (_to_feature(v) for v in values) if n is not None]
    numeric = numeric[:size]
    return numeric + [0.0] * (size - len(numeric))


def build_feature_vector(business: BusinessRecord, current_year: Optional[int] = None) -> List[float]:
    """
    Features: rating, review count, years in business, employees / 100, verified.

    Missing values contribute 0; the tail is zero-padded to FEATURE_COUNT.
    """
    year = current_year or date.today().year
    years_in_business = max(0, year - business.founded_year) if business.founded_year else 0

    return pad_features([
        business.rating or 0.0,
        business.review_count or 0,
        years_in_business,
        (business.employees_count or 0) / 100.0,
        1.0 if business.verified else 0.0,
    ])
