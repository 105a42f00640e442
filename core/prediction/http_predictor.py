"""
HTTP Success Predictor - calls a remote model endpoint.

The endpoint accepts `{"features": [...]}` and answers `{"probability": p}`.
"""
import logging
import math
from typing import List

import requests

from core.exceptions import ScoringDegraded
from core.prediction.interfaces import FEATURE_COUNT, SuccessPredictor

logger = logging.getLogger(__name__)


class HttpSuccessPredictor(SuccessPredictor):
    """Success predictor backed by a remote HTTP model with a short timeout."""

    def __init__(self, url: str, timeout_seconds: float = 2.0, session: requests.Session = None):
        self.url = url
        self.timeout_seconds = timeout_seconds
        self.session = session or requests.Session()

    def predict(self, features: List[float]) -> float:
        if len(features) != FEATURE_COUNT:
            raise ScoringDegraded(
                f"Expected {FEATURE_COUNT} features, got {len(features)}"
            )

        try:
            response = self.session.post(
                self.url,
                json={"features": features},
                timeout=self.timeout_seconds
            )
            response.raise_for_status()
            payload = response.json()
        except requests.exceptions.Timeout as e:
            raise ScoringDegraded(f"Success predictor timed out after {self.timeout_seconds}s") from e
        except (requests.exceptions.RequestException, ValueError) as e:
            raise ScoringDegraded(f"Success predictor request failed: {e}") from e

        probability = payload.get("probability") if isinstance(payload, dict) else None
        if not isinstance(probability, (int, float)) or isinstance(probability, bool):
            raise ScoringDegraded(f"Success predictor returned no probability: {payload!r}")

        probability = float(probability)
        if math.isnan(probability) or not (0.0 <= probability <= 1.0):
            raise ScoringDegraded(f"Success probability out of range: {probability}")

        logger.debug(f"Success predictor returned {probability:.3f}")
        return probability
