"""
Success Predictor Interface - black-box success probability for a business.

The model behind it is an external capability: ten numeric features in, one
probability in [0, 1] out. Training and loading live elsewhere.
"""
from abc import ABC, abstractmethod
from typing import List

FEATURE_COUNT = 10


class SuccessPredictor(ABC):
    """Abstract interface for success-probability models."""

    @abstractmethod
    def predict(self, features: List[float]) -> float:
        """
        Return the success probability for a feature vector of FEATURE_COUNT floats.

        Raises:
            ScoringDegraded: if the model is unavailable or returns garbage
        """
        pass
