"""
Prediction Module - optional success-probability input for scoring.

Public API:
- SuccessPredictor: interface for the black-box model
- HttpSuccessPredictor: remote HTTP implementation
- build_feature_vector / pad_features: feature vector helpers
"""

from core.prediction.interfaces import FEATURE_COUNT, SuccessPredictor
from core.prediction.http_predictor import HttpSuccessPredictor
from core.prediction.features import build_feature_vector, pad_features

__all__ = [
    'FEATURE_COUNT',
    'SuccessPredictor',
    'HttpSuccessPredictor',
    'build_feature_vector',
    'pad_features',
]
