"""
Tests for HttpSuccessPredictor: request shape and every degraded path.
"""
import unittest
from unittest.mock import MagicMock

import requests

from core.exceptions import ScoringDegraded
from core.prediction import HttpSuccessPredictor

FEATURES = [4.5, 10.0, 5.0, 0.5, 1.0, 0.0, 0.0, 0.0, 0.0, 0.0]


def _session_returning(payload):
    session = MagicMock()
    response = MagicMock()
    response.json.return_value = payload
    session.post.return_value = response
    return session


class TestHttpSuccessPredictor(unittest.TestCase):

    def test_returns_probability(self):
        session = _session_returning({"probability": 0.8})
        predictor = HttpSuccessPredictor("http://model/predict", timeout_seconds=1.5, session=session)

        self.assertAlmostEqual(predictor.predict(FEATURES), 0.8)
        session.post.assert_called_once_with(
            "http://model/predict", json={"features": FEATURES}, timeout=1.5
        )

    def test_integer_probability_accepted(self):
        predictor = HttpSuccessPredictor("http://model", session=_session_returning({"probability": 1}))
        self.assertEqual(predictor.predict(FEATURES), 1.0)

    def test_wrong_feature_count(self):
        session = MagicMock()
        predictor = HttpSuccessPredictor("http://model", session=session)

        with self.assertRaises(ScoringDegraded):
            predictor.predict([1.0, 2.0])
        session.post.assert_not_called()

    def test_timeout(self):
        session = MagicMock()
        session.post.side_effect = requests.exceptions.Timeout("slow")
        predictor = HttpSuccessPredictor("http://model", session=session)

        with self.assertRaisesRegex(ScoringDegraded, "timed out"):
            predictor.predict(FEATURES)

    def test_http_error(self):
        session = _session_returning({})
        session.post.return_value.raise_for_status.side_effect = requests.exceptions.HTTPError("503")
        predictor = HttpSuccessPredictor("http://model", session=session)

        with self.assertRaises(ScoringDegraded):
            predictor.predict(FEATURES)

    def test_invalid_json(self):
        session = MagicMock()
        session.post.return_value.json.side_effect = ValueError("not json")
        predictor = HttpSuccessPredictor("http://model", session=session)

        with self.assertRaises(ScoringDegraded):
            predictor.predict(FEATURES)

    def test_rejects_bad_probabilities(self):
        for payload in ({}, {"probability": None}, {"probability": "0.5"}, {"probability": True},
                        {"probability": 1.2}, {"probability": -0.1}, {"probability": float("nan")}, [0.5]):
            with self.subTest(payload=payload):
                predictor = HttpSuccessPredictor("http://model", session=_session_returning(payload))
                with self.assertRaises(ScoringDegraded):
                    predictor.predict(FEATURES)


if __name__ == '__main__':
    unittest.main()
