#!/usr/bin/env python3
"""
Test suite for RequestRouter: envelope validation, task dispatch and error mapping.
"""

import unittest
from unittest.mock import MagicMock

from core.exceptions import RetrievalError
from core.matchmaking.service import MatchmakingService
from core.retriever.dto import SimilarityHit
from core.router import RequestRouter, INTERNAL_ERROR, RETRIEVAL_FAILED
from core.scorer import ReasonGenerator, ScoringService
from tests.mocks.business_mocks import (
    CURRENT_YEAR,
    MockSuccessPredictor,
    make_business,
    make_candidate,
)


class RouterTestCase(unittest.TestCase):

    def setUp(self):
        self.retriever = MagicMock()
        self.retriever.retrieve.return_value = [
            make_candidate(make_business(1, verified=True, rating=4.6, website="https://a.example"), base_score=75),
            make_candidate(make_business(2), base_score=50),
        ]
        self.predictor = MockSuccessPredictor(default=0.25)
        self.matchmaking = MatchmakingService(
            retriever=self.retriever,
            scorer=ScoringService(current_year=CURRENT_YEAR),
            reason_generator=ReasonGenerator(),
        )
        self.router = RequestRouter(self.matchmaking, predictor=self.predictor)


class TestEnvelope(RouterTestCase):

    def test_unknown_task(self):
        response = self.router.dispatch({"task": "bogus"})
        self.assertEqual(response.status_code, 400)
        self.assertEqual(response.body, {"success": False, "error": "Unknown task: bogus"})

    def test_missing_task(self):
        response = self.router.dispatch({"payload": {}})
        self.assertEqual(response.status_code, 400)
        self.assertIn("task", response.body["error"])

    def test_missing_payload(self):
        response = self.router.dispatch({"task": "find_and_score"})
        self.assertEqual(response.status_code, 400)
        self.assertEqual(response.body["error"], "Missing required field: payload")

    def test_non_object_body(self):
        response = self.router.dispatch(["find_and_score"])
        self.assertEqual(response.status_code, 400)
        self.assertFalse(response.body["success"])

    def test_connector_aliases(self):
        response = self.router.dispatch({
            "task": "connector_get_ml_score_for_business",
            "payload": {"businessFeatures": [4.5]},
        })
        self.assertEqual(response.status_code, 200)

    def test_tasks(self):
        self.assertEqual(self.router.tasks, ['find_and_score', 'get_ml_score', 'match', 'semantic_search_only'])


class TestFindAndScore(RouterTestCase):

    def test_success(self):
        response = self.router.dispatch({
            "task": "find_and_score",
            "payload": {"searchCriteria": {"queryText": "automation", "location": "Huntsville"}, "limit": 5},
        })

        self.assertEqual(response.status_code, 200)
        self.assertTrue(response.body["success"])
        data = response.body["data"]
        self.assertEqual([r["business"]["id"] for r in data], [1, 2])
        self.assertEqual(data[0]["confidenceLevel"], "high")
        self.assertEqual(data[0]["matchScore"], 75)
        self.assertIn("Review their portfolio and case studies", data[0]["recommendations"])

        kwargs = self.retriever.retrieve.call_args.kwargs
        self.assertEqual(kwargs["query"], "automation")
        self.assertEqual(kwargs["filters"].location, "Huntsville")

    def test_limit_applied(self):
        response = self.router.dispatch({
            "task": "find_and_score",
            "payload": {"searchCriteria": {}, "limit": 1},
        })
        self.assertEqual(len(response.body["data"]), 1)

    def test_missing_search_criteria(self):
        response = self.router.dispatch({"task": "find_and_score", "payload": {"limit": 3}})
        self.assertEqual(response.status_code, 400)
        self.assertEqual(response.body["error"], "Missing required field: searchCriteria")

    def test_invalid_requirement(self):
        response = self.router.dispatch({
            "task": "find_and_score",
            "payload": {"searchCriteria": {"requirements": {"budget": "lots"}}},
        })
        self.assertEqual(response.status_code, 400)
        self.assertTrue(response.body["error"].startswith("Invalid field searchCriteria.requirements.budget"))

    def test_unknown_requirement_is_named_in_full(self):
        response = self.router.dispatch({
            "task": "find_and_score",
            "payload": {"searchCriteria": {"requirements": {"colour": "red"}}},
        })
        self.assertEqual(response.status_code, 400)
        self.assertTrue(response.body["error"].startswith("Invalid field searchCriteria.requirements.colour"))

    def test_retrieval_failure_is_500_without_partial_data(self):
        self.retriever.retrieve.side_effect = RetrievalError("could not connect to server at 10.0.0.5")

        with self.assertLogs('core.router', level='ERROR'):
            response = self.router.dispatch({"task": "find_and_score", "payload": {"searchCriteria": {}}})

        self.assertEqual(response.status_code, 500)
        self.assertEqual(response.body, {"success": False, "error": RETRIEVAL_FAILED})

    def test_unexpected_failure_is_sanitized(self):
        self.retriever.retrieve.side_effect = KeyError("secret_column")

        with self.assertLogs('core.router', level='ERROR'):
            response = self.router.dispatch({"task": "find_and_score", "payload": {"searchCriteria": {}}})

        self.assertEqual(response.status_code, 500)
        self.assertEqual(response.body["error"], INTERNAL_ERROR)


class TestSemanticSearchOnly(RouterTestCase):

    def test_success(self):
        self.retriever.semantic_search.return_value = [
            SimilarityHit(id="e-1", business_id=1, name="A", description=None, similarity=0.9),
        ]

        response = self.router.dispatch({
            "task": "semantic_search_only",
            "payload": {"queryText": "language models", "threshold": 0.7, "limit": 3},
        })

        self.assertEqual(response.status_code, 200)
        self.assertEqual(response.body["data"], [
            {"id": "e-1", "businessId": 1, "name": "A", "description": None, "similarity": 0.9},
        ])
        self.retriever.semantic_search.assert_called_once_with("language models", threshold=0.7, limit=3)

    def test_missing_query_text(self):
        response = self.router.dispatch({"task": "semantic_search_only", "payload": {}})
        self.assertEqual(response.status_code, 400)
        self.assertEqual(response.body["error"], "Missing required field: queryText")

    def test_threshold_out_of_range(self):
        response = self.router.dispatch({
            "task": "semantic_search_only",
            "payload": {"queryText": "x", "threshold": 2},
        })
        self.assertEqual(response.status_code, 400)
        self.assertIn("threshold", response.body["error"])


class TestGetMlScore(RouterTestCase):

    def test_features_padded_to_ten(self):
        response = self.router.dispatch({
            "task": "get_ml_score",
            "payload": {"businessFeatures": [4.5, "n/a", 120, None, 3]},
        })

        self.assertEqual(response.status_code, 200)
        self.assertEqual(response.body["data"], 0.25)
        self.assertEqual(self.predictor.calls[0], [4.5, 120.0, 3.0] + [0.0] * 7)

    def test_features_truncated_to_ten(self):
        self.router.dispatch({"task": "get_ml_score", "payload": {"businessFeatures": list(range(14))}})
        self.assertEqual(len(self.predictor.calls[0]), 10)

    def test_missing_features(self):
        response = self.router.dispatch({"task": "get_ml_score", "payload": {}})
        self.assertEqual(response.status_code, 400)
        self.assertEqual(response.body["error"], "Missing required field: businessFeatures")

    def test_predictor_failure(self):
        router = RequestRouter(self.matchmaking, predictor=MockSuccessPredictor(fail=True))
        response = router.dispatch({"task": "get_ml_score", "payload": {"businessFeatures": [1]}})
        self.assertEqual(response.status_code, 500)
        self.assertEqual(response.body["error"], "ML scoring is unavailable")

    def test_not_configured(self):
        router = RequestRouter(self.matchmaking)
        response = router.dispatch({"task": "get_ml_score", "payload": {"businessFeatures": [1]}})
        self.assertEqual(response.status_code, 500)
        self.assertEqual(response.body["error"], "ML scoring is not configured")


class TestMatchTask(RouterTestCase):

    def test_typed_request(self):
        response = self.router.dispatch({
            "task": "match",
            "payload": {"kind": "candidate-to-job", "description": "data scientist", "limit": 1},
        })
        self.assertEqual(response.status_code, 200)
        self.assertEqual(len(response.body["data"]), 1)
        self.assertEqual(response.body["data"][0]["recommendations"][0], "Check their current job openings")

    def test_unknown_kind(self):
        response = self.router.dispatch({"task": "match", "payload": {"kind": "dating"}})
        self.assertEqual(response.status_code, 400)
        self.assertFalse(response.body["success"])

    def test_bad_limit(self):
        response = self.router.dispatch({"task": "match", "payload": {"kind": "b2b", "limit": 0}})
        self.assertEqual(response.status_code, 400)
        self.assertEqual(response.body["error"], "Invalid field limit: must be an integer between 1 and 100")


class TestCriteriaRequirements(RouterTestCase):

    def setUp(self):
        super().setUp()
        self.matchmaking.find_matches = MagicMock(return_value=[])

    def _request_for(self, criteria):
        response = self.router.dispatch({"task": "find_and_score", "payload": {"searchCriteria": criteria}})
        self.assertEqual(response.status_code, 200)
        return self.matchmaking.find_matches.call_args[0][0]

    def test_criteria_fill_missing_requirements(self):
        request = self._request_for({"industry": "Healthcare", "location": "Mobile"})
        self.assertEqual(request.requirements.industry, "Healthcare")
        self.assertEqual(request.requirements.location, "Mobile")

    def test_explicit_requirements_win(self):
        request = self._request_for({
            "industry": "Healthcare",
            "requirements": {"industry": "Biotech", "budget": "50k-100k", "size": "small"},
        })
        self.assertEqual(request.requirements.industry, "Biotech")
        self.assertEqual(request.requirements.budget_band, "50k-100k")
        self.assertEqual(request.requirements.company_size_band, "small")


if __name__ == '__main__':
    unittest.main()
