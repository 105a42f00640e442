#!/usr/bin/env python3
"""
Test suite for CandidateRetriever.

Repositories are mocked; rows are attribute bags shaped like ORM rows.
"""

import unittest
from types import SimpleNamespace
from unittest.mock import MagicMock

from sqlalchemy.exc import OperationalError

from core.config_loader import RetrievalConfig
from core.exceptions import RetrievalError, ScoringDegraded
from core.retriever import CandidateRetriever, SearchFilters
from tests.mocks.business_mocks import MockEmbeddingProvider, make_row


def embedding_hit(row, similarity, embedding_id="emb-1"):
    return (SimpleNamespace(id=embedding_id), row, similarity)


class TestCandidateRetriever(unittest.TestCase):

    def setUp(self):
        self.business_repo = MagicMock()
        self.business_repo.top_rated.return_value = []
        self.business_repo.search_by_keywords.return_value = []
        self.business_repo.filter_businesses.return_value = []
        self.embedding_repo = MagicMock()
        self.embedding_repo.find_similar_businesses.return_value = []
        self.embedder = MockEmbeddingProvider()

    def make_retriever(self, embedder=True, **config):
        return CandidateRetriever(
            business_repo=self.business_repo,
            embedding_repo=self.embedding_repo,
            embedder=self.embedder if embedder else None,
            config=RetrievalConfig(**config)
        )

    def test_empty_query_returns_top_rated(self):
        self.business_repo.top_rated.return_value = [make_row(1, rating=4.9), make_row(2, rating=4.1)]

        candidates = self.make_retriever().retrieve("", None)

        self.business_repo.top_rated.assert_called_once_with(20)
        self.business_repo.search_by_keywords.assert_not_called()
        self.assertEqual([c.business_id for c in candidates], [1, 2])
        self.assertEqual(candidates[0].base_score, 60)
        self.assertEqual(candidates[0].reasons, [])
        self.assertIsNone(candidates[0].similarity)

    def test_empty_filters_count_as_no_filters(self):
        self.make_retriever().retrieve("   ", SearchFilters())
        self.business_repo.top_rated.assert_called_once()
        self.business_repo.filter_businesses.assert_not_called()

    def test_merge_order_and_dedup_first_occurrence_wins(self):
        self.embedding_repo.find_similar_businesses.return_value = [
            embedding_hit(make_row(3, name="Vision Works"), 0.91),
        ]
        self.business_repo.search_by_keywords.return_value = [make_row(1), make_row(3)]
        self.business_repo.filter_businesses.return_value = [make_row(2), make_row(1)]

        candidates = self.make_retriever().retrieve("vision", SearchFilters(location="Huntsville"))

        self.assertEqual([c.business_id for c in candidates], [3, 1, 2])
        self.assertEqual(candidates[0].similarity, 0.91)
        self.assertIsNone(candidates[1].similarity)

    def test_cap_to_limit(self):
        self.business_repo.search_by_keywords.return_value = [make_row(i) for i in range(10)]
        self.business_repo.filter_businesses.return_value = [make_row(i) for i in range(10, 20)]

        candidates = self.make_retriever(embedder=False).retrieve("ai", SearchFilters(verified=True), limit=12)

        self.assertEqual(len(candidates), 12)
        self.assertEqual(candidates[-1].business_id, 11)

    def test_keyword_pass_receives_normalized_terms(self):
        self.make_retriever(embedder=False).retrieve("Machine  machine Vision", None, limit=5)
        self.business_repo.search_by_keywords.assert_called_once_with(['machine', 'vision'], 5)

    def test_vector_pass_uses_threshold_overrides(self):
        self.make_retriever().retrieve("robots", None, similarity_threshold=0.7, semantic_limit=5)

        args, kwargs = self.embedding_repo.find_similar_businesses.call_args
        self.assertEqual(kwargs, {'threshold': 0.7, 'top_k': 5})
        self.assertEqual(self.embedder.calls, ["robots"])

    def test_vector_pass_skipped_without_embedder(self):
        self.make_retriever(embedder=False).retrieve("robots", None)
        self.embedding_repo.find_similar_businesses.assert_not_called()

    def test_embedder_failure_degrades_to_keywords(self):
        self.embedder = MockEmbeddingProvider(fail=True)
        self.business_repo.search_by_keywords.return_value = [make_row(7)]

        with self.assertLogs('core.retriever.service', level='WARNING'):
            candidates = self.make_retriever().retrieve("robots", None)

        self.assertEqual([c.business_id for c in candidates], [7])
        self.embedding_repo.find_similar_businesses.assert_not_called()

    def test_database_failure_raises_retrieval_error(self):
        self.business_repo.search_by_keywords.side_effect = OperationalError("SELECT", {}, Exception("down"))

        with self.assertRaises(RetrievalError):
            self.make_retriever(embedder=False).retrieve("robots", None)

    def test_candidates_carry_relevance_and_highlights(self):
        self.business_repo.search_by_keywords.return_value = [
            make_row(1, name="Vision Labs", category="Computer Vision", verified=True),
        ]

        candidate = self.make_retriever(embedder=False).retrieve("vision", None)[0]

        # 50 + 30 name + 20 category + 5 anywhere + 15 verified; description has no "vision"
        self.assertEqual(candidate.base_score, 100)
        self.assertEqual(candidate.reasons, ['Business name matches "vision"', "Category: Computer Vision"])


class TestSemanticSearch(unittest.TestCase):

    def setUp(self):
        self.embedding_repo = MagicMock()
        self.retriever = CandidateRetriever(
            business_repo=MagicMock(),
            embedding_repo=self.embedding_repo,
            embedder=MockEmbeddingProvider()
        )

    def test_returns_raw_hits(self):
        self.embedding_repo.find_similar_businesses.return_value = [
            embedding_hit(make_row(4, name="NLP Co", description="Language models"), 0.8, "e-4"),
        ]

        hits = self.retriever.semantic_search("language", threshold=0.6, limit=3)

        self.embedding_repo.find_similar_businesses.assert_called_once_with([0.1] * 8, threshold=0.6, top_k=3)
        self.assertEqual(len(hits), 1)
        self.assertEqual(hits[0].id, "e-4")
        self.assertEqual(hits[0].business_id, 4)
        self.assertEqual(hits[0].similarity, 0.8)

    def test_defaults_from_config(self):
        self.embedding_repo.find_similar_businesses.return_value = []
        self.retriever.semantic_search("language")
        _, kwargs = self.embedding_repo.find_similar_businesses.call_args
        self.assertEqual(kwargs, {'threshold': 0.5, 'top_k': 20})

    def test_not_configured(self):
        retriever = CandidateRetriever(business_repo=MagicMock())
        with self.assertRaises(ScoringDegraded):
            retriever.semantic_search("language")

    def test_database_failure(self):
        self.embedding_repo.find_similar_businesses.side_effect = OperationalError("SELECT", {}, Exception("down"))
        with self.assertRaises(RetrievalError):
            self.retriever.semantic_search("language")


if __name__ == '__main__':
    unittest.main()
