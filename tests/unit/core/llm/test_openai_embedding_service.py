"""
Tests for OpenAIEmbeddingService.

The OpenAI client is patched; no network calls are made.
"""
import unittest
from types import SimpleNamespace
from unittest.mock import patch

import openai

from core.exceptions import ScoringDegraded
from core.llm.openai_service import OpenAIEmbeddingService


class TestOpenAIEmbeddingService(unittest.TestCase):

    def setUp(self):
        patcher = patch('core.llm.openai_service.OpenAI')
        self.mock_openai = patcher.start()
        self.addCleanup(patcher.stop)
        self.client = self.mock_openai.return_value

    def test_client_configuration(self):
        OpenAIEmbeddingService(api_key="sk-test", base_url="http://llm/v1", timeout_seconds=3.0)

        self.mock_openai.assert_called_once_with(
            timeout=3.0, max_retries=0, api_key="sk-test", base_url="http://llm/v1"
        )

    def test_generate_embedding(self):
        self.client.embeddings.create.return_value = SimpleNamespace(
            data=[SimpleNamespace(embedding=[0.1, 0.2, 0.3])]
        )
        service = OpenAIEmbeddingService(api_key="sk-test", embedding_dimensions=3)

        self.assertEqual(service.generate_embedding("fintech consulting"), [0.1, 0.2, 0.3])
        self.client.embeddings.create.assert_called_once_with(
            input="fintech consulting", model="text-embedding-3-small", dimensions=3
        )

    def test_failure_is_degraded(self):
        self.client.embeddings.create.side_effect = openai.OpenAIError("invalid api key")
        service = OpenAIEmbeddingService(api_key="sk-test")

        with self.assertRaises(ScoringDegraded):
            service.generate_embedding("anything")
        self.assertEqual(self.client.embeddings.create.call_count, 1)


if __name__ == '__main__':
    unittest.main()
