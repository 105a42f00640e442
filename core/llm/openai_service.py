"""
OpenAI Service - Embedding generation using the OpenAI API.

Used to embed free-text queries for similarity search over business profiles.
"""
from typing import List, Optional
import logging

import openai
from openai import OpenAI
from tenacity import (
    retry,
    retry_if_exception_type,
    stop_after_attempt,
    wait_exponential,
)
from tenacity import RetryCallState

from core.exceptions import ScoringDegraded
from core.llm.interfaces import EmbeddingProvider

logger = logging.getLogger(__name__)


def _log_retry(retry_state: RetryCallState) -> None:
    """Log a warning before each retry sleep."""
    exc = retry_state.outcome.exception()
    wait = retry_state.next_action.sleep if retry_state.next_action else 0
    logger.warning(
        "Transient embedding API error (attempt %s). Waiting %.1fs before retry. Details: %s",
        retry_state.attempt_number, wait, exc,
    )


def _embedding_retry(**kwargs):
    """Return a tenacity @retry decorator for embedding calls on the request path.

    Attempts are few and waits short: a search must not stall on a flaky provider.
    """
    return retry(
        retry=retry_if_exception_type((
            openai.RateLimitError,
            openai.APITimeoutError,
            openai.APIConnectionError,
            openai.InternalServerError,
        )),
        wait=wait_exponential(multiplier=0.5, min=0.5, max=2),
        stop=stop_after_attempt(3),
        before_sleep=_log_retry,
        reraise=True,
        **kwargs,
    )


class OpenAIEmbeddingService(EmbeddingProvider):
    """
    OpenAI embedding service.

    Any failure surfaces as ScoringDegraded so callers can fall back to
    keyword-only retrieval.
    """

    def __init__(
        self,
        api_key: Optional[str] = None,
        base_url: Optional[str] = None,
        embedding_model: str = "text-embedding-3-small",
        embedding_dimensions: int = 768,
        timeout_seconds: float = 10.0
    ):
        client_kwargs = {'timeout': timeout_seconds, 'max_retries': 0}
        if api_key:
            client_kwargs['api_key'] = api_key
        if base_url:
            client_kwargs['base_url'] = base_url

        self.client = OpenAI(**client_kwargs)
        self.embedding_model = embedding_model
        self.embedding_dimensions = embedding_dimensions

    @_embedding_retry()
    def _create_embedding(self, text: str) -> List[float]:
        response = self.client.embeddings.create(
            input=text,
            model=self.embedding_model,
            dimensions=self.embedding_dimensions
        )
        return response.data[0].embedding

    def generate_embedding(self, text: str) -> List[float]:
        """Generate embedding vector for text."""
        try:
            return self._create_embedding(text)
        except openai.OpenAIError as e:
            raise ScoringDegraded(f"Embedding generation failed: {e}") from e
