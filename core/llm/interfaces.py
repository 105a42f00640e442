"""
Embedding Provider Interface - Abstract base for query embedding services.

The matchmaking core only needs embeddings for vector retrieval; chat and
generation are handled outside this service.
"""
from abc import ABC, abstractmethod
from typing import List


class EmbeddingProvider(ABC):
    """
    Abstract Interface for embedding providers (OpenAI, Ollama, etc.).
    """

    @abstractmethod
    def generate_embedding(self, text: str) -> List[float]:
        """
        Generate a vector embedding for the given text.
        """
        pass
