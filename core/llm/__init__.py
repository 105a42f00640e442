"""LLM Module - Embedding providers for vector retrieval."""
from core.llm.interfaces import EmbeddingProvider

__all__ = ['EmbeddingProvider']
