from .base import Base
from .business import Business, BusinessEmbedding, EMBEDDING_DIMENSIONS
from .analytics import SearchAnalytics, SearchSuggestion

__all__ = [
    'Base',
    'Business',
    'BusinessEmbedding',
    'EMBEDDING_DIMENSIONS',
    'SearchAnalytics',
    'SearchSuggestion',
]
