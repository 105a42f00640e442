from database.repositories.base import BaseRepository
from database.repositories.business import BusinessRepository
from database.repositories.embedding import EmbeddingRepository
from database.repositories.analytics import AnalyticsRepository

__all__ = [
    'BaseRepository',
    'BusinessRepository',
    'EmbeddingRepository',
    'AnalyticsRepository',
]
