"""Cache Module - Caching services."""
from core.cache.query_cache import (
    QueryCacheService,
    DEFAULT_TTL_SECONDS
)

__all__ = [
    'QueryCacheService',
    'DEFAULT_TTL_SECONDS'
]
