"""API route handlers."""

from .match import router as match_router
from .search import router as search_router
from .cache import router as cache_router
