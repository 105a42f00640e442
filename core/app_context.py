import logging
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass
from typing import Optional

from sqlalchemy.engine import Engine
from sqlalchemy.orm import sessionmaker

from core.cache import QueryCacheService
from core.config_loader import AppConfig
from core.llm.interfaces import EmbeddingProvider
from core.prediction import HttpSuccessPredictor, SuccessPredictor
from core.scorer import ReasonGenerator, ScoringService
from core.search.analytics import AnalyticsRecorder
from core.search.suggestions import SuggestionProvider
from database.database import create_db_engine, make_session_factory

logger = logging.getLogger(__name__)


@dataclass
class AppContext:
    """Application context container that holds all wired dependencies.

    Built once at startup and injected into request handlers, so there is no
    module-level cache or client state. DB sessions are opened per request.
    """
    config: AppConfig
    engine: Engine
    session_factory: sessionmaker
    scorer: ScoringService
    reason_generator: ReasonGenerator
    analytics: AnalyticsRecorder
    suggestions: SuggestionProvider
    embedder: Optional[EmbeddingProvider] = None
    predictor: Optional[SuccessPredictor] = None
    cache: Optional[QueryCacheService] = None
    executor: Optional[ThreadPoolExecutor] = None

    @classmethod
    def build(cls, config: AppConfig) -> "AppContext":
        """Build an AppContext from config.

        Args:
            config: Loaded application configuration

        Returns:
            Fully wired AppContext instance (no DB session attached)
        """
        engine = create_db_engine(
            config.database.url,
            statement_timeout_seconds=config.retrieval.timeout_seconds
        )
        session_factory = make_session_factory(engine)

        executor = None
        if config.analytics.enabled and config.analytics.background:
            executor = ThreadPoolExecutor(
                max_workers=config.analytics.max_workers,
                thread_name_prefix="analytics"
            )

        return cls(
            config=config,
            engine=engine,
            session_factory=session_factory,
            scorer=ScoringService(config.scoring),
            reason_generator=ReasonGenerator(config.scoring),
            analytics=AnalyticsRecorder(session_factory, executor=executor, enabled=config.analytics.enabled),
            suggestions=SuggestionProvider(session_factory, max_suggestions=config.search.max_suggestions),
            embedder=cls._build_embedder(config),
            predictor=cls._build_predictor(config),
            cache=cls._build_cache(config),
            executor=executor
        )

    @staticmethod
    def _build_embedder(config: AppConfig) -> Optional[EmbeddingProvider]:
        """OpenAI embedding service, or None when vector retrieval is disabled."""
        llm_config = config.llm
        if not llm_config.enabled:
            logger.info("Vector retrieval disabled; keyword retrieval only")
            return None

        from core.llm.openai_service import OpenAIEmbeddingService

        return OpenAIEmbeddingService(
            api_key=llm_config.api_key,
            base_url=llm_config.base_url,
            embedding_model=llm_config.embedding_model,
            embedding_dimensions=llm_config.embedding_dimensions,
            timeout_seconds=llm_config.timeout_seconds
        )

    @staticmethod
    def _build_predictor(config: AppConfig) -> Optional[SuccessPredictor]:
        prediction = config.prediction
        if not prediction.enabled or not prediction.url:
            return None
        return HttpSuccessPredictor(prediction.url, timeout_seconds=prediction.timeout_seconds)

    @staticmethod
    def _build_cache(config: AppConfig) -> Optional[QueryCacheService]:
        """Redis query cache if enabled and reachable."""
        cache_config = config.cache
        if not cache_config.enabled:
            return None

        cache = QueryCacheService(
            redis_url=cache_config.redis_url,
            password=cache_config.password,
            ttl_seconds=cache_config.ttl_seconds
        )
        return cache if cache.is_available else None

    def shutdown(self) -> None:
        """Drain pending analytics writes and release pooled connections."""
        if self.executor is not None:
            self.executor.shutdown(wait=True)
        self.engine.dispose()
