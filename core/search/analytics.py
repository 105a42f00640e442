"""
Analytics Recorder - best-effort search analytics.

Every search writes one search_analytics row; searches that found something
also feed the suggestion index. Nothing here may fail or slow down a search:
writes run on a background executor when one is given and every error is
logged and swallowed.
"""

import logging
from concurrent.futures import Executor
from typing import Any, Dict, Optional

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import sessionmaker

from core.exceptions import AnalyticsWriteError
from database.uow import analytics_uow

logger = logging.getLogger(__name__)


class AnalyticsRecorder:

    def __init__(
        self,
        session_factory: sessionmaker,
        executor: Optional[Executor] = None,
        enabled: bool = True
    ):
        self.session_factory = session_factory
        self.executor = executor
        self.enabled = enabled

    def record(
        self,
        query: str,
        filters: Dict[str, Any],
        results_count: int,
        duration_ms: int,
        session_id: Optional[str] = None,
        user_agent: Optional[str] = None,
        category: Optional[str] = None
    ) -> None:
        """Record one search. Never raises."""
        if not self.enabled:
            return
        self._submit(
            self._write_search,
            query, filters, results_count, duration_ms, session_id, user_agent, category
        )

    def track_click(self, business_id: int, query: str, session_id: Optional[str] = None) -> None:
        """Attach a clicked business to the latest matching search. Never raises."""
        if not self.enabled:
            return
        self._submit(self._write_click, business_id, query, session_id)

    def _submit(self, fn, *args) -> None:
        if self.executor is None:
            self._run_safely(fn, *args)
            return
        try:
            self.executor.submit(self._run_safely, fn, *args)
        except RuntimeError as e:
            # Executor already shut down
            logger.warning(f"Analytics executor unavailable: {e}")

    @staticmethod
    def _run_safely(fn, *args) -> None:
        try:
            fn(*args)
        except AnalyticsWriteError as e:
            logger.warning(f"Analytics not recorded: {e}")
        except Exception:
            logger.exception("Unexpected error while recording analytics")

    def _write_search(self, query, filters, results_count, duration_ms, session_id, user_agent, category) -> None:
        try:
            with analytics_uow(self.session_factory) as repo:
                repo.record_search(
                    search_query=query,
                    search_filters=filters,
                    results_count=results_count,
                    search_duration_ms=duration_ms,
                    session_id=session_id,
                    user_agent=user_agent
                )
                if query and results_count > 0:
                    repo.bump_suggestion(query.strip().lower(), category)
        except SQLAlchemyError as e:
            raise AnalyticsWriteError(f"search row for {query!r}: {e}") from e

    def _write_click(self, business_id, query, session_id) -> None:
        try:
            with analytics_uow(self.session_factory) as repo:
                if not repo.mark_click(business_id, query, session_id):
                    logger.debug(f"No search row to attach click on business {business_id}")
        except SQLAlchemyError as e:
            raise AnalyticsWriteError(f"click on business {business_id}: {e}") from e
