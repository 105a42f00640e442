import logging
from typing import Any, Dict, List, Optional

from sqlalchemy import select, func
from sqlalchemy.dialects.postgresql import insert

from database.models import SearchAnalytics, SearchSuggestion
from database.repositories.base import BaseRepository
from database.repositories.business import contains_pattern

logger = logging.getLogger(__name__)


class AnalyticsRepository(BaseRepository):
    def record_search(
        self,
        search_query: str,
        search_filters: Dict[str, Any],
        results_count: int,
        search_duration_ms: int,
        session_id: Optional[str] = None,
        user_agent: Optional[str] = None,
        user_id: Optional[str] = None
    ) -> SearchAnalytics:
        row = SearchAnalytics(
            search_query=search_query,
            search_filters=search_filters,
            results_count=results_count,
            search_duration_ms=search_duration_ms,
            session_id=session_id,
            user_agent=user_agent,
            user_id=user_id
        )
        self.db.add(row)
        self.db.flush()
        return row

    def mark_click(
        self,
        business_id: int,
        search_query: str,
        session_id: Optional[str] = None
    ) -> bool:
        """Attach a clicked business to the most recent analytics row for the query."""
        stmt = select(SearchAnalytics).where(SearchAnalytics.search_query == search_query)
        if session_id:
            stmt = stmt.where(SearchAnalytics.session_id == session_id)
        stmt = stmt.order_by(SearchAnalytics.created_at.desc()).limit(1)

        row = self.db.execute(stmt).scalar_one_or_none()
        if row is None:
            return False
        row.clicked_business_id = business_id
        return True

    def bump_suggestion(self, suggestion: str, category: Optional[str] = None) -> None:
        """Insert a historical query or increase its popularity by one."""
        stmt = insert(SearchSuggestion).values(
            suggestion=suggestion,
            category=category,
            popularity_score=1
        )
        stmt = stmt.on_conflict_do_update(
            index_elements=[SearchSuggestion.suggestion],
            set_={
                'popularity_score': SearchSuggestion.popularity_score + 1,
                'updated_at': func.now()
            }
        )
        self.db.execute(stmt)

    def get_suggestions(self, partial_query: str, limit: int = 5) -> List[str]:
        stmt = select(SearchSuggestion.suggestion)
        partial_query = (partial_query or '').strip()
        if len(partial_query) >= 2:
            stmt = stmt.where(SearchSuggestion.suggestion.ilike(contains_pattern(partial_query), escape='\\'))
        stmt = stmt.order_by(SearchSuggestion.popularity_score.desc(), SearchSuggestion.suggestion).limit(limit)
        return list(self.db.execute(stmt).scalars().all())
