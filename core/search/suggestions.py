"""Query-completion suggestions from the historical query index."""

import logging
from typing import List

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import sessionmaker

from database.database import db_session_scope
from database.repositories import AnalyticsRepository

logger = logging.getLogger(__name__)


class SuggestionProvider:

    def __init__(self, session_factory: sessionmaker, max_suggestions: int = 5):
        self.session_factory = session_factory
        self.max_suggestions = max_suggestions

    def suggest(self, partial_query: str) -> List[str]:
        """Up to max_suggestions strings ordered by popularity; [] on any database error."""
        try:
            with db_session_scope(self.session_factory) as session:
                return AnalyticsRepository(session).get_suggestions(partial_query, self.max_suggestions)
        except SQLAlchemyError as e:
            logger.warning(f"Suggestions unavailable: {e}")
            return []
