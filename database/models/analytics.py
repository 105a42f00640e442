import uuid

from sqlalchemy import Column, Integer, Text, TIMESTAMP, ForeignKey, Index
from sqlalchemy.sql import text as sql_text
from sqlalchemy.dialects.postgresql import UUID, JSONB

from .base import Base


class SearchAnalytics(Base):
    """
    One row per executed search.

    Written best-effort after each search; a failed write never fails the search.
    """
    __tablename__ = 'search_analytics'

    id = Column(UUID(as_uuid=True), primary_key=True, default=uuid.uuid4)

    search_query = Column(Text, nullable=False)
    search_filters = Column(JSONB, default={})
    results_count = Column(Integer)
    search_duration_ms = Column(Integer)

    session_id = Column(Text)
    user_id = Column(Text)
    user_agent = Column(Text)

    clicked_business_id = Column(Integer, ForeignKey('businesses.id', ondelete='SET NULL'), nullable=True)

    created_at = Column(TIMESTAMP(timezone=True), nullable=False, server_default=sql_text("timezone('UTC', now())"))

    __table_args__ = (
        Index('idx_search_analytics_query', 'search_query'),
        Index('idx_search_analytics_created', 'created_at'),
    )


class SearchSuggestion(Base):
    """
    Historical query strings ranked by popularity, used for query completion.
    """
    __tablename__ = 'search_suggestions'

    id = Column(UUID(as_uuid=True), primary_key=True, default=uuid.uuid4)
    suggestion = Column(Text, nullable=False, unique=True)
    category = Column(Text)
    popularity_score = Column(Integer, nullable=False, default=0)

    created_at = Column(TIMESTAMP(timezone=True), server_default=sql_text("timezone('UTC', now())"))
    updated_at = Column(TIMESTAMP(timezone=True), server_default=sql_text("timezone('UTC', now())"), onupdate=sql_text("timezone('UTC', now())"))

    __table_args__ = (
        Index('idx_search_suggestions_popularity', 'popularity_score'),
    )
