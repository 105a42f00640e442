import logging
from typing import List, Optional, Sequence, Tuple

from sqlalchemy import select, or_, func

from database.models import Business
from database.repositories.base import BaseRepository
from core.retriever.filters import SearchFilters, parse_employee_range

logger = logging.getLogger(__name__)


def contains_pattern(value: str) -> str:
    """ILIKE pattern matching value anywhere, with LIKE wildcards escaped."""
    escaped = value.replace('\\', '\\\\').replace('%', '\\%').replace('_', '\\_')
    return f"%{escaped}%"


class BusinessRepository(BaseRepository):
    def top_rated(self, limit: int) -> List[Business]:
        stmt = self._ranked(select(Business)).limit(limit)
        return list(self.db.execute(stmt).scalars().all())

    def search_by_keywords(self, terms: Sequence[str], limit: int) -> List[Business]:
        """Businesses whose name, description, category, location or tags contain any term."""
        conditions = []
        for term in terms:
            pattern = contains_pattern(term)
            conditions.extend([
                Business.name.ilike(pattern, escape='\\'),
                Business.description.ilike(pattern, escape='\\'),
                Business.category.ilike(pattern, escape='\\'),
                Business.location.ilike(pattern, escape='\\'),
                func.array_to_string(Business.tags, ' ').ilike(pattern, escape='\\'),
            ])
        if not conditions:
            return []

        stmt = self._ranked(select(Business).where(or_(*conditions))).limit(limit)
        return list(self.db.execute(stmt).scalars().all())

    def filter_businesses(self, filters: SearchFilters, limit: int) -> List[Business]:
        stmt = self._ranked(self._apply_filters(select(Business), filters)).limit(limit)
        return list(self.db.execute(stmt).scalars().all())

    def facet_counts(
        self,
        dimension: str,
        filters: SearchFilters,
        limit: int = 10
    ) -> List[Tuple[str, int]]:
        """Count businesses per value of a facet column, scoped by filters minus that facet."""
        column = getattr(Business, dimension)
        count = func.count(Business.id).label('count')
        stmt = (
            self._apply_filters(select(column, count), filters.without(dimension))
            .where(column.isnot(None))
            .group_by(column)
            .order_by(count.desc(), column)
            .limit(limit)
        )
        return [(value, int(n)) for value, n in self.db.execute(stmt).all()]

    @staticmethod
    def _ranked(stmt):
        return stmt.order_by(Business.rating.desc().nulls_last(), Business.id)

    @staticmethod
    def _apply_filters(stmt, filters: Optional[SearchFilters]):
        if filters is None:
            return stmt

        if filters.location:
            stmt = stmt.where(Business.location.ilike(contains_pattern(filters.location), escape='\\'))

        if filters.category:
            stmt = stmt.where(Business.category.ilike(contains_pattern(filters.category), escape='\\'))

        if filters.verified is not None:
            stmt = stmt.where(Business.verified.is_(filters.verified))

        if filters.rating is not None:
            stmt = stmt.where(Business.rating >= filters.rating)

        if filters.tags:
            stmt = stmt.where(Business.tags.overlap(filters.tags))

        if filters.founded_after is not None:
            stmt = stmt.where(Business.founded_year >= filters.founded_after)

        if filters.employee_range:
            low, high = parse_employee_range(filters.employee_range)
            stmt = stmt.where(Business.employees_count >= low)
            if high is not None:
                stmt = stmt.where(Business.employees_count <= high)

        return stmt
