"""
Facet Aggregator - counts over the full, unpaginated result set.

Categories and locations: top N by count, ties in order of first appearance.
Ratings: cumulative buckets (4+, 3+, 2+). Verified: true/false counts.
"""

import logging
from collections import Counter
from typing import Iterable, List, Optional, Sequence, Tuple

from sqlalchemy.exc import SQLAlchemyError

from core.retriever.dto import BusinessRecord
from core.retriever.filters import SearchFilters
from core.search.models import FacetCount, RatingFacet, SearchFacets, VerifiedFacet

logger = logging.getLogger(__name__)

RATING_BUCKETS = (
    ('4+ stars', 4.0),
    ('3+ stars', 3.0),
    ('2+ stars', 2.0),
)


def _top_counts(values: Iterable[Optional[str]], limit: int) -> List[FacetCount]:
    # Counter.most_common sorts stably, so equal counts keep first-seen order
    counts = Counter(v for v in values if v)
    return [FacetCount(value=value, count=count) for value, count in counts.most_common(limit)]


class FacetAggregator:

    def __init__(self, limit: int = 10):
        self.limit = limit

    def aggregate(self, businesses: Sequence[BusinessRecord]) -> SearchFacets:
        """Facets computed purely from an in-memory result set."""
        return SearchFacets(
            categories=_top_counts((b.category for b in businesses), self.limit),
            locations=_top_counts((b.location for b in businesses), self.limit),
            ratings=self.rating_buckets(businesses),
            verified=self.verified_counts(businesses),
        )

    def aggregate_catalog(
        self,
        businesses: Sequence[BusinessRecord],
        business_repo,
        filters: SearchFilters
    ) -> SearchFacets:
        """Facets for browsing: category and location counts come from the whole catalog.

        Each dimension is scoped by the current filters minus its own filter, so
        selecting a category still shows the other categories' counts. Falls back
        to result-set counts if the catalog query fails.
        """
        facets = self.aggregate(businesses)
        try:
            facets.categories = self._catalog_counts(business_repo, 'category', filters)
            facets.locations = self._catalog_counts(business_repo, 'location', filters)
        except SQLAlchemyError as e:
            logger.warning(f"Catalog facet query failed, using result-set facets: {e}")
        return facets

    def _catalog_counts(self, business_repo, dimension: str, filters: SearchFilters) -> List[FacetCount]:
        rows: List[Tuple[str, int]] = business_repo.facet_counts(dimension, filters, self.limit)
        return [FacetCount(value=value, count=count) for value, count in rows]

    @staticmethod
    def rating_buckets(businesses: Sequence[BusinessRecord]) -> List[RatingFacet]:
        ratings = [b.rating for b in businesses if b.rating is not None]
        return [
            RatingFacet(label=label, min_rating=threshold, count=sum(1 for r in ratings if r >= threshold))
            for label, threshold in RATING_BUCKETS
        ]

    @staticmethod
    def verified_counts(businesses: Sequence[BusinessRecord]) -> List[VerifiedFacet]:
        verified = sum(1 for b in businesses if b.verified)
        return [
            VerifiedFacet(verified=True, count=verified),
            VerifiedFacet(verified=False, count=len(businesses) - verified),
        ]
