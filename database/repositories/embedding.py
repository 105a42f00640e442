from typing import List, Tuple
from sqlalchemy import select

from database.models import Business, BusinessEmbedding
from database.repositories.base import BaseRepository
from core.utils import cosine_similarity_from_distance


class EmbeddingRepository(BaseRepository):
    def find_similar_businesses(
        self,
        query_embedding: List[float],
        threshold: float = 0.5,
        top_k: int = 20
    ) -> List[Tuple[BusinessEmbedding, Business, float]]:
        distance = BusinessEmbedding.embedding.cosine_distance(query_embedding)

        stmt = (
            select(BusinessEmbedding, Business, distance.label('distance'))
            .join(Business, Business.id == BusinessEmbedding.business_id)
            .where(BusinessEmbedding.embedding.isnot(None))
            .where(distance <= 1.0 - threshold)
            .order_by('distance')
            .limit(top_k)
        )

        results = self.db.execute(stmt).all()
        return [
            (row[0], row[1], cosine_similarity_from_distance(row._mapping['distance']))
            for row in results
        ]
