from __future__ import annotations

from typing import TYPE_CHECKING, Any, Dict, List, Optional

from sqlalchemy import select

if TYPE_CHECKING:
    from complyflow.infrastructure.persistence.postgresql.client import (
        PostgreSQLClient,
    )

from complyflow.infrastructure.persistence.postgresql.models import KnowledgeBaseEntry


class KnowledgeBaseRepository:
    """Repository for the shared regulatory knowledge base.

    Attributes:
        client: PostgreSQL client for database access
    """

    def __init__(self, client: PostgreSQLClient):
        self.client = client

    async def insert(
        self,
        content: str,
        embedding: List[float],
        metadata: Optional[Dict[str, Any]] = None,
    ) -> KnowledgeBaseEntry:
        """Store one embedded chunk."""
        async with self.client.session() as session:
            entry = KnowledgeBaseEntry(
                content=content,
                metadata_=metadata or {},
                embedding=embedding,
            )
            session.add(entry)
            await session.flush()
            return entry

    async def match(
        self, query_embedding: List[float], threshold: float, count: int
    ) -> List[Dict[str, Any]]:
        """Find the closest chunks by cosine similarity.

        Args:
            query_embedding: Query vector
            threshold: Minimum similarity (1 - cosine distance)
            count: Maximum number of matches

        Returns:
            Dicts with id, content, metadata and similarity, most similar first
        """
        distance = KnowledgeBaseEntry.embedding.cosine_distance(query_embedding)
        async with self.client.session() as session:
            result = await session.execute(
                select(KnowledgeBaseEntry, (1 - distance).label("similarity"))
                .where(KnowledgeBaseEntry.embedding.is_not(None))
                .where(1 - distance > threshold)
                .order_by(distance)
                .limit(count)
            )
            return [
                {
                    "id": str(entry.id),
                    "content": entry.content,
                    "metadata": entry.metadata_ or {},
                    "similarity": float(similarity),
                }
                for entry, similarity in result.all()
            ]
