from __future__ import annotations

from typing import TYPE_CHECKING, Any, Dict, List, Optional, Tuple
from uuid import UUID

from sqlalchemy import select, update

if TYPE_CHECKING:
    from complyflow.infrastructure.persistence.postgresql.client import (
        PostgreSQLClient,
    )

from complyflow.infrastructure.persistence.postgresql.models import (
    OrganizationDocumentChunk,
    OrganizationKnowledgeFile,
)


def _uuid(value: str | UUID) -> UUID:
    return UUID(value) if isinstance(value, str) else value


class OrganizationDocumentRepository:
    """Repository for organization uploads and their embedded chunks.

    Attributes:
        client: PostgreSQL client for database access
    """

    def __init__(self, client: PostgreSQLClient):
        self.client = client

    async def get_file(
        self, file_id: str | UUID, org_id: Optional[str | UUID] = None
    ) -> Optional[OrganizationKnowledgeFile]:
        """Retrieve an uploaded file record, optionally scoped to an organization."""
        async with self.client.session() as session:
            query = select(OrganizationKnowledgeFile).where(
                OrganizationKnowledgeFile.id == _uuid(file_id)
            )
            if org_id is not None:
                query = query.where(
                    OrganizationKnowledgeFile.organization_id == _uuid(org_id)
                )
            result = await session.execute(query)
            return result.scalar_one_or_none()

    async def list_files(self, org_id: str | UUID) -> List[OrganizationKnowledgeFile]:
        async with self.client.session() as session:
            result = await session.execute(
                select(OrganizationKnowledgeFile)
                .where(OrganizationKnowledgeFile.organization_id == _uuid(org_id))
                .order_by(OrganizationKnowledgeFile.created_at.desc())
            )
            return list(result.scalars().all())

    async def store_chunks(
        self,
        org_id: str | UUID,
        file_id: str | UUID,
        chunks: List[Tuple[str, List[float]]],
        metadata: Dict[str, Any],
        status: str,
    ) -> int:
        """Insert every embedded chunk of a file and set its status atomically.

        Args:
            chunks: ``(content, embedding)`` pairs
            metadata: Metadata stored on each chunk
            status: File status written in the same transaction

        Returns:
            Number of chunks inserted
        """
        async with self.client.session() as session:
            session.add_all(
                [
                    OrganizationDocumentChunk(
                        organization_id=_uuid(org_id),
                        file_id=_uuid(file_id),
                        content=content,
                        metadata_=dict(metadata),
                        embedding=embedding,
                    )
                    for content, embedding in chunks
                ]
            )
            await session.execute(
                update(OrganizationKnowledgeFile)
                .where(OrganizationKnowledgeFile.id == _uuid(file_id))
                .values(status=status)
            )
        return len(chunks)

    async def match_chunks(
        self,
        org_id: str | UUID,
        query_embedding: List[float],
        threshold: float,
        count: int,
    ) -> List[Dict[str, Any]]:
        """Find an organization's closest chunks by cosine similarity.

        Returns:
            Dicts with id, content, metadata and similarity, most similar first
        """
        distance = OrganizationDocumentChunk.embedding.cosine_distance(query_embedding)
        async with self.client.session() as session:
            result = await session.execute(
                select(OrganizationDocumentChunk, (1 - distance).label("similarity"))
                .where(OrganizationDocumentChunk.organization_id == _uuid(org_id))
                .where(OrganizationDocumentChunk.embedding.is_not(None))
                .where(1 - distance > threshold)
                .order_by(distance)
                .limit(count)
            )
            return [
                {
                    "id": str(chunk.id),
                    "content": chunk.content,
                    "metadata": chunk.metadata_ or {},
                    "similarity": float(similarity),
                }
                for chunk, similarity in result.all()
            ]

    async def has_chunks(self, org_id: str | UUID) -> bool:
        async with self.client.session() as session:
            result = await session.execute(
                select(OrganizationDocumentChunk.id)
                .where(OrganizationDocumentChunk.organization_id == _uuid(org_id))
                .limit(1)
            )
            return result.first() is not None
