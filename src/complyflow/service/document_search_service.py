"""Retrieval over an organisation's own uploaded documents."""

import logging
from typing import Any, Dict, List

from complyflow.constants import ORG_DOCUMENT_MATCH_COUNT, ORG_DOCUMENT_MATCH_THRESHOLD
from complyflow.repository.organization_document_repository import (
    OrganizationDocumentRepository,
)
from complyflow.service.embedding_service import EmbeddingService

logger = logging.getLogger(__name__)

UNKNOWN_DOCUMENT = "Unknown Document"

CONTEXT_TEMPLATE = """
=== ORGANIZATION-SPECIFIC DOCUMENTS ===
The following excerpts are from the organization's own uploaded documents and policies:

{excerpts}

=== END ORGANIZATION DOCUMENTS ===
"""


def build_context(chunks: List[Dict[str, Any]]) -> str:
    """Format retrieved chunks for injection into an AI prompt.

    Returns an empty string when there is nothing to inject.
    """
    if not chunks:
        return ""

    excerpts = "\n\n---\n\n".join(
        f"[Document {index}: {(chunk.get('metadata') or {}).get('source') or UNKNOWN_DOCUMENT}]"
        f"\n{chunk['content']}"
        for index, chunk in enumerate(chunks, start=1)
    )
    return CONTEXT_TEMPLATE.format(excerpts=excerpts)


class DocumentSearchService:
    """Similarity search scoped to one organisation.

    Attributes:
        document_repo: Organisation chunk store
        embedding_service: Text embedder
    """

    def __init__(
        self,
        document_repo: OrganizationDocumentRepository,
        embedding_service: EmbeddingService,
    ):
        self.document_repo = document_repo
        self.embedding_service = embedding_service

    async def search(
        self,
        query: str,
        organization_id: str,
        threshold: float = ORG_DOCUMENT_MATCH_THRESHOLD,
        count: int = ORG_DOCUMENT_MATCH_COUNT,
    ) -> List[Dict[str, Any]]:
        query_embedding = await self.embedding_service.embed(query)
        return await self.document_repo.match_chunks(
            organization_id, query_embedding, threshold=threshold, count=count
        )

    async def has_indexed_documents(self, organization_id: str) -> bool:
        return await self.document_repo.has_chunks(organization_id)

    async def list_files(self, organization_id: str) -> List[Dict[str, Any]]:
        files = await self.document_repo.list_files(organization_id)
        return [
            {
                "id": str(f.id),
                "file_name": f.file_name,
                "storage_path": f.storage_path,
                "status": f.status,
                "created_at": f.created_at.isoformat() if f.created_at else None,
            }
            for f in files
        ]
