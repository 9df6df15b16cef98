"""Organisation knowledge file ingestion.

Downloads an uploaded file, strips it to plain text, splits it into
overlapping chunks and stores one embedding per chunk for retrieval.
"""

import logging
import re
from typing import List

from complyflow.constants import CHUNK_OVERLAP, CHUNK_SIZE, MIN_MEANINGFUL_TEXT_LENGTH
from complyflow.exception.api_exceptions import (
    KnowledgeIngestionError,
    MissingRequiredFieldError,
    StorageError,
)
from complyflow.infrastructure.persistence.s3.client import KnowledgeFileStorage
from complyflow.repository.organization_document_repository import (
    OrganizationDocumentRepository,
)
from complyflow.service.embedding_service import EmbeddingService

logger = logging.getLogger(__name__)

# Control characters other than tab/newline/CR, and everything outside ASCII.
_UNSUPPORTED_CHARS = re.compile("[\x00-\x08\x0e-\x1f\x7f-\U0010ffff]")

FILE_STATUS_ACTIVE = "active"


def clean_text(raw: bytes) -> str:
    text = raw.decode("utf-8", errors="replace")
    return _UNSUPPORTED_CHARS.sub("", text)


def chunk_text(
    text: str, chunk_size: int = CHUNK_SIZE, overlap: int = CHUNK_OVERLAP
) -> List[str]:
    """Split text into fixed-size windows advancing by ``chunk_size - overlap``."""
    step = chunk_size - overlap
    return [text[i : i + chunk_size] for i in range(0, len(text), step)]


class KnowledgeIngestionService:
    """Turns uploaded organisation files into searchable chunks.

    Attributes:
        document_repo: Organisation files and chunk store
        storage: Object storage holding the uploads
        embedding_service: Text embedder
    """

    def __init__(
        self,
        document_repo: OrganizationDocumentRepository,
        storage: KnowledgeFileStorage,
        embedding_service: EmbeddingService,
    ):
        self.document_repo = document_repo
        self.storage = storage
        self.embedding_service = embedding_service

    async def ingest(self, file_id: str, organization_id: str) -> int:
        """Ingest one uploaded file and mark it active.

        Args:
            file_id: organization_knowledge_base record ID
            organization_id: Owning organization ID

        Returns:
            Number of chunks stored

        Raises:
            MissingRequiredFieldError: If either ID is missing
            KnowledgeIngestionError: If the file record does not exist
            StorageError: If the file cannot be downloaded
            EmbeddingError: If any chunk fails to embed; nothing is stored
        """
        if not file_id or not organization_id:
            raise MissingRequiredFieldError("Missing fileId or organizationId")

        record = await self.document_repo.get_file(file_id)
        if record is None:
            raise KnowledgeIngestionError("File record not found")

        try:
            raw = await self.storage.download(record.storage_path)
        except StorageError as e:
            logger.error(f"Download failed for {record.storage_path}: {e}")
            raise StorageError("Failed to download file from storage") from e

        text = clean_text(raw)
        if len(text) < MIN_MEANINGFUL_TEXT_LENGTH:
            logger.warning("Text content too short, skipping embedding generation.")

        # Embed everything before writing so a provider failure stores nothing.
        embedded = [
            (chunk, await self.embedding_service.embed(chunk))
            for chunk in chunk_text(text)
            if chunk.strip()
        ]

        stored = await self.document_repo.store_chunks(
            org_id=organization_id,
            file_id=file_id,
            chunks=embedded,
            metadata={"source": record.file_name},
            status=FILE_STATUS_ACTIVE,
        )
        logger.info(f"Ingested {stored} chunks from file {file_id}")
        return stored
