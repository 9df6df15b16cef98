"""Knowledge base endpoints.

The source layer action router feeds and queries the shared regulatory
knowledge base. File ingestion indexes an organization's uploaded documents.
"""

import logging
from typing import Any, Dict, Optional
from uuid import UUID

from fastapi import APIRouter, Request
from pydantic import BaseModel, Field

from complyflow.service.knowledge_ingestion_service import KnowledgeIngestionService
from complyflow.service.source_layer_service import SourceLayerService

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/functions/v1", tags=["knowledge"])


class SourceLayerRequest(BaseModel):
    """Source layer action request.

    Attributes:
        action: ingest-text, ingest-cqc, get-live-ratings or reasoning-query
        payload: Action-specific fields
    """

    action: Optional[str] = Field(None, description="Action to run")
    payload: Dict[str, Any] = Field(default_factory=dict, description="Action payload")

    class Config:
        json_schema_extra = {
            "example": {
                "action": "reasoning-query",
                "payload": {"query": "How often must fire drills be recorded?"},
            }
        }


class IngestFileRequest(BaseModel):
    file_id: Optional[UUID] = Field(None, alias="fileId", description="Uploaded file ID")
    organization_id: Optional[UUID] = Field(
        None, alias="organizationId", description="Owning organization"
    )

    class Config:
        populate_by_name = True
        json_schema_extra = {
            "example": {
                "fileId": "9b2f7c1e-3a4d-4b8e-9f10-2c3d4e5f6a7b",
                "organizationId": "550e8400-e29b-41d4-a716-446655440000",
            }
        }


@router.post(
    "/source-layer",
    summary="Knowledge Source Layer",
    description="""
Run one knowledge base action:

- `ingest-text`: embed and store `payload.text`
- `ingest-cqc`: harvest a provider's live CQC ratings into the knowledge base
- `get-live-ratings`: return a provider's domain ratings
- `reasoning-query`: answer `payload.query` from matched knowledge with citations
""",
    responses={
        400: {"description": "Unknown action or missing payload field"},
        500: {"description": "Provider, CQC API or database error"},
    },
)
async def source_layer(source_request: SourceLayerRequest, request: Request) -> Dict[str, Any]:
    """Dispatch a source layer action."""
    service: SourceLayerService = request.app.state.source_layer_service
    return await service.handle(source_request.action, source_request.payload)


@router.post(
    "/ingest-knowledge-base",
    summary="Ingest Organization Document",
    description="Download an uploaded file, chunk and embed it, and mark it active.",
    responses={
        400: {"description": "Missing fileId or organizationId"},
        500: {"description": "File not found, download or embedding failure"},
    },
)
async def ingest_knowledge_base(
    ingest_request: IngestFileRequest, request: Request
) -> Dict[str, Any]:
    """Index an organization's uploaded document."""
    service: KnowledgeIngestionService = request.app.state.knowledge_ingestion_service
    chunks = await service.ingest(
        str(ingest_request.file_id) if ingest_request.file_id else None,
        str(ingest_request.organization_id) if ingest_request.organization_id else None,
    )
    return {"success": True, "chunksProcessed": chunks}
