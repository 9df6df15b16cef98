"""Organization document retrieval endpoints."""

import logging
from typing import Any, Dict, List

from fastapi import APIRouter, Depends, Request
from pydantic import BaseModel, Field

from complyflow.constants import ORG_DOCUMENT_MATCH_COUNT, ORG_DOCUMENT_MATCH_THRESHOLD
from complyflow.middleware.authorization_middleware import (
    OrganizationContext,
    require_org_member,
)
from complyflow.service.document_search_service import (
    DocumentSearchService,
    build_context,
)

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/organizations/{org_id}/documents", tags=["documents"])


class DocumentSearchRequest(BaseModel):
    """Semantic search over an organization's indexed documents."""

    query: str = Field(..., min_length=1, description="Search text")
    threshold: float = Field(
        ORG_DOCUMENT_MATCH_THRESHOLD, ge=0, le=1, description="Minimum similarity"
    )
    count: int = Field(ORG_DOCUMENT_MATCH_COUNT, ge=1, le=50, description="Maximum matches")

    class Config:
        json_schema_extra = {
            "example": {"query": "fire evacuation procedure", "threshold": 0.5, "count": 5}
        }


def _documents(request: Request) -> DocumentSearchService:
    return request.app.state.document_search_service


@router.post(
    "/search",
    summary="Search Organization Documents",
    description="Match the query against indexed chunks and return them with a prompt-ready context block.",
)
async def search_documents(
    search_request: DocumentSearchRequest,
    request: Request,
    context: OrganizationContext = Depends(require_org_member),
) -> Dict[str, Any]:
    chunks = await _documents(request).search(
        search_request.query,
        context.org_id,
        threshold=search_request.threshold,
        count=search_request.count,
    )
    return {"chunks": chunks, "context": build_context(chunks)}


@router.get("/status", summary="Document Index Status")
async def document_status(
    request: Request, context: OrganizationContext = Depends(require_org_member)
) -> Dict[str, bool]:
    indexed = await _documents(request).has_indexed_documents(context.org_id)
    return {"hasIndexedDocuments": indexed}


@router.get("/files", summary="List Uploaded Files")
async def list_files(
    request: Request, context: OrganizationContext = Depends(require_org_member)
) -> List[Dict[str, Any]]:
    return await _documents(request).list_files(context.org_id)
