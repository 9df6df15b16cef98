"""Policy gap analysis endpoint."""

import logging
from typing import Any, Dict, Optional

from fastapi import APIRouter, Request
from pydantic import BaseModel, Field

from complyflow.service.gap_analysis_service import GapAnalysisService

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/compliance", tags=["compliance"])


class GapAnalysisRequest(BaseModel):
    text: Optional[str] = Field(None, description="Extracted policy document text")

    class Config:
        json_schema_extra = {
            "example": {
                "text": "Staff must follow the Mental Capacity Act when seeking consent..."
            }
        }


@router.post(
    "/gap-analysis",
    summary="Policy Gap Analysis",
    description="Grade a policy document against each compliance rule as pass, partial or fail.",
    responses={400: {"description": "Empty policy text"}},
)
async def gap_analysis(analysis_request: GapAnalysisRequest, request: Request) -> Dict[str, Any]:
    service: GapAnalysisService = request.app.state.gap_analysis_service
    results = service.analyze(analysis_request.text)
    return {"results": results}
