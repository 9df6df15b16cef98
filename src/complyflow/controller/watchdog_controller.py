"""Trend watchdog endpoint."""

import logging
from typing import Any, Dict, Optional
from uuid import UUID

from fastapi import APIRouter, Request
from pydantic import BaseModel, Field

from complyflow.service.trend_watchdog_service import TrendWatchdogService

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/functions/v1", tags=["watchdog"])


class WatchdogRequest(BaseModel):
    """Trend watchdog request.

    Attributes:
        action: ``scan`` or ``get-alerts``
        organization_id: Organization to store alerts for or list alerts of
        postcode: Postcode to scan around
        radius_miles: Scan radius recorded with the history
    """

    action: Optional[str] = Field(None, description="scan or get-alerts")
    organization_id: Optional[UUID] = Field(
        None, alias="organizationId", description="Organization ID"
    )
    postcode: Optional[str] = Field(None, description="UK postcode")
    radius_miles: Optional[int] = Field(None, alias="radiusMiles", description="Radius")

    class Config:
        populate_by_name = True
        json_schema_extra = {
            "example": {
                "action": "scan",
                "organizationId": "550e8400-e29b-41d4-a716-446655440000",
                "postcode": "B15 2TT",
                "radiusMiles": 10,
            }
        }


@router.post(
    "/trend-watchdog",
    summary="Local Inspection Trend Watchdog",
    description="""
- `scan`: analyse CQC ratings of care homes around `postcode` and raise alerts
- `get-alerts`: list the organization's 20 newest undismissed alerts
""",
    responses={400: {"description": "Missing postcode, organization or unknown action"}},
)
async def trend_watchdog(watchdog_request: WatchdogRequest, request: Request) -> Dict[str, Any]:
    """Dispatch a watchdog action."""
    service: TrendWatchdogService = request.app.state.trend_watchdog_service
    return await service.handle(
        watchdog_request.action,
        watchdog_request.model_dump(mode="json", by_alias=True, exclude={"action"}),
    )
