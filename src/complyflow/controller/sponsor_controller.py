"""Sponsored worker register, reporting log and compliance alert endpoints.

Every route is scoped to the organization in the path and requires the
caller to be a member of it.
"""

import logging
from datetime import date
from typing import Any, Dict, List, Optional
from uuid import UUID

from fastapi import APIRouter, Depends, Query, Request, status
from pydantic import BaseModel, Field

from complyflow.middleware.authorization_middleware import (
    OrganizationContext,
    require_org_member,
)
from complyflow.service.compliance_alert_service import ComplianceAlertService
from complyflow.service.sponsor_service import SponsorService

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/organizations/{org_id}", tags=["sponsor"])


class WorkerFields(BaseModel):
    """Editable sponsored worker fields."""

    employee_id: Optional[str] = None
    full_name: Optional[str] = Field(None, max_length=255)
    email: Optional[str] = None
    visa_type: Optional[str] = None
    visa_expiry: Optional[date] = None
    cos_number: Optional[str] = None
    cos_assigned_date: Optional[date] = None
    start_date: Optional[date] = None
    salary: Optional[float] = Field(None, ge=0)
    status: Optional[str] = None
    last_rtw_check: Optional[date] = None
    ni_number: Optional[str] = None
    passport_number: Optional[str] = None
    job_title: Optional[str] = None
    work_location: Optional[str] = None
    notes: Optional[str] = None

    class Config:
        json_schema_extra = {
            "example": {
                "full_name": "Amara Okafor",
                "visa_type": "Health and Care Worker",
                "visa_expiry": "2027-03-31",
                "cos_number": "C2G8H41K9P2",
                "job_title": "Senior Care Assistant",
            }
        }


class ReportingEventRequest(BaseModel):
    """Reportable change of circumstances.

    Attributes:
        event_type: e.g. absence, salary_change, role_change
        deadline_date: Date the Home Office must be told by
        worker_id: Worker the event concerns
        description: Free-text detail
    """

    event_type: str = Field(..., min_length=1, description="Event type")
    deadline_date: date = Field(..., description="Reporting deadline")
    worker_id: Optional[UUID] = Field(None, description="Related worker")
    description: Optional[str] = Field(None, description="Event detail")

    class Config:
        json_schema_extra = {
            "example": {
                "event_type": "unauthorised_absence",
                "deadline_date": "2026-10-28",
                "worker_id": "3f2a1b4c-5d6e-4f70-8a9b-0c1d2e3f4a5b",
                "description": "Absent without permission for 10 working days.",
            }
        }


def _sponsor(request: Request) -> SponsorService:
    return request.app.state.sponsor_service


def _alerts(request: Request) -> ComplianceAlertService:
    return request.app.state.compliance_alert_service


@router.get("/sponsored-workers", summary="List Sponsored Workers")
async def list_workers(
    request: Request, context: OrganizationContext = Depends(require_org_member)
) -> List[Dict[str, Any]]:
    return await _sponsor(request).list_workers(context.org_id)


@router.post(
    "/sponsored-workers",
    status_code=status.HTTP_201_CREATED,
    summary="Add Sponsored Worker",
    responses={400: {"description": "Missing full_name or visa_expiry"}},
)
async def create_worker(
    worker: WorkerFields,
    request: Request,
    context: OrganizationContext = Depends(require_org_member),
) -> Dict[str, Any]:
    return await _sponsor(request).create_worker(
        context.org_id, worker.model_dump(exclude_none=True)
    )


@router.patch(
    "/sponsored-workers/{worker_id}",
    summary="Update Sponsored Worker",
    responses={404: {"description": "Worker not found"}},
)
async def update_worker(
    worker_id: UUID,
    worker: WorkerFields,
    request: Request,
    context: OrganizationContext = Depends(require_org_member),
) -> Dict[str, Any]:
    return await _sponsor(request).update_worker(
        context.org_id, str(worker_id), worker.model_dump(exclude_unset=True)
    )


@router.delete(
    "/sponsored-workers/{worker_id}",
    summary="Remove Sponsored Worker",
    responses={404: {"description": "Worker not found"}},
)
async def delete_worker(
    worker_id: UUID,
    request: Request,
    context: OrganizationContext = Depends(require_org_member),
) -> Dict[str, bool]:
    await _sponsor(request).delete_worker(context.org_id, str(worker_id))
    return {"success": True}


@router.get("/reporting-events", summary="Sponsor Reporting Log")
async def list_reporting_events(
    request: Request, context: OrganizationContext = Depends(require_org_member)
) -> List[Dict[str, Any]]:
    return await _sponsor(request).get_reporting_log(context.org_id)


@router.post(
    "/reporting-events",
    status_code=status.HTTP_201_CREATED,
    summary="Log Reporting Event",
)
async def create_reporting_event(
    event: ReportingEventRequest,
    request: Request,
    context: OrganizationContext = Depends(require_org_member),
) -> Dict[str, Any]:
    return await _sponsor(request).create_reporting_event(
        context.org_id,
        event_type=event.event_type,
        deadline_date=event.deadline_date,
        worker_id=str(event.worker_id) if event.worker_id else None,
        description=event.description,
    )


@router.post(
    "/reporting-events/{event_id}/reported",
    summary="Mark Event Reported",
    responses={404: {"description": "Event not found"}},
)
async def mark_event_reported(
    event_id: UUID,
    request: Request,
    context: OrganizationContext = Depends(require_org_member),
) -> Dict[str, Any]:
    return await _sponsor(request).mark_reported(
        context.org_id, str(event_id), context.user_id
    )


@router.get(
    "/sponsor-stats",
    summary="Sponsor Licence Stats",
    description="Certificate of Sponsorship usage, urgent visa alerts and pending reports.",
)
async def sponsor_stats(
    request: Request, context: OrganizationContext = Depends(require_org_member)
) -> Dict[str, int]:
    return await _sponsor(request).get_stats(context.org_id)


@router.get("/compliance-alerts", summary="List Compliance Alerts")
async def list_compliance_alerts(
    request: Request,
    include_resolved: bool = Query(False, description="Include resolved alerts"),
    context: OrganizationContext = Depends(require_org_member),
) -> List[Dict[str, Any]]:
    return await _alerts(request).list_alerts(context.org_id, include_resolved)


@router.post(
    "/compliance-alerts/refresh",
    summary="Refresh Visa Alerts",
    description="Raise or escalate visa expiry alerts for workers expiring within 90 days.",
)
async def refresh_compliance_alerts(
    request: Request, context: OrganizationContext = Depends(require_org_member)
) -> Dict[str, int]:
    return await _alerts(request).refresh_alerts(context.org_id)


@router.post(
    "/compliance-alerts/{alert_id}/resolve",
    summary="Resolve Compliance Alert",
    responses={404: {"description": "Alert not found"}},
)
async def resolve_compliance_alert(
    alert_id: UUID,
    request: Request,
    context: OrganizationContext = Depends(require_org_member),
) -> Dict[str, Any]:
    return await _alerts(request).resolve_alert(
        context.org_id, str(alert_id), context.user_id
    )
