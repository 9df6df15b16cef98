"""Sponsored worker register and Home Office reporting log."""

import logging
from datetime import date
from typing import Any, Dict, List, Optional

from complyflow.exception.api_exceptions import (
    MissingRequiredFieldError,
    ResourceNotFoundError,
)
from complyflow.repository.compliance_alert_repository import ComplianceAlertRepository
from complyflow.repository.organization_repository import OrganizationRepository
from complyflow.repository.sponsor_reporting_repository import (
    SponsorReportingRepository,
)
from complyflow.repository.sponsored_worker_repository import SponsoredWorkerRepository

logger = logging.getLogger(__name__)

WORKER_FIELDS = (
    "employee_id",
    "full_name",
    "email",
    "visa_type",
    "cos_number",
    "status",
    "ni_number",
    "passport_number",
    "job_title",
    "work_location",
    "notes",
)
WORKER_DATE_FIELDS = ("visa_expiry", "cos_assigned_date", "start_date", "last_rtw_check")


def _iso(value) -> Optional[str]:
    return value.isoformat() if value is not None else None


def _worker_to_dict(worker) -> Dict[str, Any]:
    data = {
        "id": str(worker.id),
        "organization_id": str(worker.organization_id),
    }
    for field in WORKER_FIELDS:
        data[field] = getattr(worker, field)
    for field in WORKER_DATE_FIELDS:
        data[field] = _iso(getattr(worker, field))
    data["salary"] = float(worker.salary) if worker.salary is not None else None
    data["created_at"] = _iso(worker.created_at)
    data["updated_at"] = _iso(worker.updated_at)
    return data


def _event_to_dict(event) -> Dict[str, Any]:
    return {
        "id": str(event.id),
        "organization_id": str(event.organization_id),
        "worker_id": str(event.worker_id) if event.worker_id else None,
        "event_type": event.event_type,
        "description": event.description,
        "deadline_date": _iso(event.deadline_date),
        "status": event.status,
        "reported_at": _iso(event.reported_at),
        "reported_by": str(event.reported_by) if event.reported_by else None,
        "created_at": _iso(event.created_at),
    }


class SponsorService:
    """Organization-scoped access to sponsored workers and reportable events.

    Attributes:
        worker_repo: Sponsored worker repository
        reporting_repo: Reporting log repository
        org_repo: Organization repository (CoS allocation)
        alert_repo: Compliance alert repository
    """

    def __init__(
        self,
        worker_repo: SponsoredWorkerRepository,
        reporting_repo: SponsorReportingRepository,
        org_repo: OrganizationRepository,
        alert_repo: ComplianceAlertRepository,
    ):
        self.worker_repo = worker_repo
        self.reporting_repo = reporting_repo
        self.org_repo = org_repo
        self.alert_repo = alert_repo

    async def list_workers(self, org_id: str) -> List[Dict[str, Any]]:
        workers = await self.worker_repo.list_by_organization(org_id)
        return [_worker_to_dict(w) for w in workers]

    async def create_worker(self, org_id: str, fields: Dict[str, Any]) -> Dict[str, Any]:
        """Add a worker to the register.

        Raises:
            MissingRequiredFieldError: If full_name or visa_expiry is missing
        """
        if not fields.get("full_name") or not fields.get("visa_expiry"):
            raise MissingRequiredFieldError("Missing required fields: full_name, visa_expiry")
        worker = await self.worker_repo.create(org_id, fields)
        logger.info(f"Created sponsored worker {worker.id} for org {org_id}")
        return _worker_to_dict(worker)

    async def update_worker(
        self, org_id: str, worker_id: str, fields: Dict[str, Any]
    ) -> Dict[str, Any]:
        """Apply a partial update to a worker.

        Raises:
            ResourceNotFoundError: If the worker is not in the organization
        """
        worker = await self.worker_repo.update(org_id, worker_id, fields)
        if worker is None:
            raise ResourceNotFoundError("Sponsored worker", worker_id)
        return _worker_to_dict(worker)

    async def delete_worker(self, org_id: str, worker_id: str) -> bool:
        if not await self.worker_repo.delete(org_id, worker_id):
            raise ResourceNotFoundError("Sponsored worker", worker_id)
        logger.info(f"Deleted sponsored worker {worker_id} from org {org_id}")
        return True

    async def get_reporting_log(self, org_id: str) -> List[Dict[str, Any]]:
        events = await self.reporting_repo.list_by_organization(org_id)
        return [_event_to_dict(e) for e in events]

    async def create_reporting_event(
        self,
        org_id: str,
        event_type: str,
        deadline_date: date,
        worker_id: Optional[str] = None,
        description: Optional[str] = None,
    ) -> Dict[str, Any]:
        """Log a reportable change of circumstances as pending."""
        event = await self.reporting_repo.create(
            org_id,
            event_type=event_type,
            deadline_date=deadline_date,
            worker_id=worker_id,
            description=description,
        )
        return _event_to_dict(event)

    async def mark_reported(
        self, org_id: str, event_id: str, user_id: str
    ) -> Dict[str, Any]:
        """Mark an event as reported to the Home Office.

        Raises:
            ResourceNotFoundError: If the event is not in the organization
        """
        event = await self.reporting_repo.mark_reported(org_id, event_id, user_id)
        if event is None:
            raise ResourceNotFoundError("Reporting event", event_id)
        return _event_to_dict(event)

    async def get_stats(self, org_id: str) -> Dict[str, int]:
        """Certificate of Sponsorship usage and open work for the dashboard.

        Returns:
            ``{cosAllocated, cosUsed, urgentAlerts, pendingReports}``

        Raises:
            ResourceNotFoundError: If the organization does not exist
        """
        org = await self.org_repo.get_by_id(org_id)
        if org is None:
            raise ResourceNotFoundError("Organization", org_id)

        urgent = await self.alert_repo.count_unresolved_by_type(org_id, "visa_expiry")
        pending = await self.reporting_repo.count_pending(org_id)
        return {
            "cosAllocated": org.cos_allocated,
            "cosUsed": org.cos_used,
            "urgentAlerts": urgent,
            "pendingReports": pending,
        }
