"""Visa compliance alerts for an organization's sponsored workers."""

import logging
import math
from datetime import datetime, timedelta, timezone
from typing import Any, Dict, List, Optional

from complyflow.constants import VISA_ALERT_WINDOW_DAYS, VISA_CRITICAL_DAYS
from complyflow.exception.api_exceptions import ResourceNotFoundError
from complyflow.repository.compliance_alert_repository import ComplianceAlertRepository
from complyflow.repository.profile_repository import ProfileRepository
from complyflow.repository.sponsored_worker_repository import SponsoredWorkerRepository
from complyflow.service.email_service import EmailService
from complyflow.service.email_templates import (
    format_uk_date,
    render_critical_visa_alert,
)

logger = logging.getLogger(__name__)

VISA_EXPIRY = "visa_expiry"


def days_until(expiry, now: datetime) -> int:
    """Whole days from ``now`` until midnight UTC on ``expiry``, rounded up."""
    expires_at = datetime(expiry.year, expiry.month, expiry.day, tzinfo=timezone.utc)
    return math.ceil((expires_at - now).total_seconds() / 86400)


def _alert_to_dict(alert) -> Dict[str, Any]:
    return {
        "id": str(alert.id),
        "organization_id": str(alert.organization_id),
        "alert_type": alert.alert_type,
        "severity": alert.severity,
        "title": alert.title,
        "description": alert.description,
        "related_worker_id": (
            str(alert.related_worker_id) if alert.related_worker_id else None
        ),
        "due_date": alert.due_date.isoformat() if alert.due_date else None,
        "is_resolved": alert.is_resolved,
        "created_at": alert.created_at.isoformat() if alert.created_at else None,
    }


class ComplianceAlertService:
    """Raises, escalates and resolves visa expiry alerts.

    Attributes:
        alert_repo: Compliance alert repository
        worker_repo: Sponsored worker repository
        profile_repo: Profile repository (alert recipients)
        email_service: Sends critical alert emails
        app_base_url: Dashboard link base
    """

    def __init__(
        self,
        alert_repo: ComplianceAlertRepository,
        worker_repo: SponsoredWorkerRepository,
        profile_repo: ProfileRepository,
        email_service: EmailService,
        app_base_url: str,
    ):
        self.alert_repo = alert_repo
        self.worker_repo = worker_repo
        self.profile_repo = profile_repo
        self.email_service = email_service
        self.app_base_url = app_base_url

    async def list_alerts(
        self, org_id: str, include_resolved: bool = False
    ) -> List[Dict[str, Any]]:
        alerts = await self.alert_repo.list_by_organization(org_id, include_resolved)
        return [_alert_to_dict(a) for a in alerts]

    async def refresh_alerts(
        self, org_id: str, now: Optional[datetime] = None
    ) -> Dict[str, int]:
        """Sync visa expiry alerts with the worker register.

        Workers whose visa expires within 90 days get one unresolved alert,
        critical at 30 days or fewer. New critical alerts email the owners.

        Returns:
            ``{created, escalated}`` counts
        """
        now = now or datetime.now(timezone.utc)
        cutoff = (now + timedelta(days=VISA_ALERT_WINDOW_DAYS)).date()
        workers = await self.worker_repo.list_expiring_by(org_id, cutoff)

        existing = {
            alert.related_worker_id: alert
            for alert in await self.alert_repo.list_unresolved_by_type(org_id, VISA_EXPIRY)
        }

        created = 0
        escalated = 0
        for worker in workers:
            days = days_until(worker.visa_expiry, now)
            severity = "critical" if days <= VISA_CRITICAL_DAYS else "warning"
            expiry_text = format_uk_date(worker.visa_expiry)
            alert = existing.get(worker.id)

            if alert is None:
                await self.alert_repo.create(
                    org_id,
                    alert_type=VISA_EXPIRY,
                    severity=severity,
                    title=f"Visa Expiry: {worker.full_name}",
                    description=(
                        f"Visa expires in {days} days ({expiry_text}). Please initiate "
                        f"renewal or Right-to-Work verification."
                    ),
                    related_worker_id=worker.id,
                    due_date=worker.visa_expiry,
                )
                created += 1
                if severity == "critical":
                    await self._notify_owners(org_id, worker.full_name, expiry_text)
            elif alert.severity != severity:
                await self.alert_repo.update_severity(
                    alert.id,
                    severity,
                    f"Visa expires in {days} days ({expiry_text}). PLEASE ACT NOW.",
                )
                escalated += 1

        logger.info(
            f"Refreshed visa alerts for org {org_id}: {created} created, {escalated} escalated"
        )
        return {"created": created, "escalated": escalated}

    async def _notify_owners(self, org_id: str, worker_name: str, expiry_text: str) -> None:
        owners = await self.profile_repo.list_by_organization(org_id, roles=["owner"])
        subject, html = render_critical_visa_alert(
            worker_name, expiry_text, self.app_base_url
        )
        for owner in owners:
            try:
                await self.email_service.send_raw(owner.email, subject, html=html)
            except Exception as e:
                logger.error(f"[ComplianceService] Email failed for {owner.email}: {e}")

    async def resolve_alert(self, org_id: str, alert_id: str, user_id: str) -> Dict[str, Any]:
        """Mark an alert resolved.

        Raises:
            ResourceNotFoundError: If the alert is not in the organization
        """
        alert = await self.alert_repo.resolve(org_id, alert_id, user_id)
        if alert is None:
            raise ResourceNotFoundError("Compliance alert", alert_id)
        return _alert_to_dict(alert)
