"""Daily visa expiry notifications for sponsored workers."""

import logging
from datetime import date, timedelta
from typing import Any, Dict, Optional

from sqlalchemy.exc import SQLAlchemyError

from complyflow.constants import VISA_ALERT_ROLES, VISA_ALERT_THRESHOLDS
from complyflow.repository.organization_repository import OrganizationRepository
from complyflow.repository.profile_repository import ProfileRepository
from complyflow.repository.sponsored_worker_repository import SponsoredWorkerRepository
from complyflow.service.email_service import EmailService

logger = logging.getLogger(__name__)


class VisaExpiryService:
    """Emails organization admins when a worker's visa is 90, 60, 30 or 14 days out.

    Attributes:
        worker_repo: Sponsored worker repository
        profile_repo: Profile repository
        org_repo: Organization repository
        email_service: Email sender
    """

    def __init__(
        self,
        worker_repo: SponsoredWorkerRepository,
        profile_repo: ProfileRepository,
        org_repo: OrganizationRepository,
        email_service: EmailService,
    ):
        self.worker_repo = worker_repo
        self.profile_repo = profile_repo
        self.org_repo = org_repo
        self.email_service = email_service

    async def check(self, today: Optional[date] = None) -> Dict[str, Any]:
        """Send alerts for every threshold that falls on today.

        Returns:
            ``{success, alertsProcessed, emailsSent}``
        """
        today = today or date.today()
        logger.info(f"Starting Visa Expiry Check for {today.isoformat()}")

        alerts_processed = 0
        emails_sent = 0
        for days in VISA_ALERT_THRESHOLDS:
            target = today + timedelta(days=days)
            workers = await self.worker_repo.list_expiring_on(target)
            if not workers:
                continue
            logger.info(f"Found {len(workers)} worker(s) with {days}-day expiry")

            for worker in workers:
                try:
                    admins = await self.profile_repo.list_by_organization(
                        worker.organization_id, roles=VISA_ALERT_ROLES
                    )
                except SQLAlchemyError as e:
                    logger.error(
                        f"Error fetching profiles for org {worker.organization_id}: {e}"
                    )
                    continue
                if not admins:
                    logger.warning(
                        f"No admin profiles found for org {worker.organization_id}"
                    )
                    continue

                org = await self.org_repo.get_by_id(worker.organization_id)
                data = {
                    "workerName": worker.full_name,
                    "visaType": worker.visa_type,
                    "expiryDate": worker.visa_expiry.isoformat(),
                    "daysRemaining": days,
                    "organizationName": org.name if org else None,
                }
                for admin in admins:
                    try:
                        await self.email_service.send_transactional(
                            "visa_expiry_alert", admin.email, data
                        )
                    except Exception as e:
                        logger.error(f"Failed to send visa alert to {admin.email}: {e}")
                        continue
                    emails_sent += 1
                    logger.info(
                        f"Sent {days}-day alert for {worker.full_name} to {admin.email}"
                    )
                alerts_processed += 1

        return {
            "success": True,
            "alertsProcessed": alerts_processed,
            "emailsSent": emails_sent,
        }
