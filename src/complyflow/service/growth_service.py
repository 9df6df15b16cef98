"""Lifecycle drip emails sent by the scheduled growth job."""

import logging
from datetime import datetime, timedelta, timezone
from typing import Any, Dict, Optional

from complyflow.constants import (
    TRIAL_ENDING_LOG,
    TRIAL_LENGTH_DAYS,
    TRIAL_WARNING_DAYS_LEFT,
    WELCOME_DRIP_LOG,
)
from complyflow.repository.email_log_repository import EmailLogRepository
from complyflow.repository.organization_repository import OrganizationRepository
from complyflow.repository.profile_repository import ProfileRepository
from complyflow.service.email_service import EmailService
from complyflow.service.email_templates import format_uk_date

logger = logging.getLogger(__name__)


def first_name(full_name: Optional[str]) -> str:
    """First word of a full name, or ``there``."""
    parts = (full_name or "").split()
    return parts[0] if parts else "there"


class GrowthService:
    """Sends the day-1 welcome and day-11 trial warning emails.

    Attributes:
        profile_repo: Profile repository
        org_repo: Organization repository
        email_log_repo: Lifecycle email log
        email_service: Email sender
        app_base_url: Public app URL for dashboard links
    """

    def __init__(
        self,
        profile_repo: ProfileRepository,
        org_repo: OrganizationRepository,
        email_log_repo: EmailLogRepository,
        email_service: EmailService,
        app_base_url: str,
    ):
        self.profile_repo = profile_repo
        self.org_repo = org_repo
        self.email_log_repo = email_log_repo
        self.email_service = email_service
        self.app_base_url = app_base_url.rstrip("/")

    async def run(self, now: Optional[datetime] = None) -> Dict[str, Any]:
        """Run one pass of the drip campaign.

        Returns:
            ``{welcome_emails, trial_warnings, errors}``
        """
        now = now or datetime.now(timezone.utc)
        results: Dict[str, Any] = {"welcome_emails": 0, "trial_warnings": 0, "errors": []}

        await self._send_welcome_emails(now, results)
        await self._send_trial_warnings(now, results)

        logger.info(
            f"[Growth] Sent {results['welcome_emails']} welcome emails and "
            f"{results['trial_warnings']} trial warnings"
        )
        return results

    async def _send_welcome_emails(self, now: datetime, results: Dict[str, Any]) -> None:
        candidates = await self.profile_repo.list_created_between(
            now - timedelta(hours=48), now - timedelta(hours=24)
        )
        logger.info(f"[Growth] Found {len(candidates)} candidate users for Welcome Email")

        for profile in candidates:
            if await self.email_log_repo.has_sent(profile.id, WELCOME_DRIP_LOG):
                continue
            data = {
                "name": first_name(profile.full_name),
                "trialDays": TRIAL_LENGTH_DAYS,
                "dashboardUrl": f"{self.app_base_url}/dashboard",
            }
            try:
                await self.email_service.send_transactional("welcome", profile.email, data)
            except Exception as e:
                results["errors"].append(
                    f"Failed to send welcome to {profile.email}: {e}"
                )
                continue
            await self.email_log_repo.log_sent(profile.id, WELCOME_DRIP_LOG)
            results["welcome_emails"] += 1

    async def _send_trial_warnings(self, now: datetime, results: Dict[str, Any]) -> None:
        candidates = await self.profile_repo.list_created_between(
            now - timedelta(days=12), now - timedelta(days=11)
        )
        organizations = {}
        trial_users = []
        for profile in candidates:
            if profile.organization_id is None:
                continue
            if profile.organization_id not in organizations:
                organizations[profile.organization_id] = await self.org_repo.get_by_id(
                    profile.organization_id
                )
            org = organizations[profile.organization_id]
            if org is not None and org.subscription_tier == "trial":
                trial_users.append((profile, org))
        logger.info(f"[Growth] Found {len(trial_users)} candidate users for Trial Warning")

        for profile, org in trial_users:
            if await self.email_log_repo.has_sent(profile.id, TRIAL_ENDING_LOG):
                continue
            trial_end = org.trial_ends_at or now + timedelta(days=TRIAL_WARNING_DAYS_LEFT)
            data = {
                "daysLeft": TRIAL_WARNING_DAYS_LEFT,
                "expiryDate": format_uk_date(trial_end),
            }
            try:
                await self.email_service.send_transactional(
                    "trial_expiring", profile.email, data
                )
            except Exception as e:
                results["errors"].append(
                    f"Failed to send trial warning to {profile.email}: {e}"
                )
                continue
            await self.email_log_repo.log_sent(profile.id, TRIAL_ENDING_LOG)
            results["trial_warnings"] += 1
