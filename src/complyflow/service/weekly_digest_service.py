"""Weekly compliance digest emails."""

import asyncio
import logging
from datetime import datetime, timedelta, timezone
from typing import Any, Dict, List, Optional

from complyflow.constants import (
    DIGEST_LOOKBACK_DAYS,
    DIGEST_SCORE_TARGET,
    DIGEST_TOP_UPDATES,
    DIGEST_VISA_WINDOW_DAYS,
    NO_REGULATORY_UPDATES,
)
from complyflow.repository.compliance_alert_repository import ComplianceAlertRepository
from complyflow.repository.compliance_metrics_repository import (
    ComplianceMetricsRepository,
)
from complyflow.repository.organization_repository import OrganizationRepository
from complyflow.repository.profile_repository import ProfileRepository
from complyflow.repository.regulatory_update_repository import (
    RegulatoryUpdateRepository,
)
from complyflow.repository.sponsored_worker_repository import SponsoredWorkerRepository
from complyflow.service.email_service import EmailService

logger = logging.getLogger(__name__)

DIGEST_STATUSES = ("active", "trial")


def format_regulatory_updates(updates) -> str:
    """``SOURCE: title`` entries joined by ``; ``."""
    if not updates:
        return NO_REGULATORY_UPDATES
    return "; ".join(f"{u.source.upper()}: {u.title}" for u in updates)


def action_items(stats: Dict[str, Any]) -> List[str]:
    """Follow-ups suggested by an organization's weekly stats."""
    items = []
    if stats["visasExpiringSoon"] > 0:
        items.append(
            f"{stats['visasExpiringSoon']} worker visa(s) expiring within "
            f"{DIGEST_VISA_WINDOW_DAYS} days"
        )
    score = stats["complianceScore"]
    if score and score < DIGEST_SCORE_TARGET:
        items.append(
            f"Compliance score below {DIGEST_SCORE_TARGET}% - run a new Gap Analysis"
        )
    return items


class WeeklyDigestService:
    """Builds and sends the Monday digest to every member of a paying or trial organization."""

    def __init__(
        self,
        org_repo: OrganizationRepository,
        profile_repo: ProfileRepository,
        alert_repo: ComplianceAlertRepository,
        metrics_repo: ComplianceMetricsRepository,
        worker_repo: SponsoredWorkerRepository,
        regulatory_repo: RegulatoryUpdateRepository,
        email_service: EmailService,
    ):
        self.org_repo = org_repo
        self.profile_repo = profile_repo
        self.alert_repo = alert_repo
        self.metrics_repo = metrics_repo
        self.worker_repo = worker_repo
        self.regulatory_repo = regulatory_repo
        self.email_service = email_service

    async def collect_stats(self, org_id, now: datetime) -> Dict[str, Any]:
        """Weekly compliance stats for one organization."""
        since = now - timedelta(days=DIGEST_LOOKBACK_DAYS)
        visa_cutoff = (now + timedelta(days=DIGEST_VISA_WINDOW_DAYS)).date()
        resolved, trainings, expiring, score = await asyncio.gather(
            self.alert_repo.count_resolved_since(org_id, since),
            self.metrics_repo.count_trainings_since(org_id, since),
            self.worker_repo.count_expiring_by(org_id, visa_cutoff),
            self.metrics_repo.latest_compliance_score(org_id),
        )
        return {
            "complianceScore": score or None,
            "alertsResolved": resolved,
            "trainingsCompleted": trainings,
            "visasExpiringSoon": expiring,
        }

    async def send(self, now: Optional[datetime] = None) -> Dict[str, Any]:
        """Send the digest.

        Returns:
            ``{success, organizations, emailsSent, errors}``
        """
        now = now or datetime.now(timezone.utc)
        organizations = await self.org_repo.list_by_subscription_status(DIGEST_STATUSES)
        logger.info(f"Processing {len(organizations)} organizations")

        emails_sent = 0
        errors = 0
        for org in organizations:
            stats = await self.collect_stats(org.id, now)
            updates = await self.regulatory_repo.top_since(
                now - timedelta(days=DIGEST_LOOKBACK_DAYS), DIGEST_TOP_UPDATES
            )
            data = {
                "organizationName": org.name,
                **stats,
                "regulatoryUpdates": format_regulatory_updates(updates),
            }
            items = action_items(stats)
            if items:
                data["actionItems"] = items

            for profile in await self.profile_repo.list_by_organization(org.id):
                try:
                    await self.email_service.send_transactional(
                        "weekly_digest", profile.email, data
                    )
                except Exception as e:
                    errors += 1
                    logger.error(f"Error sending digest to {profile.email}: {e}")
                    continue
                emails_sent += 1
                logger.info(f"Sent digest to {profile.email}")

        return {
            "success": True,
            "organizations": len(organizations),
            "emailsSent": emails_sent,
            "errors": errors,
        }
