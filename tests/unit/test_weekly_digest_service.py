"""Unit tests for WeeklyDigestService and its formatting helpers."""

from datetime import timedelta
from unittest.mock import AsyncMock, MagicMock

import pytest

from complyflow.service.weekly_digest_service import (
    WeeklyDigestService,
    action_items,
    format_regulatory_updates,
)
from tests.conftest import FIXED_NOW, make_mock_profile


def _update(source: str, title: str) -> MagicMock:
    update = MagicMock()
    update.source = source
    update.title = title
    return update


@pytest.fixture
def metrics_repo() -> MagicMock:
    """Mock ComplianceMetricsRepository."""
    repo = MagicMock()
    repo.count_trainings_since = AsyncMock(return_value=5)
    repo.latest_compliance_score = AsyncMock(return_value=72)
    return repo


@pytest.fixture
def regulatory_repo() -> MagicMock:
    """Mock RegulatoryUpdateRepository with one stored update."""
    repo = MagicMock()
    repo.top_since = AsyncMock(
        return_value=[_update("cqc", "New guidance on medicines")]
    )
    return repo


@pytest.fixture
def service(
    org_repo: MagicMock,
    profile_repo: MagicMock,
    alert_repo: MagicMock,
    metrics_repo: MagicMock,
    worker_repo: MagicMock,
    regulatory_repo: MagicMock,
    email_service: MagicMock,
) -> WeeklyDigestService:
    """WeeklyDigestService with all repositories mocked."""
    return WeeklyDigestService(
        org_repo=org_repo,
        profile_repo=profile_repo,
        alert_repo=alert_repo,
        metrics_repo=metrics_repo,
        worker_repo=worker_repo,
        regulatory_repo=regulatory_repo,
        email_service=email_service,
    )


class TestFormatRegulatoryUpdates:
    """Tests for format_regulatory_updates."""

    def test_joins_source_and_title(self) -> None:
        updates = [_update("cqc", "A"), _update("home_office", "B")]

        assert format_regulatory_updates(updates) == "CQC: A; HOME_OFFICE: B"

    def test_empty_has_placeholder(self) -> None:
        assert format_regulatory_updates([]) == "No new regulatory updates this week."


class TestActionItems:
    """Tests for action_items."""

    def test_expiring_visas_and_low_score(self) -> None:
        items = action_items({"visasExpiringSoon": 2, "complianceScore": 65})

        assert items == [
            "2 worker visa(s) expiring within 30 days",
            "Compliance score below 80% - run a new Gap Analysis",
        ]

    def test_missing_score_adds_nothing(self) -> None:
        assert action_items({"visasExpiringSoon": 0, "complianceScore": None}) == []


class TestSend:
    """Tests for WeeklyDigestService.send."""

    async def test_sends_to_every_member(
        self,
        service: WeeklyDigestService,
        profile_repo: MagicMock,
        email_service: MagicMock,
    ) -> None:
        """Every profile in an active or trial organization receives the digest."""
        profile_repo.list_by_organization.return_value = [
            make_mock_profile(email="a@example.com"),
            make_mock_profile(email="b@example.com", role="member"),
        ]

        result = await service.send(FIXED_NOW)

        assert result == {
            "success": True,
            "organizations": 1,
            "emailsSent": 2,
            "errors": 0,
        }

    async def test_digest_payload(
        self,
        service: WeeklyDigestService,
        email_service: MagicMock,
        worker_repo: MagicMock,
    ) -> None:
        """The digest carries stats, updates and action items."""
        worker_repo.count_expiring_by.return_value = 1

        await service.send(FIXED_NOW)

        email_type, _, data = email_service.send_transactional.call_args.args
        assert email_type == "weekly_digest"
        assert data["organizationName"] == "Sunrise Care Home"
        assert data["complianceScore"] == 72
        assert data["trainingsCompleted"] == 5
        assert data["visasExpiringSoon"] == 1
        assert data["regulatoryUpdates"] == "CQC: New guidance on medicines"
        assert len(data["actionItems"]) == 2

    async def test_queries_active_and_trial_orgs(
        self, service: WeeklyDigestService, org_repo: MagicMock
    ) -> None:
        await service.send(FIXED_NOW)

        org_repo.list_by_subscription_status.assert_awaited_once_with(
            ("active", "trial")
        )

    async def test_lookback_is_seven_days(
        self, service: WeeklyDigestService, alert_repo: MagicMock
    ) -> None:
        """Resolved alerts are counted from one week before the run."""
        await service.send(FIXED_NOW)

        alert_repo.count_resolved_since.assert_awaited_once_with(
            "org_test", FIXED_NOW - timedelta(days=7)
        )

    async def test_send_errors_are_counted(
        self, service: WeeklyDigestService, email_service: MagicMock
    ) -> None:
        email_service.send_transactional.side_effect = RuntimeError("Resend down")

        result = await service.send(FIXED_NOW)

        assert result["emailsSent"] == 0
        assert result["errors"] == 1
