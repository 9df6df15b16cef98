"""Unit tests for ComplianceAlertService.

Visa expiry alerts are created for workers within 90 days of expiry,
escalated to critical at 30 days or fewer, and new critical alerts email the
organization owners.
"""

from datetime import date, datetime, timezone
from unittest.mock import MagicMock, patch

import pytest

from complyflow.exception.api_exceptions import ResourceNotFoundError
from complyflow.service.compliance_alert_service import (
    ComplianceAlertService,
    days_until,
)
from tests.conftest import (
    FIXED_NOW,
    TEST_ORG_ID,
    make_alert_repo,
    make_mock_alert,
    make_mock_worker,
)


@pytest.fixture
def service(
    alert_repo: MagicMock,
    worker_repo: MagicMock,
    profile_repo: MagicMock,
    email_service: MagicMock,
) -> ComplianceAlertService:
    """ComplianceAlertService with all collaborators mocked."""
    return ComplianceAlertService(
        alert_repo=alert_repo,
        worker_repo=worker_repo,
        profile_repo=profile_repo,
        email_service=email_service,
        app_base_url="https://app.complyflow.uk",
    )


class TestDaysUntil:
    """Tests for days_until."""

    def test_rounds_partial_days_up(self) -> None:
        """09:00 on 2 March is 29.6 days before 1 April, which reads as 30."""
        assert days_until(date(2026, 4, 1), FIXED_NOW) == 30

    def test_same_day_midnight(self) -> None:
        now = datetime(2026, 4, 1, tzinfo=timezone.utc)

        assert days_until(date(2026, 4, 1), now) == 0


class TestRefreshAlerts:
    """Tests for ComplianceAlertService.refresh_alerts."""

    async def test_creates_critical_alert_and_emails_owners(
        self,
        service: ComplianceAlertService,
        alert_repo: MagicMock,
        email_service: MagicMock,
    ) -> None:
        """A worker 30 days from expiry gets a critical alert and owners are told."""
        result = await service.refresh_alerts(TEST_ORG_ID, FIXED_NOW)

        assert result == {"created": 1, "escalated": 0}
        kwargs = alert_repo.create.call_args.kwargs
        assert kwargs["severity"] == "critical"
        assert kwargs["title"] == "Visa Expiry: Amara Okafor"
        assert kwargs["description"].startswith("Visa expires in 30 days (01/04/2026)")
        to, subject = email_service.send_raw.call_args.args
        assert to == "manager@sunrise.example"
        assert subject == "🚨 CRITICAL: Compliance Alert - Amara Okafor"

    async def test_warning_alert_sends_no_email(
        self,
        service: ComplianceAlertService,
        worker_repo: MagicMock,
        alert_repo: MagicMock,
        email_service: MagicMock,
    ) -> None:
        worker_repo.list_expiring_by.return_value = [
            make_mock_worker(visa_expiry=date(2026, 5, 20))
        ]

        await service.refresh_alerts(TEST_ORG_ID, FIXED_NOW)

        assert alert_repo.create.call_args.kwargs["severity"] == "warning"
        email_service.send_raw.assert_not_awaited()

    async def test_escalates_existing_warning(
        self, worker_repo: MagicMock, profile_repo: MagicMock, email_service: MagicMock
    ) -> None:
        """An open warning for a worker now inside 30 days becomes critical."""
        alert_repo = make_alert_repo(unresolved=[make_mock_alert(severity="warning")])
        service = ComplianceAlertService(
            alert_repo, worker_repo, profile_repo, email_service, "https://app"
        )

        result = await service.refresh_alerts(TEST_ORG_ID, FIXED_NOW)

        assert result == {"created": 0, "escalated": 1}
        alert_id, severity, description = alert_repo.update_severity.call_args.args
        assert severity == "critical"
        assert description.endswith("PLEASE ACT NOW.")

    async def test_unchanged_alert_is_left_alone(
        self, worker_repo: MagicMock, profile_repo: MagicMock, email_service: MagicMock
    ) -> None:
        alert_repo = make_alert_repo(unresolved=[make_mock_alert(severity="critical")])
        service = ComplianceAlertService(
            alert_repo, worker_repo, profile_repo, email_service, "https://app"
        )

        result = await service.refresh_alerts(TEST_ORG_ID, FIXED_NOW)

        assert result == {"created": 0, "escalated": 0}
        alert_repo.create.assert_not_awaited()

    async def test_email_failure_does_not_abort(
        self, service: ComplianceAlertService, email_service: MagicMock
    ) -> None:
        email_service.send_raw.side_effect = RuntimeError("Resend down")

        result = await service.refresh_alerts(TEST_ORG_ID, FIXED_NOW)

        assert result["created"] == 1

    async def test_owners_only_are_notified(
        self, service: ComplianceAlertService, profile_repo: MagicMock
    ) -> None:
        with patch(
            "complyflow.service.compliance_alert_service.render_critical_visa_alert",
            return_value=("subject", "<p>html</p>"),
        ):
            await service.refresh_alerts(TEST_ORG_ID, FIXED_NOW)

        profile_repo.list_by_organization.assert_awaited_once_with(
            TEST_ORG_ID, roles=["owner"]
        )


class TestResolveAlert:
    """Tests for ComplianceAlertService.resolve_alert."""

    async def test_returns_serialized_alert(self, service: ComplianceAlertService) -> None:
        alert = await service.resolve_alert(TEST_ORG_ID, "alert_1", "user_test")

        assert alert["id"] == "alert_1"
        assert alert["due_date"] == "2026-05-01"

    async def test_missing_alert_raises(
        self, service: ComplianceAlertService, alert_repo: MagicMock
    ) -> None:
        alert_repo.resolve.return_value = None

        with pytest.raises(ResourceNotFoundError):
            await service.resolve_alert(TEST_ORG_ID, "alert_x", "user_test")
