"""Unit tests for the trial expiry and visa expiry jobs."""

from datetime import date
from unittest.mock import MagicMock

import pytest
from sqlalchemy.exc import OperationalError

from complyflow.exception.api_exceptions import DatabaseError
from complyflow.service.trial_expiry_service import TrialExpiryService
from complyflow.service.visa_expiry_service import VisaExpiryService
from tests.conftest import make_mock_org, make_mock_profile, make_mock_worker

TODAY = date(2026, 3, 2)


def _db_error() -> OperationalError:
    return OperationalError("SELECT expire_trials()", {}, Exception("no function"))


class TestTrialExpiry:
    """Tests for TrialExpiryService.expire."""

    async def test_uses_database_function(self, org_repo: MagicMock) -> None:
        """The expire_trials() function result is reported with method rpc."""
        org_repo.expire_trials_rpc.return_value = 3

        result = await TrialExpiryService(org_repo).expire()

        assert result == {"success": True, "expired_count": 3, "method": "rpc"}
        org_repo.expire_trials.assert_not_awaited()

    async def test_falls_back_to_direct_update(self, org_repo: MagicMock) -> None:
        """When the function call fails, lapsed trials are downgraded directly."""
        org_repo.expire_trials_rpc.side_effect = _db_error()
        org_repo.expire_trials.return_value = [
            make_mock_org(name="Sunrise Care Home"),
            make_mock_org(name="Meadow View"),
        ]

        result = await TrialExpiryService(org_repo).expire()

        assert result == {
            "success": True,
            "expired_count": 2,
            "method": "fallback",
            "organizations": ["Sunrise Care Home", "Meadow View"],
        }

    async def test_fallback_failure_raises(self, org_repo: MagicMock) -> None:
        """A failing fallback is reported as a database error."""
        org_repo.expire_trials_rpc.side_effect = _db_error()
        org_repo.expire_trials.side_effect = _db_error()

        with pytest.raises(DatabaseError):
            await TrialExpiryService(org_repo).expire()


@pytest.fixture
def visa_service(
    worker_repo: MagicMock,
    profile_repo: MagicMock,
    org_repo: MagicMock,
    email_service: MagicMock,
) -> VisaExpiryService:
    """VisaExpiryService with all collaborators mocked."""
    return VisaExpiryService(
        worker_repo=worker_repo,
        profile_repo=profile_repo,
        org_repo=org_repo,
        email_service=email_service,
    )


class TestVisaExpiryCheck:
    """Tests for VisaExpiryService.check."""

    async def test_checks_each_threshold(
        self, visa_service: VisaExpiryService, worker_repo: MagicMock
    ) -> None:
        """Workers are looked up for expiry exactly 90, 60, 30 and 14 days out."""
        await visa_service.check(TODAY)

        targets = [c.args[0] for c in worker_repo.list_expiring_on.call_args_list]
        assert targets == [
            date(2026, 5, 31),
            date(2026, 5, 1),
            date(2026, 4, 1),
            date(2026, 3, 16),
        ]

    async def test_emails_every_admin(
        self,
        visa_service: VisaExpiryService,
        worker_repo: MagicMock,
        profile_repo: MagicMock,
        email_service: MagicMock,
    ) -> None:
        """Each admin and owner receives one alert per matching worker."""
        worker_repo.list_expiring_on.side_effect = [[], [], [make_mock_worker()], []]
        profile_repo.list_by_organization.return_value = [
            make_mock_profile(email="owner@example.com"),
            make_mock_profile(email="admin@example.com", role="admin"),
        ]

        result = await visa_service.check(TODAY)

        assert result == {"success": True, "alertsProcessed": 1, "emailsSent": 2}
        profile_repo.list_by_organization.assert_awaited_once_with(
            "org_test", roles=("admin", "owner")
        )
        email_type, to, data = email_service.send_transactional.call_args.args
        assert email_type == "visa_expiry_alert"
        assert data == {
            "workerName": "Amara Okafor",
            "visaType": "Skilled Worker",
            "expiryDate": "2026-04-01",
            "daysRemaining": 30,
            "organizationName": "Sunrise Care Home",
        }

    async def test_org_without_admins_is_skipped(
        self,
        visa_service: VisaExpiryService,
        worker_repo: MagicMock,
        profile_repo: MagicMock,
        email_service: MagicMock,
    ) -> None:
        """No admins means no email and no processed alert."""
        worker_repo.list_expiring_on.side_effect = [[make_mock_worker()], [], [], []]
        profile_repo.list_by_organization.return_value = []

        result = await visa_service.check(TODAY)

        assert result["alertsProcessed"] == 0
        email_service.send_transactional.assert_not_awaited()

    async def test_failed_send_is_not_counted(
        self,
        visa_service: VisaExpiryService,
        worker_repo: MagicMock,
        email_service: MagicMock,
    ) -> None:
        """Send failures are logged and the job carries on."""
        worker_repo.list_expiring_on.side_effect = [[make_mock_worker()], [], [], []]
        email_service.send_transactional.side_effect = RuntimeError("Resend down")

        result = await visa_service.check(TODAY)

        assert result == {"success": True, "alertsProcessed": 1, "emailsSent": 0}
