"""Unit tests for SponsorService.

Covers the sponsored worker register, the Home Office reporting log and the
sponsor licence dashboard stats.
"""

from datetime import date
from unittest.mock import AsyncMock, MagicMock

import pytest

from complyflow.exception.api_exceptions import (
    MissingRequiredFieldError,
    ResourceNotFoundError,
)
from complyflow.service.sponsor_service import SponsorService
from tests.conftest import TEST_ORG_ID


def _event(status: str = "pending") -> MagicMock:
    event = MagicMock()
    event.id = "event_1"
    event.organization_id = TEST_ORG_ID
    event.worker_id = None
    event.event_type = "absence"
    event.description = "10 working days unauthorised absence"
    event.deadline_date = date(2026, 3, 12)
    event.status = status
    event.reported_at = None
    event.reported_by = None
    event.created_at = None
    return event


@pytest.fixture
def reporting_repo() -> MagicMock:
    """Mock SponsorReportingRepository."""
    repo = MagicMock()
    repo.list_by_organization = AsyncMock(return_value=[_event()])
    repo.create = AsyncMock(return_value=_event())
    repo.mark_reported = AsyncMock(return_value=_event(status="reported"))
    repo.count_pending = AsyncMock(return_value=3)
    return repo


@pytest.fixture
def service(
    worker_repo: MagicMock,
    reporting_repo: MagicMock,
    org_repo: MagicMock,
    alert_repo: MagicMock,
) -> SponsorService:
    """SponsorService with all repositories mocked."""
    return SponsorService(
        worker_repo=worker_repo,
        reporting_repo=reporting_repo,
        org_repo=org_repo,
        alert_repo=alert_repo,
    )


class TestWorkers:
    """Tests for the sponsored worker register."""

    async def test_list_serializes_dates(self, service: SponsorService) -> None:
        workers = await service.list_workers(TEST_ORG_ID)

        assert workers[0]["full_name"] == "Amara Okafor"
        assert workers[0]["visa_expiry"] == "2026-04-01"
        assert workers[0]["salary"] == 29000.0

    async def test_create_requires_name_and_expiry(self, service: SponsorService) -> None:
        with pytest.raises(MissingRequiredFieldError):
            await service.create_worker(TEST_ORG_ID, {"full_name": "Amara Okafor"})

    async def test_create_delegates_to_repo(
        self, service: SponsorService, worker_repo: MagicMock
    ) -> None:
        fields = {"full_name": "Amara Okafor", "visa_expiry": date(2026, 4, 1)}

        await service.create_worker(TEST_ORG_ID, fields)

        worker_repo.create.assert_awaited_once_with(TEST_ORG_ID, fields)

    async def test_update_missing_worker_raises(
        self, service: SponsorService, worker_repo: MagicMock
    ) -> None:
        worker_repo.update.return_value = None

        with pytest.raises(ResourceNotFoundError):
            await service.update_worker(TEST_ORG_ID, "worker_x", {"notes": "x"})

    async def test_delete_missing_worker_raises(
        self, service: SponsorService, worker_repo: MagicMock
    ) -> None:
        worker_repo.delete.return_value = False

        with pytest.raises(ResourceNotFoundError):
            await service.delete_worker(TEST_ORG_ID, "worker_x")


class TestReportingLog:
    """Tests for reportable events."""

    async def test_create_event(
        self, service: SponsorService, reporting_repo: MagicMock
    ) -> None:
        event = await service.create_reporting_event(
            TEST_ORG_ID, "absence", date(2026, 3, 12)
        )

        assert event["status"] == "pending"
        assert event["deadline_date"] == "2026-03-12"

    async def test_mark_reported(self, service: SponsorService) -> None:
        event = await service.mark_reported(TEST_ORG_ID, "event_1", "user_test")

        assert event["status"] == "reported"

    async def test_mark_reported_missing_event_raises(
        self, service: SponsorService, reporting_repo: MagicMock
    ) -> None:
        reporting_repo.mark_reported.return_value = None

        with pytest.raises(ResourceNotFoundError):
            await service.mark_reported(TEST_ORG_ID, "event_x", "user_test")


class TestStats:
    """Tests for SponsorService.get_stats."""

    async def test_returns_dashboard_counts(
        self, service: SponsorService, alert_repo: MagicMock
    ) -> None:
        stats = await service.get_stats(TEST_ORG_ID)

        assert stats == {
            "cosAllocated": 10,
            "cosUsed": 4,
            "urgentAlerts": 2,
            "pendingReports": 3,
        }
        alert_repo.count_unresolved_by_type.assert_awaited_once_with(
            TEST_ORG_ID, "visa_expiry"
        )

    async def test_missing_org_raises(
        self, service: SponsorService, org_repo: MagicMock
    ) -> None:
        org_repo.get_by_id.return_value = None

        with pytest.raises(ResourceNotFoundError):
            await service.get_stats(TEST_ORG_ID)
