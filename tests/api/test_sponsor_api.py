"""API tests for the sponsored worker, reporting and compliance alert routes."""

from datetime import date
from unittest.mock import AsyncMock, MagicMock

from fastapi.testclient import TestClient

from complyflow.exception.api_exceptions import ResourceNotFoundError
from tests.conftest import TEST_ORG_ID, TEST_RECORD_UUID, TEST_USER_ID

BASE = f"/api/organizations/{TEST_ORG_ID}"


class TestSponsoredWorkers:
    """Tests for the sponsored worker register."""

    def test_create_returns_201(self, client: TestClient, services: MagicMock) -> None:
        response = client.post(
            f"{BASE}/sponsored-workers",
            json={"full_name": "Amara Okafor", "visa_expiry": "2027-03-31"},
        )

        assert response.status_code == 201
        org_id, fields = services.sponsor_service.create_worker.call_args.args
        assert org_id == TEST_ORG_ID
        assert fields == {"full_name": "Amara Okafor", "visa_expiry": date(2027, 3, 31)}

    def test_update_sends_only_supplied_fields(
        self, client: TestClient, services: MagicMock
    ) -> None:
        client.patch(
            f"{BASE}/sponsored-workers/{TEST_RECORD_UUID}",
            json={"status": "left", "notes": None},
        )

        services.sponsor_service.update_worker.assert_awaited_once_with(
            TEST_ORG_ID, TEST_RECORD_UUID, {"status": "left", "notes": None}
        )

    def test_negative_salary_is_400(self, client: TestClient) -> None:
        response = client.post(
            f"{BASE}/sponsored-workers", json={"full_name": "A", "salary": -1}
        )

        assert response.status_code == 400

    def test_delete_missing_worker_is_404(
        self, client: TestClient, services: MagicMock
    ) -> None:
        services.sponsor_service.delete_worker = AsyncMock(
            side_effect=ResourceNotFoundError("Sponsored worker", TEST_RECORD_UUID)
        )

        response = client.delete(f"{BASE}/sponsored-workers/{TEST_RECORD_UUID}")

        assert response.status_code == 404

    def test_malformed_worker_id_is_400(
        self, client: TestClient, services: MagicMock
    ) -> None:
        response = client.delete(f"{BASE}/sponsored-workers/not-a-uuid")

        assert response.status_code == 400
        assert response.json()["code"] == "VALIDATION_ERROR"
        services.sponsor_service.delete_worker.assert_not_awaited()

    def test_stats(self, client: TestClient) -> None:
        response = client.get(f"{BASE}/sponsor-stats")

        assert response.json()["cosAllocated"] == 10


class TestReportingEvents:
    def test_mark_reported_records_caller(
        self, client: TestClient, services: MagicMock
    ) -> None:
        client.post(f"{BASE}/reporting-events/{TEST_RECORD_UUID}/reported")

        services.sponsor_service.mark_reported.assert_awaited_once_with(
            TEST_ORG_ID, TEST_RECORD_UUID, TEST_USER_ID
        )

    def test_missing_deadline_is_400(self, client: TestClient) -> None:
        response = client.post(f"{BASE}/reporting-events", json={"event_type": "absence"})

        assert response.status_code == 400
        assert response.json()["code"] == "VALIDATION_ERROR"

    def test_malformed_event_worker_id_is_400(self, client: TestClient) -> None:
        response = client.post(
            f"{BASE}/reporting-events",
            json={"event_type": "absence", "deadline_date": "2026-11-02", "worker_id": "w1"},
        )

        assert response.status_code == 400
        assert response.json()["field"] == "body -> worker_id"


class TestComplianceAlerts:
    """Tests for the compliance alert routes."""

    def test_list_excludes_resolved_by_default(
        self, client: TestClient, services: MagicMock
    ) -> None:
        client.get(f"{BASE}/compliance-alerts")

        services.compliance_alert_service.list_alerts.assert_awaited_once_with(
            TEST_ORG_ID, False
        )

    def test_refresh_returns_counts(self, client: TestClient) -> None:
        response = client.post(f"{BASE}/compliance-alerts/refresh")

        assert response.json() == {"created": 1, "escalated": 0}

    def test_resolve_records_caller(self, client: TestClient, services: MagicMock) -> None:
        response = client.post(f"{BASE}/compliance-alerts/{TEST_RECORD_UUID}/resolve")

        assert response.json()["is_resolved"] is True
        services.compliance_alert_service.resolve_alert.assert_awaited_once_with(
            TEST_ORG_ID, TEST_RECORD_UUID, TEST_USER_ID
        )
