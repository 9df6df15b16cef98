"""API tests for the email endpoints."""

from unittest.mock import AsyncMock, MagicMock

from fastapi.testclient import TestClient

from complyflow.exception.api_exceptions import EmailDeliveryError, InvalidInputError
from tests.conftest import TEST_RECORD_UUID


class TestEmailService:
    """Tests for POST /functions/v1/email-service."""

    def test_sends_raw_email(self, client: TestClient, services: MagicMock) -> None:
        response = client.post(
            "/functions/v1/email-service",
            json={"to": ["a@example.com", "b@example.com"], "subject": "Hi", "html": "<p>x</p>"},
        )

        assert response.json() == {"status": "success", "id": "msg_raw"}
        services.email_service.send_raw.assert_awaited_once_with(
            ["a@example.com", "b@example.com"], "Hi", html="<p>x</p>", text=None
        )

    def test_provider_rejection_is_500(self, client: TestClient, services: MagicMock) -> None:
        services.email_service.send_raw = AsyncMock(
            side_effect=EmailDeliveryError("domain not verified")
        )

        response = client.post(
            "/functions/v1/email-service", json={"to": "a@example.com", "subject": "Hi", "text": "x"}
        )

        assert response.status_code == 500
        assert response.json()["error"] == "domain not verified"


class TestSendEmail:
    """Tests for POST /functions/v1/send-email."""

    def test_sends_templated_email(self, client: TestClient, services: MagicMock) -> None:
        response = client.post(
            "/functions/v1/send-email",
            json={"type": "welcome", "to": "a@example.com", "data": {"userName": "Jane"}},
        )

        assert response.json() == {"success": True, "messageId": "msg_123"}
        services.email_service.send_transactional.assert_awaited_once_with(
            "welcome", "a@example.com", {"userName": "Jane"}
        )

    def test_unknown_type_is_400(self, client: TestClient, services: MagicMock) -> None:
        services.email_service.send_transactional = AsyncMock(
            side_effect=InvalidInputError("Unknown email type: newsletter", field="type")
        )

        response = client.post(
            "/functions/v1/send-email", json={"type": "newsletter", "to": "a@example.com"}
        )

        assert response.status_code == 400
        assert response.json()["field"] == "type"


class TestOnboardingEmail:
    def test_reports_send_result(self, client: TestClient, services: MagicMock) -> None:
        response = client.post(
            "/functions/v1/onboarding-email",
            json={
                "userId": TEST_RECORD_UUID,
                "email": "sam@example.com",
                "fullName": "Sam Patel",
                "emailType": "day_3",
            },
        )

        assert response.json() == {"success": True}
        services.onboarding_service.send.assert_awaited_once_with(
            TEST_RECORD_UUID, "sam@example.com", "Sam Patel", "day_3"
        )
