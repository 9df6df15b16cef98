"""API tests for the Stripe billing endpoints."""

from unittest.mock import AsyncMock, MagicMock

from fastapi.testclient import TestClient

from complyflow.exception.api_exceptions import (
    InvalidPlanTierError,
    InvalidTokenError,
    WebhookVerificationError,
)
from tests.conftest import TEST_ORG_UUID, TEST_USER_ID


class TestCheckoutSession:
    """Tests for POST /functions/v1/create-checkout-session."""

    def test_returns_checkout_url(self, client: TestClient, services: MagicMock) -> None:
        response = client.post(
            "/functions/v1/create-checkout-session",
            json={
                "tierId": "tier_pro",
                "organizationId": TEST_ORG_UUID,
                "userEmail": "manager@sunrise.example",
            },
            headers={"Origin": "https://app.complyflow.uk"},
        )

        assert response.status_code == 200
        assert response.json() == {"url": "https://checkout.stripe.com/c/pay/cs_test"}
        services.billing_service.create_checkout_session.assert_awaited_once_with(
            tier_id="tier_pro",
            organization_id=TEST_ORG_UUID,
            user_email="manager@sunrise.example",
            origin="https://app.complyflow.uk",
        )

    def test_unknown_tier_is_400(self, client: TestClient, services: MagicMock) -> None:
        services.billing_service.create_checkout_session = AsyncMock(
            side_effect=InvalidPlanTierError("tier_gold")
        )

        response = client.post(
            "/functions/v1/create-checkout-session", json={"tierId": "tier_gold"}
        )

        assert response.status_code == 400
        assert response.json()["error"] == "Invalid plan tier: tier_gold"


class TestPortalSession:
    """Tests for POST /functions/v1/create-portal-session."""

    def test_missing_authorization_is_400(self, client: TestClient) -> None:
        response = client.post("/functions/v1/create-portal-session")

        assert response.status_code == 400
        assert response.json()["error"] == "No authorization header"

    def test_invalid_token_is_400(self, client: TestClient, services: MagicMock) -> None:
        services.jwt_auth.authenticate = MagicMock(side_effect=InvalidTokenError())

        response = client.post(
            "/functions/v1/create-portal-session",
            headers={"Authorization": "Bearer expired"},
        )

        assert response.status_code == 400
        assert response.json()["code"] == "INVALID_USER"

    def test_opens_portal_for_signed_in_user(
        self, client: TestClient, services: MagicMock
    ) -> None:
        services.jwt_auth.authenticate = MagicMock(
            return_value=MagicMock(user_id=TEST_USER_ID)
        )

        response = client.post(
            "/functions/v1/create-portal-session",
            headers={"Authorization": "Bearer token"},
        )

        assert response.json() == {"url": "https://billing.stripe.com/p/session/test"}
        services.billing_service.create_portal_session.assert_awaited_once_with(
            TEST_USER_ID, origin=None
        )


class TestStripeWebhook:
    """Tests for POST /functions/v1/stripe-webhook."""

    def test_acknowledges_verified_event(
        self, client: TestClient, services: MagicMock
    ) -> None:
        response = client.post(
            "/functions/v1/stripe-webhook",
            content=b'{"type": "checkout.session.completed"}',
            headers={"stripe-signature": "t=1,v1=abc"},
        )

        assert response.json() == {"received": True}
        services.billing_service.handle_webhook.assert_awaited_once_with(
            b'{"type": "checkout.session.completed"}', "t=1,v1=abc"
        )

    def test_bad_signature_is_400(self, client: TestClient, services: MagicMock) -> None:
        services.billing_service.handle_webhook = AsyncMock(
            side_effect=WebhookVerificationError("Webhook Error: bad signature")
        )

        response = client.post("/functions/v1/stripe-webhook", content=b"{}")

        assert response.status_code == 400
        assert response.json()["error"] == "Webhook Error: bad signature"
