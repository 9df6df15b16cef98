"""Unit tests for email rendering and EmailService.

Templates render from the packaged Jinja2 files; the Resend client is mocked.
"""

from datetime import datetime, timezone
from unittest.mock import AsyncMock, MagicMock

import httpx
import pytest

from complyflow.exception.api_exceptions import (
    EmailDeliveryError,
    InvalidInputError,
    MissingCredentialError,
    MissingRequiredFieldError,
)
from complyflow.service.email_service import EmailService
from complyflow.service.email_templates import (
    format_uk_date,
    render_critical_visa_alert,
    render_onboarding,
    render_transactional,
)

BASE_URL = "https://app.complyflow.uk"
RENDER_TIME = datetime(2026, 3, 2, 9, 0, tzinfo=timezone.utc)


@pytest.fixture
def resend() -> MagicMock:
    """Mock ResendClient that accepts every message."""
    client = MagicMock()
    client.is_configured = True
    client.send = AsyncMock(return_value={"id": "re_123"})
    return client


@pytest.fixture
def service(resend: MagicMock) -> EmailService:
    return EmailService(resend, BASE_URL)


class TestTemplates:
    """Tests for the template renderers."""

    def test_uk_date(self) -> None:
        assert format_uk_date(RENDER_TIME) == "02/03/2026"

    def test_payment_success_subject_and_body(self) -> None:
        subject, html = render_transactional(
            "payment_success",
            {"planName": "Enterprise", "amount": 299, "invoiceId": "INV-1"},
            BASE_URL,
            now=RENDER_TIME,
        )

        assert subject == "🎉 Payment Confirmed – Welcome to ComplyFlow Enterprise!"
        assert "£299/month" in html
        assert "INV-1" in html
        assert "02/03/2026" in html

    def test_weekly_digest_subject_uses_short_month(self) -> None:
        subject, _ = render_transactional("weekly_digest", {}, BASE_URL, now=RENDER_TIME)

        assert subject == "📊 Your Weekly Compliance Summary – 2 Mar"

    def test_visa_alert_subject(self) -> None:
        subject, _ = render_transactional(
            "visa_expiry_alert",
            {"workerName": "Amara Okafor", "daysRemaining": 30},
            BASE_URL,
        )

        assert subject == "⚠️ Visa Expiry Alert: Amara Okafor (30 days remaining)"

    def test_template_data_is_escaped(self) -> None:
        _, html = render_transactional(
            "team_invite", {"organizationName": "<script>x</script>"}, BASE_URL
        )

        assert "<script>x</script>" not in html

    def test_onboarding_greets_by_name(self) -> None:
        subject, html = render_onboarding("welcome", "Jane", BASE_URL)

        assert subject == "🎉 Welcome to ComplyFlow - Let's get you CQC-ready!"
        assert "Welcome to ComplyFlow, Jane!" in html

    def test_critical_visa_alert(self) -> None:
        subject, html = render_critical_visa_alert("Amara Okafor", "01/04/2026", BASE_URL)

        assert subject == "🚨 CRITICAL: Compliance Alert - Amara Okafor"
        assert "01/04/2026" in html
        assert f"{BASE_URL}/dashboard" in html


class TestSendRaw:
    """Tests for EmailService.send_raw."""

    async def test_returns_message_id(self, service: EmailService, resend: MagicMock) -> None:
        message_id = await service.send_raw("a@b.com", "Hello", html="<p>Hi</p>")

        assert message_id == "re_123"
        kwargs = resend.send.call_args.kwargs
        assert kwargs["sender"] == "ComplyFlow <notifications@novumsolvo.co.uk>"
        assert kwargs["text"] == "<p>Hi</p>"

    async def test_missing_body_raises(self, service: EmailService) -> None:
        with pytest.raises(MissingRequiredFieldError):
            await service.send_raw("a@b.com", "Hello")


class TestSendTransactional:
    """Tests for EmailService.send_transactional."""

    async def test_sends_from_noreply(self, service: EmailService, resend: MagicMock) -> None:
        message_id = await service.send_transactional("welcome", "a@b.com", {"name": "Jo"})

        assert message_id == "re_123"
        kwargs = resend.send.call_args.kwargs
        assert kwargs["sender"] == "ComplyFlow <noreply@complyflow.uk>"
        assert kwargs["to"] == ["a@b.com"]

    async def test_unknown_type_raises(self, service: EmailService) -> None:
        with pytest.raises(InvalidInputError, match="Unknown email type: newsletter"):
            await service.send_transactional("newsletter", "a@b.com", {})

    async def test_unconfigured_resend_raises(
        self, service: EmailService, resend: MagicMock
    ) -> None:
        resend.is_configured = False

        with pytest.raises(MissingCredentialError):
            await service.send_transactional("welcome", "a@b.com", {})

    async def test_resend_error_is_prefixed(
        self, service: EmailService, resend: MagicMock
    ) -> None:
        resend.send.side_effect = EmailDeliveryError("Invalid `to` field")

        with pytest.raises(EmailDeliveryError, match="Resend error: Invalid `to` field"):
            await service.send_transactional("welcome", "a@b.com", {})


class TestSendOnboarding:
    """Tests for EmailService.send_onboarding."""

    async def test_invalid_type_raises(self, service: EmailService) -> None:
        with pytest.raises(InvalidInputError, match="Invalid email type"):
            await service.send_onboarding("a@b.com", "day_30", "Jane Smith")

    async def test_unconfigured_resend_returns_false(
        self, service: EmailService, resend: MagicMock
    ) -> None:
        resend.is_configured = False

        assert await service.send_onboarding("a@b.com", "day_3", "Jane Smith") is False
        resend.send.assert_not_awaited()

    async def test_delivery_failure_returns_false(
        self, service: EmailService, resend: MagicMock
    ) -> None:
        resend.send.side_effect = httpx.ConnectError("refused")

        assert await service.send_onboarding("a@b.com", "day_7", None) is False

    async def test_sends_from_hello(self, service: EmailService, resend: MagicMock) -> None:
        assert await service.send_onboarding("a@b.com", "trial_ending", "Jane") is True
        assert resend.send.call_args.kwargs["sender"] == "ComplyFlow <hello@complyflow.uk>"
