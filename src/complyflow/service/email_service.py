"""Email delivery service.

Three sending paths share one Resend client: raw notification emails,
templated transactional emails and the onboarding sequence.
"""

import logging
from typing import Any, Dict, List, Optional, Union

import httpx

from complyflow.constants import (
    NOTIFICATIONS_SENDER,
    ONBOARDING_SENDER,
    TRANSACTIONAL_SENDER,
)
from complyflow.exception.api_exceptions import (
    EmailDeliveryError,
    InvalidInputError,
    MissingCredentialError,
    MissingRequiredFieldError,
)
from complyflow.infrastructure.email import ResendClient
from complyflow.service.email_templates import (
    ONBOARDING_SUBJECTS,
    TRANSACTIONAL_SUBJECTS,
    render_onboarding,
    render_transactional,
)

logger = logging.getLogger(__name__)


class EmailService:
    """Sends ComplyFlow emails through Resend.

    Attributes:
        resend: Resend API client
        app_base_url: Web app URL used in template links
    """

    def __init__(self, resend: ResendClient, app_base_url: str):
        self.resend = resend
        self.app_base_url = app_base_url

    async def send_raw(
        self,
        to: Union[str, List[str], None],
        subject: Optional[str],
        html: Optional[str] = None,
        text: Optional[str] = None,
    ) -> Optional[str]:
        """Send a caller-composed notification email.

        Either body is used for the other when only one is given.

        Returns:
            Resend message ID

        Raises:
            MissingRequiredFieldError: If recipient, subject or both bodies are missing
            EmailDeliveryError: With Resend's message if sending fails
        """
        if not to or not subject or (not html and not text):
            raise MissingRequiredFieldError(
                "Missing required fields: to, subject, html or text"
            )

        logger.info(f"[EmailService] Sending email to: {to} - Subject: {subject}")
        result = await self.resend.send(
            sender=NOTIFICATIONS_SENDER,
            to=to,
            subject=subject,
            html=html or text,
            text=text or html,
        )
        return result.get("id")

    async def send_transactional(
        self,
        email_type: Optional[str],
        to: Optional[str],
        data: Optional[Dict[str, Any]] = None,
    ) -> Optional[str]:
        """Render and send one templated email.

        Returns:
            Resend message ID

        Raises:
            MissingCredentialError: If Resend is not configured
            MissingRequiredFieldError: If type or recipient is missing
            InvalidInputError: If the email type is unknown
            EmailDeliveryError: If Resend rejects the message
        """
        if not self.resend.is_configured:
            raise MissingCredentialError(
                "resend_api_key", message="RESEND_API_KEY is not configured"
            )
        if not email_type or not to:
            raise MissingRequiredFieldError("Missing required fields: type, to")
        if email_type not in TRANSACTIONAL_SUBJECTS:
            raise InvalidInputError(
                f"Unknown email type: {email_type}",
                field="type",
                code="UNKNOWN_EMAIL_TYPE",
            )

        subject, html = render_transactional(email_type, data or {}, self.app_base_url)
        try:
            result = await self.resend.send(
                sender=TRANSACTIONAL_SENDER, to=[to], subject=subject, html=html
            )
        except EmailDeliveryError as e:
            raise EmailDeliveryError(f"Resend error: {e.message}") from e

        logger.info(f"Sent {email_type} email to {to}")
        return result.get("id")

    async def send_onboarding(
        self, to: str, email_type: str, full_name: Optional[str]
    ) -> bool:
        """Send one onboarding sequence email.

        Delivery problems are logged and reported as False, never raised.

        Raises:
            InvalidInputError: If the email type is not part of the sequence
        """
        if email_type not in ONBOARDING_SUBJECTS:
            raise InvalidInputError(
                "Invalid email type", field="emailType", code="INVALID_EMAIL_TYPE"
            )

        if not self.resend.is_configured:
            logger.info("[Onboarding] Resend API key not configured, skipping email")
            return False

        first_name = (full_name or "").split(" ")[0] or "there"
        subject, html = render_onboarding(email_type, first_name, self.app_base_url)
        try:
            await self.resend.send(
                sender=ONBOARDING_SENDER, to=[to], subject=subject, html=html
            )
        except (EmailDeliveryError, httpx.HTTPError) as e:
            logger.error(f"[Onboarding] Failed to send email: {e}")
            return False
        return True
