"""Resend transactional email client.

Sends messages through the Resend HTTP API with httpx.
"""

import logging
from typing import List, Optional, Union

import httpx

from complyflow.exception.api_exceptions import (
    EmailDeliveryError,
    MissingCredentialError,
)

logger = logging.getLogger(__name__)


class ResendClient:
    """Async client for the Resend send endpoint.

    Attributes:
        api_key: Resend API key (None disables sending)
        api_url: Send endpoint URL
        timeout: Request timeout in seconds
    """

    def __init__(
        self,
        api_key: Optional[str],
        api_url: str = "https://api.resend.com/emails",
        timeout: float = 30.0,
    ):
        self.api_key = api_key
        self.api_url = api_url
        self.timeout = timeout

    @property
    def is_configured(self) -> bool:
        return bool(self.api_key)

    async def send(
        self,
        sender: str,
        to: Union[str, List[str]],
        subject: str,
        html: Optional[str] = None,
        text: Optional[str] = None,
    ) -> dict:
        """Send one email.

        Args:
            sender: From header, e.g. ``ComplyFlow <noreply@complyflow.uk>``
            to: Recipient address or list of addresses
            subject: Subject line
            html: HTML body
            text: Plain-text body

        Returns:
            Resend response payload containing the message ``id``

        Raises:
            MissingCredentialError: If no API key is configured
            EmailDeliveryError: If Resend rejects the message
        """
        if not self.api_key:
            raise MissingCredentialError(
                "resend_api_key", message="RESEND_API_KEY is not configured"
            )

        message = {
            "from": sender,
            "to": to if isinstance(to, list) else [to],
            "subject": subject,
        }
        if html is not None:
            message["html"] = html
        if text is not None:
            message["text"] = text

        async with httpx.AsyncClient(timeout=self.timeout) as client:
            response = await client.post(
                self.api_url,
                headers={
                    "Authorization": f"Bearer {self.api_key}",
                    "Content-Type": "application/json",
                },
                json=message,
            )

        try:
            data = response.json()
        except ValueError:
            data = {}

        if response.is_error:
            logger.error(f"Resend API error {response.status_code}: {data}")
            raise EmailDeliveryError(
                data.get("message") or "Failed to send email via Resend"
            )

        logger.info(f"Sent email '{subject}' to {message['to']}")
        return data
