"""Stripe payments client.

Wraps the stripe SDK calls used for subscription checkout, the customer
billing portal and webhook verification. SDK calls are blocking, so they
run in a worker thread.
"""

import asyncio
import logging
from typing import Any, Dict, Optional

import stripe

from complyflow.exception.api_exceptions import (
    MissingCredentialError,
    WebhookVerificationError,
)

logger = logging.getLogger(__name__)


class StripeClient:
    """Stripe SDK wrapper.

    Attributes:
        secret_key: Stripe secret API key
        webhook_secret: Signing secret for webhook verification
    """

    def __init__(self, secret_key: Optional[str], webhook_secret: Optional[str] = None):
        self.secret_key = secret_key
        self.webhook_secret = webhook_secret

    def _require_key(self) -> str:
        if not self.secret_key:
            raise MissingCredentialError(
                "stripe_secret_key", message="STRIPE_SECRET_KEY is not configured"
            )
        return self.secret_key

    async def create_checkout_session(
        self,
        price_id: str,
        customer_email: Optional[str],
        success_url: str,
        cancel_url: str,
        metadata: Dict[str, str],
    ) -> Any:
        """Create a subscription-mode Checkout Session.

        Returns:
            The Stripe Session object (``url`` holds the hosted page)
        """
        api_key = self._require_key()
        return await asyncio.to_thread(
            stripe.checkout.Session.create,
            api_key=api_key,
            payment_method_types=["card"],
            line_items=[{"price": price_id, "quantity": 1}],
            mode="subscription",
            success_url=success_url,
            cancel_url=cancel_url,
            customer_email=customer_email,
            metadata=metadata,
        )

    async def create_portal_session(self, customer_id: str, return_url: str) -> Any:
        """Create a customer billing portal session."""
        api_key = self._require_key()
        return await asyncio.to_thread(
            stripe.billing_portal.Session.create,
            api_key=api_key,
            customer=customer_id,
            return_url=return_url,
        )

    def construct_event(self, payload: bytes, signature: str) -> Any:
        """Verify a webhook signature and parse the event.

        Raises:
            MissingCredentialError: If no webhook secret is configured
            WebhookVerificationError: If the payload or signature is invalid
        """
        if not self.webhook_secret:
            raise MissingCredentialError(
                "stripe_webhook_secret",
                message="STRIPE_WEBHOOK_SECRET is not configured",
            )

        try:
            return stripe.Webhook.construct_event(
                payload, signature, self.webhook_secret
            )
        except (ValueError, stripe.SignatureVerificationError) as e:
            logger.warning(f"Webhook signature verification failed: {e}")
            raise WebhookVerificationError(f"Webhook Error: {e}")
