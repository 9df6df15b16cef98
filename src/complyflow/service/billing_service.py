"""Subscription billing with Stripe.

Creates hosted checkout and billing portal sessions, and applies completed
checkouts delivered by the Stripe webhook.
"""

import logging
import time
from typing import Any, Dict, Optional

from complyflow.constants import PLAN_AMOUNTS, PLAN_NAMES, TIER_PREFIX
from complyflow.exception.api_exceptions import (
    BillingError,
    ComplyFlowException,
    DatabaseError,
    InvalidPlanTierError,
    WebhookVerificationError,
)
from complyflow.infrastructure.payments import StripeClient
from complyflow.repository.organization_repository import OrganizationRepository
from complyflow.repository.profile_repository import ProfileRepository
from complyflow.service.email_service import EmailService

logger = logging.getLogger(__name__)

CHECKOUT_COMPLETED = "checkout.session.completed"
SUBSCRIPTION_UPDATED = "customer.subscription.updated"
SUBSCRIPTION_DELETED = "customer.subscription.deleted"


def _field(obj: Any, key: str) -> Any:
    """Read a key from a Stripe object or plain dict."""
    if obj is None:
        return None
    if isinstance(obj, dict):
        return obj.get(key)
    try:
        return obj[key]
    except (KeyError, TypeError):
        return getattr(obj, key, None)


class BillingService:
    """Stripe checkout, portal and webhook handling.

    Attributes:
        stripe: Stripe SDK wrapper
        org_repo: Organization repository
        profile_repo: Profile repository
        email_service: Sends payment confirmations
        price_ids: Plan tier id to Stripe price id
        app_base_url: Fallback origin for redirect URLs
    """

    def __init__(
        self,
        stripe: StripeClient,
        org_repo: OrganizationRepository,
        profile_repo: ProfileRepository,
        email_service: EmailService,
        price_ids: Dict[str, str],
        app_base_url: str,
    ):
        self.stripe = stripe
        self.org_repo = org_repo
        self.profile_repo = profile_repo
        self.email_service = email_service
        self.price_ids = price_ids
        self.app_base_url = app_base_url

    async def create_checkout_session(
        self,
        tier_id: Optional[str],
        organization_id: Optional[str],
        user_email: Optional[str],
        origin: Optional[str] = None,
    ) -> str:
        """Create a subscription checkout session.

        Returns:
            Hosted checkout URL

        Raises:
            InvalidPlanTierError: If the tier has no price
            BillingError: If Stripe is not configured or rejects the request
        """
        price_id = self.price_ids.get(tier_id or "")
        if not price_id:
            raise InvalidPlanTierError(str(tier_id))

        origin = origin or self.app_base_url
        plan_tier = tier_id.replace(TIER_PREFIX, "")
        try:
            session = await self.stripe.create_checkout_session(
                price_id=price_id,
                customer_email=user_email,
                success_url=f"{origin}/dashboard?payment=success",
                cancel_url=f"{origin}/pricing?payment=cancelled",
                metadata={
                    "organization_id": organization_id or "",
                    "plan_tier": plan_tier,
                },
            )
        except ComplyFlowException as e:
            logger.error(f"Checkout session failed: {e.message}")
            raise BillingError(e.message, code=e.code) from e
        except Exception as e:
            logger.error(f"Checkout session failed: {e}", exc_info=True)
            raise BillingError(str(e)) from e

        logger.info(f"Checkout session created for org {organization_id} ({plan_tier})")
        return _field(session, "url")

    async def create_portal_session(
        self, user_id: str, origin: Optional[str] = None
    ) -> str:
        """Create a billing portal session for the caller's organization.

        Returns:
            Hosted portal URL

        Raises:
            BillingError: If the organization or its Stripe customer is missing,
                or Stripe rejects the request
        """
        profile = await self.profile_repo.get_by_id(user_id)
        if profile is None or profile.organization_id is None:
            raise BillingError("Organization not found", code="ORGANIZATION_NOT_FOUND")

        org = await self.org_repo.get_by_id(profile.organization_id)
        if org is None:
            raise BillingError("Organization not found", code="ORGANIZATION_NOT_FOUND")
        if not org.stripe_customer_id:
            raise BillingError(
                "No active billing found. Please subscribe first.",
                code="NO_BILLING_ACCOUNT",
            )

        origin = origin or self.app_base_url
        try:
            session = await self.stripe.create_portal_session(
                customer_id=org.stripe_customer_id,
                return_url=f"{origin}/settings?tab=billing",
            )
        except ComplyFlowException as e:
            logger.error(f"Portal session failed: {e.message}")
            raise BillingError(e.message, code=e.code) from e
        except Exception as e:
            logger.error(f"Portal session failed: {e}", exc_info=True)
            raise BillingError(str(e)) from e

        return _field(session, "url")

    async def handle_webhook(self, payload: bytes, signature: Optional[str]) -> None:
        """Verify and apply one Stripe webhook event.

        Raises:
            WebhookVerificationError: If the signature is missing or invalid
            DatabaseError: If the subscription update fails
        """
        if not signature:
            raise WebhookVerificationError("Missing signature")

        event = self.stripe.construct_event(payload, signature)
        event_type = _field(event, "type")
        obj = _field(_field(event, "data"), "object")
        logger.info(f"Received event: {event_type}")

        if event_type == CHECKOUT_COMPLETED:
            await self._apply_checkout(obj)
        elif event_type == SUBSCRIPTION_UPDATED:
            logger.info(f"Subscription updated: {_field(obj, 'id')}")
        elif event_type == SUBSCRIPTION_DELETED:
            logger.info(f"Subscription cancelled: {_field(obj, 'id')}")

    async def _apply_checkout(self, session: Any) -> None:
        metadata = _field(session, "metadata") or {}
        organization_id = _field(metadata, "organization_id")
        plan_tier = _field(metadata, "plan_tier")
        if not organization_id or not plan_tier:
            return

        logger.info(f"Updating organization {organization_id} to tier {plan_tier}")
        try:
            await self.org_repo.update_subscription(
                organization_id, tier=plan_tier, status="active"
            )
        except Exception as e:
            logger.error(f"Error updating organization: {e}", exc_info=True)
            raise DatabaseError("Database error") from e

        customer_email = _field(session, "customer_email") or _field(
            _field(session, "customer_details"), "email"
        )
        if customer_email:
            await self._send_payment_confirmation(customer_email, plan_tier)

    async def _send_payment_confirmation(self, email: str, plan_tier: str) -> None:
        data = {
            "planName": PLAN_NAMES.get(plan_tier, PLAN_NAMES["pro"]),
            "amount": PLAN_AMOUNTS.get(plan_tier, PLAN_AMOUNTS["pro"]),
            "invoiceId": f"INV-{int(time.time() * 1000)}",
        }
        try:
            message_id = await self.email_service.send_transactional(
                "payment_success", email, data
            )
            logger.info(f"Payment confirmation email sent: {message_id}")
        except Exception as e:
            logger.error(f"Failed to send payment confirmation: {e}", exc_info=True)
