"""Stripe billing endpoints: checkout, customer portal and webhook."""

import logging
from typing import Any, Dict, Optional
from uuid import UUID

from fastapi import APIRouter, Request
from pydantic import BaseModel, Field

from complyflow.exception.api_exceptions import BillingError, InvalidTokenError
from complyflow.middleware.authentication_middleware import JWTAuth, extract_bearer
from complyflow.service.billing_service import BillingService

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/functions/v1", tags=["billing"])


class CheckoutRequest(BaseModel):
    """Checkout session request.

    Attributes:
        tier_id: Plan tier (tier_pro or tier_enterprise)
        organization_id: Organization being upgraded
        organization_name: Organization display name
        user_email: Pre-filled checkout email
    """

    tier_id: Optional[str] = Field(None, alias="tierId", description="Plan tier ID")
    organization_id: Optional[UUID] = Field(
        None, alias="organizationId", description="Organization ID"
    )
    organization_name: Optional[str] = Field(
        None, alias="organizationName", description="Organization name"
    )
    user_email: Optional[str] = Field(None, alias="userEmail", description="Customer email")

    class Config:
        populate_by_name = True
        json_schema_extra = {
            "example": {
                "tierId": "tier_pro",
                "organizationId": "550e8400-e29b-41d4-a716-446655440000",
                "organizationName": "Rosewood Care Home",
                "userEmail": "manager@rosewood.example",
            }
        }


class SessionUrlResponse(BaseModel):
    url: Optional[str] = Field(..., description="Hosted Stripe page URL")


@router.post(
    "/create-checkout-session",
    response_model=SessionUrlResponse,
    summary="Create Checkout Session",
    description="Start a Stripe subscription checkout for a plan tier.",
    responses={400: {"description": "Invalid plan tier or Stripe error"}},
)
async def create_checkout_session(
    checkout_request: CheckoutRequest, request: Request
) -> SessionUrlResponse:
    """Create a Stripe Checkout Session and return its URL."""
    billing_service: BillingService = request.app.state.billing_service
    url = await billing_service.create_checkout_session(
        tier_id=checkout_request.tier_id,
        organization_id=(
            str(checkout_request.organization_id)
            if checkout_request.organization_id
            else None
        ),
        user_email=checkout_request.user_email,
        origin=request.headers.get("origin"),
    )
    return SessionUrlResponse(url=url)


@router.post(
    "/create-portal-session",
    response_model=SessionUrlResponse,
    summary="Create Billing Portal Session",
    description="Open the Stripe customer portal for the caller's organization.",
    responses={400: {"description": "Missing auth, unknown organization or no billing"}},
)
async def create_portal_session(request: Request) -> SessionUrlResponse:
    """Create a Stripe billing portal session for the signed-in user."""
    token = extract_bearer(request)
    if not token:
        raise BillingError("No authorization header", code="NO_AUTHORIZATION")

    jwt_auth: JWTAuth = request.app.state.jwt_auth
    try:
        user = jwt_auth.authenticate(token)
    except InvalidTokenError as e:
        raise BillingError("Invalid user", code="INVALID_USER") from e

    billing_service: BillingService = request.app.state.billing_service
    url = await billing_service.create_portal_session(
        user.user_id, origin=request.headers.get("origin")
    )
    return SessionUrlResponse(url=url)


@router.post(
    "/stripe-webhook",
    summary="Stripe Webhook",
    description="Verify a Stripe event signature and apply completed checkouts.",
    responses={
        400: {"description": "Missing or invalid signature"},
        500: {"description": "Database error"},
    },
)
async def stripe_webhook(request: Request) -> Dict[str, Any]:
    """Receive a Stripe webhook event."""
    payload = await request.body()
    billing_service: BillingService = request.app.state.billing_service
    await billing_service.handle_webhook(payload, request.headers.get("stripe-signature"))
    return {"received": True}
