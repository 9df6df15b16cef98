"""Scheduled job endpoints.

A cron scheduler calls these with the service-role key as bearer token.
"""

import logging
from typing import Any, Dict

from fastapi import APIRouter, Depends, Request

from complyflow.exception.api_exceptions import MethodNotAllowedError
from complyflow.middleware.authentication_middleware import require_service_role

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/functions/v1", tags=["jobs"])

TRIAL_EXPIRY_METHODS = ("GET", "POST")


@router.post(
    "/growth-engine",
    dependencies=[Depends(require_service_role)],
    summary="Lifecycle Drip Emails",
    description="Send day-1 welcome emails and day-11 trial warnings.",
)
async def growth_engine(request: Request) -> Dict[str, Any]:
    return await request.app.state.growth_service.run()


@router.api_route(
    "/trial-expiry",
    methods=["GET", "POST", "PUT", "PATCH", "DELETE"],
    summary="Expire Trials",
    description="Downgrade organizations whose trial has ended to the free tier. Accepts GET and POST only.",
    responses={405: {"description": "Method not allowed"}},
)
async def trial_expiry(request: Request) -> Dict[str, Any]:
    """Run trial expiry.

    Raises:
        MethodNotAllowedError: For any method other than GET or POST
    """
    if request.method not in TRIAL_EXPIRY_METHODS:
        raise MethodNotAllowedError(request.method)
    await require_service_role(request)
    return await request.app.state.trial_expiry_service.expire()


@router.post(
    "/visa-expiry-checker",
    dependencies=[Depends(require_service_role)],
    summary="Visa Expiry Alerts",
    description="Email admins about visas expiring in exactly 90, 60, 30 or 14 days.",
)
async def visa_expiry_checker(request: Request) -> Dict[str, Any]:
    return await request.app.state.visa_expiry_service.check()


@router.post(
    "/weekly-digest",
    dependencies=[Depends(require_service_role)],
    summary="Weekly Compliance Digest",
    description="Send the weekly digest to every active or trial organization.",
)
async def weekly_digest(request: Request) -> Dict[str, Any]:
    return await request.app.state.weekly_digest_service.send()


@router.post(
    "/regulatory-feed",
    dependencies=[Depends(require_service_role)],
    summary="Refresh Regulatory Feed",
    description="Fetch CQC, Home Office and DHSC updates and store the relevant ones.",
)
async def regulatory_feed(request: Request) -> Dict[str, Any]:
    return await request.app.state.regulatory_feed_service.refresh()
