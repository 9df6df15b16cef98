"""Email endpoints: raw notifications, templated emails and onboarding."""

import logging
from typing import Any, Dict, List, Optional, Union
from uuid import UUID

from fastapi import APIRouter, Request
from pydantic import BaseModel, Field

from complyflow.service.email_service import EmailService
from complyflow.service.onboarding_service import OnboardingService

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/functions/v1", tags=["email"])


class RawEmailRequest(BaseModel):
    """Caller-composed email.

    Attributes:
        to: Recipient address or addresses
        subject: Subject line
        html: HTML body
        text: Plain-text body
    """

    to: Union[str, List[str], None] = Field(None, description="Recipient(s)")
    subject: Optional[str] = Field(None, description="Subject line")
    html: Optional[str] = Field(None, description="HTML body")
    text: Optional[str] = Field(None, description="Plain-text body")

    class Config:
        json_schema_extra = {
            "example": {
                "to": "owner@rosewood.example",
                "subject": "Policy review due",
                "html": "<p>Your safeguarding policy is due for review.</p>",
            }
        }


class TemplatedEmailRequest(BaseModel):
    type: Optional[str] = Field(None, description="Template name")
    to: Optional[str] = Field(None, description="Recipient")
    data: Dict[str, Any] = Field(default_factory=dict, description="Template data")

    class Config:
        json_schema_extra = {
            "example": {
                "type": "trial_expiring",
                "to": "manager@rosewood.example",
                "data": {"daysLeft": 3, "expiryDate": "21/10/2026"},
            }
        }


class OnboardingEmailRequest(BaseModel):
    user_id: Optional[UUID] = Field(None, alias="userId", description="Auth user ID")
    email: Optional[str] = Field(None, description="Recipient")
    full_name: Optional[str] = Field(None, alias="fullName", description="Recipient name")
    email_type: Optional[str] = Field(
        None, alias="emailType", description="welcome, day_3, day_7 or trial_ending"
    )

    class Config:
        populate_by_name = True
        json_schema_extra = {
            "example": {
                "userId": "7d1c8e2a-5b3f-4c6d-8e9f-0a1b2c3d4e5f",
                "email": "sam@rosewood.example",
                "fullName": "Sam Patel",
                "emailType": "day_3",
            }
        }


@router.post(
    "/email-service",
    summary="Send Notification Email",
    description="Send a caller-composed email from the notifications sender.",
    responses={
        400: {"description": "Missing recipient, subject or body"},
        500: {"description": "Email provider error"},
    },
)
async def email_service(raw_request: RawEmailRequest, request: Request) -> Dict[str, Any]:
    """Send a raw email."""
    service: EmailService = request.app.state.email_service
    message_id = await service.send_raw(
        raw_request.to, raw_request.subject, html=raw_request.html, text=raw_request.text
    )
    return {"status": "success", "id": message_id}


@router.post(
    "/send-email",
    summary="Send Templated Email",
    description="Render one of the transactional templates and send it.",
    responses={
        400: {"description": "Missing fields or unknown email type"},
        500: {"description": "Email provider or configuration error"},
    },
)
async def send_email(email_request: TemplatedEmailRequest, request: Request) -> Dict[str, Any]:
    """Send a transactional email."""
    service: EmailService = request.app.state.email_service
    message_id = await service.send_transactional(
        email_request.type, email_request.to, email_request.data
    )
    return {"success": True, "messageId": message_id}


@router.post(
    "/onboarding-email",
    summary="Send Onboarding Email",
    description="Send one step of the onboarding sequence and record it.",
    responses={
        400: {"description": "Missing fields or invalid email type"},
        500: {"description": "Internal server error"},
    },
)
async def onboarding_email(
    onboarding_request: OnboardingEmailRequest, request: Request
) -> Dict[str, Any]:
    """Send an onboarding email."""
    service: OnboardingService = request.app.state.onboarding_service
    success = await service.send(
        str(onboarding_request.user_id) if onboarding_request.user_id else None,
        onboarding_request.email,
        onboarding_request.full_name,
        onboarding_request.email_type,
    )
    return {"success": success}
