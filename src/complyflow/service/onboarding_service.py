"""Onboarding email sequence for new sign-ups."""

import logging
from typing import Optional

from complyflow.exception.api_exceptions import (
    ComplyFlowException,
    MissingRequiredFieldError,
)
from complyflow.repository.email_log_repository import EmailLogRepository
from complyflow.service.email_service import EmailService

logger = logging.getLogger(__name__)


class OnboardingService:
    """Sends one step of the onboarding sequence and records it.

    Attributes:
        email_service: Email sender
        email_log_repo: Sent email log
    """

    def __init__(self, email_service: EmailService, email_log_repo: EmailLogRepository):
        self.email_service = email_service
        self.email_log_repo = email_log_repo

    async def send(
        self,
        user_id: Optional[str],
        email: Optional[str],
        full_name: Optional[str],
        email_type: Optional[str],
    ) -> bool:
        """Send an onboarding email.

        Returns:
            Whether the email was delivered. The attempt is recorded either way.

        Raises:
            MissingRequiredFieldError: If user, address or type is missing
            InvalidInputError: If the type is not part of the sequence
            ComplyFlowException: ``Internal server error`` on any other failure
        """
        if not user_id or not email or not email_type:
            raise MissingRequiredFieldError("Missing required fields")

        try:
            success = await self.email_service.send_onboarding(
                email, email_type, full_name
            )
            await self.email_log_repo.record_onboarding(user_id, email_type)
        except ComplyFlowException:
            raise
        except Exception as e:
            logger.error(f"[Onboarding] Error: {e}", exc_info=True)
            raise ComplyFlowException("Internal server error") from e

        return success
