from __future__ import annotations

from typing import TYPE_CHECKING
from uuid import UUID

from sqlalchemy import select

if TYPE_CHECKING:
    from complyflow.infrastructure.persistence.postgresql.client import (
        PostgreSQLClient,
    )

from complyflow.infrastructure.persistence.postgresql.models import (
    EmailLog,
    OnboardingEmail,
)


class EmailLogRepository:
    """Repository for lifecycle and onboarding email send logs.

    Attributes:
        client: PostgreSQL client for database access
    """

    def __init__(self, client: PostgreSQLClient):
        self.client = client

    async def has_sent(self, user_id: str | UUID, email_type: str) -> bool:
        """Whether a lifecycle email of this type was already sent to the user."""
        if isinstance(user_id, str):
            user_id = UUID(user_id)
        async with self.client.session() as session:
            result = await session.execute(
                select(EmailLog.id)
                .where(EmailLog.user_id == user_id)
                .where(EmailLog.email_type == email_type)
                .limit(1)
            )
            return result.first() is not None

    async def log_sent(self, user_id: str | UUID, email_type: str) -> EmailLog:
        if isinstance(user_id, str):
            user_id = UUID(user_id)
        async with self.client.session() as session:
            entry = EmailLog(user_id=user_id, email_type=email_type)
            session.add(entry)
            await session.flush()
            return entry

    async def record_onboarding(
        self, user_id: str | UUID, email_type: str
    ) -> OnboardingEmail:
        if isinstance(user_id, str):
            user_id = UUID(user_id)
        async with self.client.session() as session:
            entry = OnboardingEmail(user_id=user_id, email_type=email_type)
            session.add(entry)
            await session.flush()
            return entry
