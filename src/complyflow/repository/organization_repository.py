from __future__ import annotations

from datetime import datetime
from typing import TYPE_CHECKING, List, Optional, Sequence
from uuid import UUID

from sqlalchemy import select, update

if TYPE_CHECKING:
    from complyflow.infrastructure.persistence.postgresql.client import (
        PostgreSQLClient,
    )

from complyflow.infrastructure.persistence.postgresql.models import Organization, utc_now


class OrganizationRepository:
    """Repository for organization and subscription operations.

    Attributes:
        client: PostgreSQL client for database access
    """

    def __init__(self, client: PostgreSQLClient):
        self.client = client

    async def get_by_id(self, org_id: str | UUID) -> Optional[Organization]:
        """Retrieve organization by ID.

        Args:
            org_id: Organization identifier (UUID or string)

        Returns:
            Organization instance or None
        """
        if isinstance(org_id, str):
            org_id = UUID(org_id)
        async with self.client.session() as session:
            result = await session.execute(
                select(Organization).where(Organization.id == org_id)
            )
            return result.scalar_one_or_none()

    async def list_by_subscription_status(
        self, statuses: Sequence[str]
    ) -> List[Organization]:
        """Organizations whose subscription status is one of ``statuses``."""
        async with self.client.session() as session:
            result = await session.execute(
                select(Organization).where(
                    Organization.subscription_status.in_(list(statuses))
                )
            )
            return list(result.scalars().all())

    async def update_subscription(
        self, org_id: str | UUID, tier: str, status: str
    ) -> Optional[Organization]:
        """Set subscription tier and status after a successful payment.

        Args:
            org_id: Organization identifier (UUID or string)
            tier: New subscription tier (pro, enterprise)
            status: New subscription status

        Returns:
            Updated Organization instance or None
        """
        if isinstance(org_id, str):
            org_id = UUID(org_id)
        async with self.client.session() as session:
            result = await session.execute(
                select(Organization).where(Organization.id == org_id)
            )
            org = result.scalar_one_or_none()

            if org:
                org.subscription_tier = tier
                org.subscription_status = status
                org.updated_at = utc_now()
                await session.flush()
            return org

    async def expire_trials_rpc(self) -> int:
        """Run the ``expire_trials()`` database function.

        Returns:
            Number of organizations downgraded
        """
        return int(await self.client.call_function("expire_trials") or 0)

    async def expire_trials(self, now: datetime) -> List[Organization]:
        """Downgrade every non-free organization whose trial ended before ``now``.

        Returns:
            The downgraded organizations
        """
        async with self.client.session() as session:
            result = await session.execute(
                update(Organization)
                .where(Organization.trial_ends_at < now)
                .where(Organization.subscription_tier != "free")
                .values(subscription_tier="free", trial_ends_at=None, updated_at=now)
                .returning(Organization)
                .execution_options(synchronize_session=False)
            )
            return list(result.scalars().all())
