from __future__ import annotations

from datetime import datetime
from typing import TYPE_CHECKING, List, Optional, Sequence
from uuid import UUID

from sqlalchemy import select

if TYPE_CHECKING:
    from complyflow.infrastructure.persistence.postgresql.client import (
        PostgreSQLClient,
    )

from complyflow.infrastructure.persistence.postgresql.models import Profile


class ProfileRepository:
    """Repository for user profile lookups.

    Attributes:
        client: PostgreSQL client for database access
    """

    def __init__(self, client: PostgreSQLClient):
        self.client = client

    async def get_by_id(self, user_id: str | UUID) -> Optional[Profile]:
        """Retrieve a profile by auth user ID."""
        if isinstance(user_id, str):
            user_id = UUID(user_id)
        async with self.client.session() as session:
            result = await session.execute(select(Profile).where(Profile.id == user_id))
            return result.scalar_one_or_none()

    async def list_by_organization(
        self, org_id: str | UUID, roles: Optional[Sequence[str]] = None
    ) -> List[Profile]:
        """List an organization's profiles, optionally restricted to roles.

        Args:
            org_id: Organization identifier (UUID or string)
            roles: Roles to include (None = every role)
        """
        if isinstance(org_id, str):
            org_id = UUID(org_id)
        async with self.client.session() as session:
            query = select(Profile).where(Profile.organization_id == org_id)
            if roles:
                query = query.where(Profile.role.in_(list(roles)))
            result = await session.execute(query)
            return list(result.scalars().all())

    async def list_created_between(
        self, start: datetime, end: datetime
    ) -> List[Profile]:
        """Profiles created in the half-open window ``[start, end)``."""
        async with self.client.session() as session:
            result = await session.execute(
                select(Profile)
                .where(Profile.created_at >= start)
                .where(Profile.created_at < end)
            )
            return list(result.scalars().all())
