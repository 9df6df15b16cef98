from __future__ import annotations

from datetime import date
from typing import TYPE_CHECKING, Any, Dict, List, Optional
from uuid import UUID

from sqlalchemy import delete, func, select

if TYPE_CHECKING:
    from complyflow.infrastructure.persistence.postgresql.client import (
        PostgreSQLClient,
    )

from complyflow.infrastructure.persistence.postgresql.models import (
    SponsoredWorker,
    utc_now,
)

UPDATABLE_FIELDS = frozenset(
    {
        "employee_id",
        "full_name",
        "email",
        "visa_type",
        "visa_expiry",
        "cos_number",
        "cos_assigned_date",
        "start_date",
        "salary",
        "status",
        "last_rtw_check",
        "ni_number",
        "passport_number",
        "job_title",
        "work_location",
        "notes",
    }
)


def _uuid(value: str | UUID) -> UUID:
    return UUID(value) if isinstance(value, str) else value


class SponsoredWorkerRepository:
    """Repository for the sponsored worker register.

    Every read and write is scoped to an organization so one organization
    never reads another organization's workers.

    Attributes:
        client: PostgreSQL client for database access
    """

    def __init__(self, client: PostgreSQLClient):
        self.client = client

    async def list_by_organization(self, org_id: str | UUID) -> List[SponsoredWorker]:
        """List an organization's workers ordered by name."""
        async with self.client.session() as session:
            result = await session.execute(
                select(SponsoredWorker)
                .where(SponsoredWorker.organization_id == _uuid(org_id))
                .order_by(SponsoredWorker.full_name)
            )
            return list(result.scalars().all())

    async def get_by_id(
        self, org_id: str | UUID, worker_id: str | UUID
    ) -> Optional[SponsoredWorker]:
        async with self.client.session() as session:
            result = await session.execute(
                select(SponsoredWorker)
                .where(SponsoredWorker.id == _uuid(worker_id))
                .where(SponsoredWorker.organization_id == _uuid(org_id))
            )
            return result.scalar_one_or_none()

    async def create(self, org_id: str | UUID, fields: Dict[str, Any]) -> SponsoredWorker:
        """Create a worker.

        Args:
            org_id: Owning organization
            fields: Column values; unknown keys are ignored

        Returns:
            Created SponsoredWorker instance
        """
        values = {k: v for k, v in fields.items() if k in UPDATABLE_FIELDS}
        async with self.client.session() as session:
            worker = SponsoredWorker(organization_id=_uuid(org_id), **values)
            session.add(worker)
            await session.flush()
            return worker

    async def update(
        self, org_id: str | UUID, worker_id: str | UUID, fields: Dict[str, Any]
    ) -> Optional[SponsoredWorker]:
        """Apply a partial update.

        Returns:
            Updated SponsoredWorker instance or None if not found
        """
        async with self.client.session() as session:
            result = await session.execute(
                select(SponsoredWorker)
                .where(SponsoredWorker.id == _uuid(worker_id))
                .where(SponsoredWorker.organization_id == _uuid(org_id))
            )
            worker = result.scalar_one_or_none()

            if worker:
                for key, value in fields.items():
                    if key in UPDATABLE_FIELDS:
                        setattr(worker, key, value)
                worker.updated_at = utc_now()
                await session.flush()
            return worker

    async def delete(self, org_id: str | UUID, worker_id: str | UUID) -> bool:
        """Delete a worker.

        Returns:
            True if deleted, False if not found
        """
        async with self.client.session() as session:
            result = await session.execute(
                delete(SponsoredWorker)
                .where(SponsoredWorker.id == _uuid(worker_id))
                .where(SponsoredWorker.organization_id == _uuid(org_id))
            )
            return result.rowcount > 0

    async def list_expiring_on(self, expiry: date) -> List[SponsoredWorker]:
        """Workers across all organizations whose visa expires on ``expiry``."""
        async with self.client.session() as session:
            result = await session.execute(
                select(SponsoredWorker).where(SponsoredWorker.visa_expiry == expiry)
            )
            return list(result.scalars().all())

    async def list_expiring_by(
        self, org_id: str | UUID, cutoff: date
    ) -> List[SponsoredWorker]:
        """An organization's workers whose visa expires on or before ``cutoff``."""
        async with self.client.session() as session:
            result = await session.execute(
                select(SponsoredWorker)
                .where(SponsoredWorker.organization_id == _uuid(org_id))
                .where(SponsoredWorker.visa_expiry <= cutoff)
            )
            return list(result.scalars().all())

    async def count_expiring_by(self, org_id: str | UUID, cutoff: date) -> int:
        async with self.client.session() as session:
            result = await session.execute(
                select(func.count(SponsoredWorker.id))
                .where(SponsoredWorker.organization_id == _uuid(org_id))
                .where(SponsoredWorker.visa_expiry <= cutoff)
            )
            return int(result.scalar() or 0)
