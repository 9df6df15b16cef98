from __future__ import annotations

from datetime import date
from typing import TYPE_CHECKING, List, Optional
from uuid import UUID

from sqlalchemy import func, select

if TYPE_CHECKING:
    from complyflow.infrastructure.persistence.postgresql.client import (
        PostgreSQLClient,
    )

from complyflow.infrastructure.persistence.postgresql.models import (
    SponsorReportingLog,
    utc_now,
)


class SponsorReportingRepository:
    """Repository for the Home Office sponsor reporting log.

    Attributes:
        client: PostgreSQL client for database access
    """

    def __init__(self, client: PostgreSQLClient):
        self.client = client

    async def list_by_organization(
        self, org_id: str | UUID
    ) -> List[SponsorReportingLog]:
        """List reporting events ordered by deadline."""
        if isinstance(org_id, str):
            org_id = UUID(org_id)
        async with self.client.session() as session:
            result = await session.execute(
                select(SponsorReportingLog)
                .where(SponsorReportingLog.organization_id == org_id)
                .order_by(SponsorReportingLog.deadline_date)
            )
            return list(result.scalars().all())

    async def create(
        self,
        org_id: str | UUID,
        event_type: str,
        deadline_date: date,
        worker_id: Optional[str | UUID] = None,
        description: Optional[str] = None,
    ) -> SponsorReportingLog:
        """Log a reportable event with status ``pending``."""
        if isinstance(org_id, str):
            org_id = UUID(org_id)
        if isinstance(worker_id, str):
            worker_id = UUID(worker_id)
        async with self.client.session() as session:
            event = SponsorReportingLog(
                organization_id=org_id,
                worker_id=worker_id,
                event_type=event_type,
                description=description,
                deadline_date=deadline_date,
                status="pending",
            )
            session.add(event)
            await session.flush()
            return event

    async def mark_reported(
        self, org_id: str | UUID, event_id: str | UUID, user_id: str | UUID
    ) -> Optional[SponsorReportingLog]:
        """Mark an event reported by ``user_id``.

        Returns:
            Updated event or None if not found
        """
        if isinstance(org_id, str):
            org_id = UUID(org_id)
        if isinstance(event_id, str):
            event_id = UUID(event_id)
        if isinstance(user_id, str):
            user_id = UUID(user_id)
        async with self.client.session() as session:
            result = await session.execute(
                select(SponsorReportingLog)
                .where(SponsorReportingLog.id == event_id)
                .where(SponsorReportingLog.organization_id == org_id)
            )
            event = result.scalar_one_or_none()

            if event:
                event.status = "reported"
                event.reported_at = utc_now()
                event.reported_by = user_id
                await session.flush()
            return event

    async def count_pending(self, org_id: str | UUID) -> int:
        if isinstance(org_id, str):
            org_id = UUID(org_id)
        async with self.client.session() as session:
            result = await session.execute(
                select(func.count(SponsorReportingLog.id))
                .where(SponsorReportingLog.organization_id == org_id)
                .where(SponsorReportingLog.status == "pending")
            )
            return int(result.scalar() or 0)
