from __future__ import annotations

from datetime import date, datetime
from typing import TYPE_CHECKING, List, Optional
from uuid import UUID

from sqlalchemy import func, select

if TYPE_CHECKING:
    from complyflow.infrastructure.persistence.postgresql.client import (
        PostgreSQLClient,
    )

from complyflow.infrastructure.persistence.postgresql.models import (
    ComplianceAlert,
    utc_now,
)


def _uuid(value: str | UUID) -> UUID:
    return UUID(value) if isinstance(value, str) else value


class ComplianceAlertRepository:
    """Repository for organization compliance alerts.

    Attributes:
        client: PostgreSQL client for database access
    """

    def __init__(self, client: PostgreSQLClient):
        self.client = client

    async def list_by_organization(
        self, org_id: str | UUID, include_resolved: bool = False
    ) -> List[ComplianceAlert]:
        """List alerts newest first."""
        async with self.client.session() as session:
            query = select(ComplianceAlert).where(
                ComplianceAlert.organization_id == _uuid(org_id)
            )
            if not include_resolved:
                query = query.where(ComplianceAlert.is_resolved.is_(False))
            result = await session.execute(
                query.order_by(ComplianceAlert.created_at.desc())
            )
            return list(result.scalars().all())

    async def list_unresolved_by_type(
        self, org_id: str | UUID, alert_type: str
    ) -> List[ComplianceAlert]:
        async with self.client.session() as session:
            result = await session.execute(
                select(ComplianceAlert)
                .where(ComplianceAlert.organization_id == _uuid(org_id))
                .where(ComplianceAlert.alert_type == alert_type)
                .where(ComplianceAlert.is_resolved.is_(False))
            )
            return list(result.scalars().all())

    async def count_unresolved_by_type(self, org_id: str | UUID, alert_type: str) -> int:
        async with self.client.session() as session:
            result = await session.execute(
                select(func.count(ComplianceAlert.id))
                .where(ComplianceAlert.organization_id == _uuid(org_id))
                .where(ComplianceAlert.alert_type == alert_type)
                .where(ComplianceAlert.is_resolved.is_(False))
            )
            return int(result.scalar() or 0)

    async def count_resolved_since(self, org_id: str | UUID, since: datetime) -> int:
        async with self.client.session() as session:
            result = await session.execute(
                select(func.count(ComplianceAlert.id))
                .where(ComplianceAlert.organization_id == _uuid(org_id))
                .where(ComplianceAlert.is_resolved.is_(True))
                .where(ComplianceAlert.resolved_at >= since)
            )
            return int(result.scalar() or 0)

    async def create(
        self,
        org_id: str | UUID,
        alert_type: str,
        severity: str,
        title: str,
        description: Optional[str] = None,
        related_worker_id: Optional[str | UUID] = None,
        due_date: Optional[date] = None,
    ) -> ComplianceAlert:
        """Raise a new unresolved alert."""
        async with self.client.session() as session:
            alert = ComplianceAlert(
                organization_id=_uuid(org_id),
                alert_type=alert_type,
                severity=severity,
                title=title,
                description=description,
                related_worker_id=(
                    _uuid(related_worker_id) if related_worker_id else None
                ),
                due_date=due_date,
                is_resolved=False,
            )
            session.add(alert)
            await session.flush()
            return alert

    async def update_severity(
        self, alert_id: str | UUID, severity: str, description: str
    ) -> Optional[ComplianceAlert]:
        async with self.client.session() as session:
            result = await session.execute(
                select(ComplianceAlert).where(ComplianceAlert.id == _uuid(alert_id))
            )
            alert = result.scalar_one_or_none()

            if alert:
                alert.severity = severity
                alert.description = description
                await session.flush()
            return alert

    async def resolve(
        self, org_id: str | UUID, alert_id: str | UUID, user_id: str | UUID
    ) -> Optional[ComplianceAlert]:
        """Mark an alert resolved by ``user_id``.

        Returns:
            Updated alert or None if not found in the organization
        """
        async with self.client.session() as session:
            result = await session.execute(
                select(ComplianceAlert)
                .where(ComplianceAlert.id == _uuid(alert_id))
                .where(ComplianceAlert.organization_id == _uuid(org_id))
            )
            alert = result.scalar_one_or_none()

            if alert:
                alert.is_resolved = True
                alert.resolved_at = utc_now()
                alert.resolved_by = _uuid(user_id)
                await session.flush()
            return alert
