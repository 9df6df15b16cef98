from __future__ import annotations

from typing import TYPE_CHECKING, Any, Dict, List
from uuid import UUID

from sqlalchemy import select, update
from sqlalchemy.dialects.postgresql import insert

if TYPE_CHECKING:
    from complyflow.infrastructure.persistence.postgresql.client import (
        PostgreSQLClient,
    )

from complyflow.infrastructure.persistence.postgresql.models import (
    LocalCQCReport,
    WatchdogAlert,
    WatchdogScanHistory,
    utc_now,
)


def _uuid(value: str | UUID) -> UUID:
    return UUID(value) if isinstance(value, str) else value


class WatchdogRepository:
    """Repository for local CQC reports, trend alerts and scan history.

    Attributes:
        client: PostgreSQL client for database access
    """

    def __init__(self, client: PostgreSQLClient):
        self.client = client

    async def upsert_report(self, report: Dict[str, Any]) -> None:
        """Store a location snapshot keyed on (cqc_location_id, report_date)."""
        statement = insert(LocalCQCReport).values(**report)
        statement = statement.on_conflict_do_update(
            index_elements=[LocalCQCReport.cqc_location_id, LocalCQCReport.report_date],
            set_={
                key: statement.excluded[key]
                for key in report
                if key not in ("cqc_location_id", "report_date")
            },
        )
        async with self.client.session() as session:
            await session.execute(statement)

    async def insert_alert(
        self, org_id: str | UUID, alert: Dict[str, Any]
    ) -> WatchdogAlert:
        async with self.client.session() as session:
            record = WatchdogAlert(organization_id=_uuid(org_id), **alert)
            session.add(record)
            await session.flush()
            return record

    async def list_active_alerts(
        self, org_id: str | UUID, limit: int
    ) -> List[WatchdogAlert]:
        """Undismissed alerts, newest first."""
        async with self.client.session() as session:
            result = await session.execute(
                select(WatchdogAlert)
                .where(WatchdogAlert.organization_id == _uuid(org_id))
                .where(WatchdogAlert.is_dismissed.is_(False))
                .order_by(WatchdogAlert.created_at.desc())
                .limit(limit)
            )
            return list(result.scalars().all())

    async def start_scan(
        self, org_id: str | UUID, postcode: str, radius_miles: int
    ) -> UUID:
        """Record a running scan and return its ID."""
        async with self.client.session() as session:
            scan = WatchdogScanHistory(
                organization_id=_uuid(org_id),
                postcode=postcode,
                radius_miles=radius_miles,
                scan_status="running",
            )
            session.add(scan)
            await session.flush()
            return scan.id

    async def complete_scan(
        self, scan_id: str | UUID, reports_found: int, alerts_generated: int
    ) -> None:
        async with self.client.session() as session:
            await session.execute(
                update(WatchdogScanHistory)
                .where(WatchdogScanHistory.id == _uuid(scan_id))
                .values(
                    reports_found=reports_found,
                    alerts_generated=alerts_generated,
                    scan_status="completed",
                    completed_at=utc_now(),
                )
            )
