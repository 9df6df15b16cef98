from __future__ import annotations

from datetime import datetime
from typing import TYPE_CHECKING, Optional
from uuid import UUID

from sqlalchemy import func, select

if TYPE_CHECKING:
    from complyflow.infrastructure.persistence.postgresql.client import (
        PostgreSQLClient,
    )

from complyflow.infrastructure.persistence.postgresql.models import (
    ComplianceAnalysis,
    TrainingCompletion,
)


class ComplianceMetricsRepository:
    """Read-only access to training completions and gap analysis scores.

    Attributes:
        client: PostgreSQL client for database access
    """

    def __init__(self, client: PostgreSQLClient):
        self.client = client

    async def count_trainings_since(self, org_id: str | UUID, since: datetime) -> int:
        if isinstance(org_id, str):
            org_id = UUID(org_id)
        async with self.client.session() as session:
            result = await session.execute(
                select(func.count(TrainingCompletion.id))
                .where(TrainingCompletion.organization_id == org_id)
                .where(TrainingCompletion.completed_at >= since)
            )
            return int(result.scalar() or 0)

    async def latest_compliance_score(self, org_id: str | UUID) -> Optional[int]:
        """Score of the most recent gap analysis, or None if never analysed."""
        if isinstance(org_id, str):
            org_id = UUID(org_id)
        async with self.client.session() as session:
            result = await session.execute(
                select(ComplianceAnalysis.compliance_score)
                .where(ComplianceAnalysis.organization_id == org_id)
                .order_by(ComplianceAnalysis.created_at.desc())
                .limit(1)
            )
            return result.scalar_one_or_none()
