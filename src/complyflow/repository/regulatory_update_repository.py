from __future__ import annotations

from datetime import datetime
from typing import TYPE_CHECKING, Any, Dict, List

from sqlalchemy import select
from sqlalchemy.dialects.postgresql import insert

if TYPE_CHECKING:
    from complyflow.infrastructure.persistence.postgresql.client import (
        PostgreSQLClient,
    )

from complyflow.infrastructure.persistence.postgresql.models import (
    RegulatoryUpdate,
    utc_now,
)


class RegulatoryUpdateRepository:
    """Repository for harvested regulatory updates.

    Attributes:
        client: PostgreSQL client for database access
    """

    def __init__(self, client: PostgreSQLClient):
        self.client = client

    async def upsert(self, update: Dict[str, Any]) -> None:
        """Insert an update, or refresh the existing row with the same URL.

        Args:
            update: source, title, summary, url, published_at, category and
                relevance_score
        """
        values = dict(update)
        values["updated_at"] = utc_now()
        statement = insert(RegulatoryUpdate).values(**values)
        statement = statement.on_conflict_do_update(
            index_elements=[RegulatoryUpdate.url],
            set_={
                key: statement.excluded[key]
                for key in values
                if key != "url"
            },
        )
        async with self.client.session() as session:
            await session.execute(statement)

    async def top_since(self, since: datetime, limit: int) -> List[RegulatoryUpdate]:
        """Most relevant updates published since ``since``."""
        async with self.client.session() as session:
            result = await session.execute(
                select(RegulatoryUpdate)
                .where(RegulatoryUpdate.published_at >= since)
                .order_by(RegulatoryUpdate.relevance_score.desc())
                .limit(limit)
            )
            return list(result.scalars().all())
