"""Downgrades organizations whose free trial has ended."""

import logging
from datetime import datetime, timezone
from typing import Any, Dict, Optional

from sqlalchemy.exc import SQLAlchemyError

from complyflow.exception.api_exceptions import DatabaseError
from complyflow.repository.organization_repository import OrganizationRepository

logger = logging.getLogger(__name__)


class TrialExpiryService:
    """Runs the ``expire_trials()`` database function, with a direct update fallback."""

    def __init__(self, org_repo: OrganizationRepository):
        self.org_repo = org_repo

    async def expire(self, now: Optional[datetime] = None) -> Dict[str, Any]:
        """Expire every lapsed trial.

        Returns:
            ``{success, expired_count, method}``, plus ``organizations`` when the
            fallback ran

        Raises:
            DatabaseError: If both the function call and the fallback fail
        """
        try:
            expired_count = await self.org_repo.expire_trials_rpc()
        except SQLAlchemyError as e:
            logger.error(f"Error calling expire_trials: {e}")
            return await self._expire_directly(now or datetime.now(timezone.utc))

        logger.info(f"Expired {expired_count} trial(s) via RPC")
        return {"success": True, "expired_count": expired_count, "method": "rpc"}

    async def _expire_directly(self, now: datetime) -> Dict[str, Any]:
        try:
            expired = await self.org_repo.expire_trials(now)
        except SQLAlchemyError as e:
            logger.error(f"Trial expiry error: {e}", exc_info=True)
            raise DatabaseError(str(e)) from e

        logger.info(f"Expired {len(expired)} trial(s) via fallback")
        return {
            "success": True,
            "expired_count": len(expired),
            "method": "fallback",
            "organizations": [org.name for org in expired],
        }
