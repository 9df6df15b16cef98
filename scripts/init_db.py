#!/usr/bin/env python3
"""Bring the ComplyFlow database to the latest schema and check it.

Applies pending Alembic revisions, then confirms the two things the API
cannot run without: the pgvector extension behind knowledge search and the
``expire_trials()`` function called by the trial expiry job.

Usage:
    poetry run python scripts/init_db.py
"""

import asyncio
import logging
import sys
from pathlib import Path

from alembic import command
from alembic.config import Config
from dotenv import load_dotenv
from sqlalchemy import text

load_dotenv()

from complyflow.config.app_settings import get_settings  # noqa: E402
from complyflow.infrastructure.persistence.postgresql.client import (  # noqa: E402
    PostgreSQLClient,
)

logger = logging.getLogger("complyflow.init_db")

ALEMBIC_INI = Path(__file__).resolve().parent.parent / "alembic.ini"


async def check_schema(client: PostgreSQLClient) -> list[str]:
    """Return what is missing from a migrated database."""
    missing = []
    await client.connect()
    try:
        if not await client.vector_enabled():
            missing.append("pgvector extension")
        async with client.session() as session:
            result = await session.execute(
                text("SELECT 1 FROM pg_proc WHERE proname = 'expire_trials'")
            )
            if result.scalar() is None:
                missing.append("expire_trials() function")
    finally:
        await client.disconnect()
    return missing


def main() -> int:
    logging.basicConfig(level=logging.INFO, format="%(levelname)s - %(message)s")
    settings = get_settings()

    logger.info("Applying migrations")
    command.upgrade(Config(str(ALEMBIC_INI)), "head")

    missing = asyncio.run(check_schema(PostgreSQLClient(settings.postgres_url)))
    if missing:
        logger.error(f"Database is missing: {', '.join(missing)}")
        return 1

    logger.info("Schema is current; pgvector and expire_trials() are available")
    return 0


if __name__ == "__main__":
    sys.exit(main())
