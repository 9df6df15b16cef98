"""Liveness and dependency report.

Postgres and Redis are probed independently so one outage does not hide the
state of the other. Vector search depends on the pgvector extension, which is
reported separately because a database restored without it still answers.
"""

import logging
from typing import Awaitable, Callable, Dict, Optional

from fastapi import APIRouter, Request
from fastapi.responses import RedirectResponse
from pydantic import BaseModel, Field

logger = logging.getLogger(__name__)

router = APIRouter(tags=["health"])

CONNECTED = "connected"
DISCONNECTED = "disconnected"


class HealthResponse(BaseModel):
    """Dependency report.

    Attributes:
        status: ``healthy`` when every dependency answered, else ``unhealthy``
        postgres: Postgres connectivity
        redis: Redis connectivity
        vector_search: ``enabled`` when pgvector is installed
        errors: Failure message per dependency
    """

    status: str = Field(..., description="healthy or unhealthy")
    postgres: str = Field(..., description="connected or disconnected")
    redis: str = Field(..., description="connected or disconnected")
    vector_search: Optional[str] = Field(None, description="enabled or disabled")
    errors: Optional[Dict[str, str]] = Field(None, description="Failures by dependency")

    class Config:
        json_schema_extra = {
            "examples": [
                {
                    "status": "healthy",
                    "postgres": "connected",
                    "redis": "connected",
                    "vector_search": "enabled",
                },
                {
                    "status": "unhealthy",
                    "postgres": "disconnected",
                    "redis": "connected",
                    "errors": {"postgres": "connection refused"},
                },
            ]
        }


async def _probe(name: str, check: Callable[[], Awaitable], errors: Dict[str, str]) -> str:
    try:
        await check()
    except Exception as e:
        logger.error(f"Health check failed for {name}: {e}", exc_info=True)
        errors[name] = str(e)
        return DISCONNECTED
    return CONNECTED


@router.get("/", include_in_schema=False)
async def root_redirect() -> RedirectResponse:
    return RedirectResponse(url="/health")


@router.get(
    "/health",
    response_model=HealthResponse,
    response_model_exclude_none=True,
    summary="System Health Check",
    description="Reports Postgres, Redis and pgvector availability. Always answers 200.",
)
async def health_check(request: Request) -> HealthResponse:
    postgres_client = request.app.state.postgres_client
    errors: Dict[str, str] = {}

    postgres = await _probe("postgres", postgres_client.health_check, errors)
    redis = await _probe("redis", request.app.state.redis_client.ping, errors)

    vector_search = None
    if postgres == CONNECTED:
        vector_search = "enabled" if await postgres_client.vector_enabled() else "disabled"

    return HealthResponse(
        status="unhealthy" if errors else "healthy",
        postgres=postgres,
        redis=redis,
        vector_search=vector_search,
        errors=errors or None,
    )
