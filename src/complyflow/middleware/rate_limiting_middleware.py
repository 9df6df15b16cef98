"""Per-client throttling of the routes that call paid AI providers.

Chat completions, embeddings and knowledge-base actions are billed per call,
so each client gets a fixed number of requests per sliding window on those
routes. Counters live in Redis; everything else passes straight through, as do
limited routes while Redis is unreachable.
"""

import logging
from typing import Awaitable, Callable, Optional, Sequence

from fastapi import Request
from redis.exceptions import RedisError
from starlette.middleware.base import BaseHTTPMiddleware

from complyflow.constants import (
    DEFAULT_RATE_LIMIT_MAX_REQUESTS,
    DEFAULT_RATE_LIMIT_WINDOW_SECONDS,
)
from complyflow.exception.api_exceptions import RateLimitExceededError
from complyflow.infrastructure.persistence.redis.client import RedisClient

logger = logging.getLogger(__name__)

AI_ROUTES = (
    "/functions/v1/cqc-ai-proxy",
    "/functions/v1/generate-embedding",
    "/functions/v1/source-layer",
)

CounterStoreResolver = Callable[[], Awaitable[Optional[RedisClient]]]


class RateLimitMiddleware(BaseHTTPMiddleware):
    """Sliding-window limit on AI routes, keyed by client address and path.

    Attributes:
        resolve_store: Coroutine returning the Redis counter store, or None
            while Redis is unavailable
        window_seconds: Window length
        max_requests: Requests allowed per client per route per window
        enabled: Whether limiting is active
        limited_paths: Path prefixes that are limited
    """

    def __init__(
        self,
        app,
        resolve_store: CounterStoreResolver,
        window_seconds: int = DEFAULT_RATE_LIMIT_WINDOW_SECONDS,
        max_requests: int = DEFAULT_RATE_LIMIT_MAX_REQUESTS,
        enabled: bool = True,
        limited_paths: Sequence[str] = AI_ROUTES,
    ):
        super().__init__(app)
        self.resolve_store = resolve_store
        self.window_seconds = window_seconds
        self.max_requests = max_requests
        self.enabled = enabled
        self.limited_paths = tuple(limited_paths)

    async def dispatch(self, request: Request, call_next):
        """Count the request against its window before handing it on.

        Raises:
            RateLimitExceededError: If the window is already full (429)
        """
        path = request.url.path
        if (
            not self.enabled
            or request.method == "OPTIONS"
            or not path.startswith(self.limited_paths)
        ):
            return await call_next(request)

        store = await self.resolve_store()
        if store is None:
            return await call_next(request)

        key = self.counter_key(client_address(request), path)
        try:
            hits = await store.hits_in_window(key, self.window_seconds)
            if hits < self.max_requests:
                await store.record_hit(key, self.window_seconds)
        except RedisError as e:
            logger.warning(f"Rate limiting skipped for {key}, Redis unavailable: {e}")
            return await call_next(request)

        if hits >= self.max_requests:
            logger.warning(f"Rate limit exceeded for {key}")
            raise RateLimitExceededError(retry_after=self.window_seconds)

        return await call_next(request)

    @staticmethod
    def counter_key(client: str, path: str) -> str:
        return f"ratelimit:{client}:{path.replace('/', ':')}"


def client_address(request: Request) -> str:
    """First X-Forwarded-For hop, else the socket peer."""
    forwarded = request.headers.get("x-forwarded-for")
    if forwarded:
        return forwarded.split(",")[0].strip()
    if request.client:
        return request.client.host
    return "anonymous"
