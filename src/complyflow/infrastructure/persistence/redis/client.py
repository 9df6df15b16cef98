"""Redis connection used for per-client request counting.

Each counter is a sorted set of request timestamps, so counting the hits in
the last N seconds is a trim followed by a cardinality read.
"""

import time
import uuid
from typing import Optional

from redis.asyncio import Redis


class RedisClient:
    """Async Redis connection with sliding-window hit counters.

    Attributes:
        url: Redis connection URL
        db: Database number holding the counters
    """

    def __init__(self, url: str, db: int = 0):
        self.url = url
        self.db = db
        self._redis: Optional[Redis] = None

    async def connect(self) -> None:
        if self._redis is None:
            self._redis = Redis.from_url(self.url, db=self.db, decode_responses=True)

    async def disconnect(self) -> None:
        if self._redis is not None:
            await self._redis.aclose()
            self._redis = None

    @property
    def redis(self) -> Redis:
        if self._redis is None:
            raise RuntimeError("Redis is not connected")
        return self._redis

    async def ping(self) -> bool:
        return bool(await self.redis.ping())

    async def hits_in_window(self, key: str, window_seconds: int) -> int:
        """Drop hits older than the window and count the rest."""
        await self.redis.zremrangebyscore(key, 0, time.time() - window_seconds)
        return await self.redis.zcard(key)

    async def record_hit(self, key: str, window_seconds: int) -> None:
        """Add a hit now; the key outlives the window so late reads still see it."""
        now = time.time()
        await self.redis.zadd(key, {f"{now}:{uuid.uuid4().hex}": now})
        await self.redis.expire(key, window_seconds * 2)
