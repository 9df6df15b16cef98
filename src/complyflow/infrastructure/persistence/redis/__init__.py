"""Redis infrastructure.

Database 1 holds the sliding-window rate limit counters.
"""

from .client import RedisClient

__all__ = ["RedisClient"]
