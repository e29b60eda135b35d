"""Redis connection backing the identity provider's revoked-token blocklist.

Socket operations time out after two seconds; callers map the resulting
``RedisError`` to a 503.
"""

import redis
from django.conf import settings

_client: redis.Redis | None = None


def get_redis_client() -> redis.Redis:
    """Return the client shared by token revocation and lookup."""
    global _client
    if _client is None:
        _client = redis.Redis.from_url(settings.REDIS_URL, decode_responses=True, socket_timeout=2)
    return _client


__all__ = ["get_redis_client"]
