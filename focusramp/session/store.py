"""Key-value slot stores for session snapshots.

The snapshot codec only needs get/set/delete on string values. The in-memory
store backs tests and the single-process CLI; the Redis store is the shared
local slot for a deployment.
"""

from typing import Protocol

import redis
from loguru import logger

from focusramp.config.settings import settings


class KeyValueStore(Protocol):
    """Minimal string key-value interface used by SnapshotCodec."""

    def get(self, key: str) -> str | None: ...

    def set(self, key: str, value: str) -> None: ...

    def delete(self, key: str) -> None: ...


class InMemoryKeyValueStore:
    """Process-local dict-backed store."""

    def __init__(self) -> None:
        self._data: dict[str, str] = {}

    def get(self, key: str) -> str | None:
        return self._data.get(key)

    def set(self, key: str, value: str) -> None:
        self._data[key] = value

    def delete(self, key: str) -> None:
        self._data.pop(key, None)

    def __contains__(self, key: object) -> bool:
        return key in self._data

    def __len__(self) -> int:
        return len(self._data)


def _get_redis_client() -> redis.Redis:
    """Get Redis client instance.

    Returns:
        Redis client with string decoding enabled
    """
    return redis.from_url(settings.redis_url, decode_responses=True)


class RedisKeyValueStore:
    """Redis-backed store. One key per user, overwritten in place.

    Args:
        client: Redis client (defaults to one built from settings.redis_url)
        ttl_seconds: Optional expiry refreshed on every write
    """

    def __init__(self, client: redis.Redis | None = None, ttl_seconds: int | None = None) -> None:
        self._client = client if client is not None else _get_redis_client()
        self._ttl_seconds = ttl_seconds

    def get(self, key: str) -> str | None:
        value = self._client.get(key)
        if value is None:
            return None
        if isinstance(value, bytes):
            return value.decode("utf-8")
        return str(value)

    def set(self, key: str, value: str) -> None:
        if self._ttl_seconds:
            self._client.set(key, value, ex=self._ttl_seconds)
        else:
            self._client.set(key, value)
        logger.trace("Redis snapshot slot written", key=key)

    def delete(self, key: str) -> None:
        self._client.delete(key)
