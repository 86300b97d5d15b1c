"""Redis-backed implementation of KeyValueStorage."""

from __future__ import annotations

from redis.asyncio import Redis


class RedisStorage:
    """Durable storage backed by Redis, namespaced under a key prefix."""

    def __init__(self, redis: Redis, key_prefix: str = "suitedash:") -> None:  # type: ignore[type-arg]
        """Initialize with a redis-py asyncio client."""
        self._redis = redis
        self._prefix = key_prefix

    def _full_key(self, key: str) -> str:
        """Apply the namespace prefix."""
        return f"{self._prefix}{key}"

    async def get_item(self, key: str) -> str | None:
        """Retrieve a value by key."""
        value = await self._redis.get(self._full_key(key))
        if value is None:
            return None
        if isinstance(value, bytes):
            return value.decode("utf-8")
        return str(value)

    async def set_item(self, key: str, value: str) -> None:
        """Store a value without expiry."""
        await self._redis.set(name=self._full_key(key), value=value)

    async def remove_item(self, key: str) -> None:
        """Delete a key."""
        await self._redis.delete(self._full_key(key))

    async def multi_remove(self, keys: list[str]) -> None:
        """Delete several keys in one round-trip."""
        if not keys:
            return
        await self._redis.delete(*(self._full_key(key) for key in keys))

    async def all_keys(self) -> list[str]:
        """List every key in this namespace, prefix stripped."""
        keys: list[str] = []
        async for raw in self._redis.scan_iter(match=f"{self._prefix}*"):
            key = raw.decode("utf-8") if isinstance(raw, bytes) else str(raw)
            keys.append(key.removeprefix(self._prefix))
        return keys

    async def close(self) -> None:
        """Close the Redis connection pool."""
        await self._redis.aclose()
