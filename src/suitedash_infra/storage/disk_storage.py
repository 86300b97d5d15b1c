"""diskcache-backed implementation of KeyValueStorage."""

from __future__ import annotations

import asyncio
from pathlib import Path

import diskcache


class DiskCacheStorage:
    """Durable local storage backed by diskcache (SQLite under the hood).

    Entries never expire at this level; freshness is tracked by CacheStore.
    """

    def __init__(self, cache_dir: Path) -> None:
        """Initialize with a cache directory."""
        cache_dir.mkdir(parents=True, exist_ok=True)
        self._cache = diskcache.Cache(str(cache_dir))

    async def get_item(self, key: str) -> str | None:
        """Retrieve a value by key."""
        result = await asyncio.to_thread(self._cache.get, key)
        if result is None:
            return None
        return str(result)

    async def set_item(self, key: str, value: str) -> None:
        """Store a value without expiry."""
        await asyncio.to_thread(self._cache.set, key, value)

    async def remove_item(self, key: str) -> None:
        """Delete a key from the store."""
        await asyncio.to_thread(self._cache.delete, key)

    async def multi_remove(self, keys: list[str]) -> None:
        """Delete several keys in one worker-thread hop."""

        def _remove_all() -> None:
            for key in keys:
                self._cache.delete(key)

        await asyncio.to_thread(_remove_all)

    async def all_keys(self) -> list[str]:
        """List every stored key."""
        keys = await asyncio.to_thread(lambda: list(self._cache.iterkeys()))
        return [str(key) for key in keys]

    async def close(self) -> None:
        """Close the underlying SQLite connection."""
        self._cache.close()
