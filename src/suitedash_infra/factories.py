"""Factory functions for creating storage backends from settings."""

from __future__ import annotations

from typing import TYPE_CHECKING

from suitedash_core.interfaces.storage import KeyValueStorage

if TYPE_CHECKING:
    from suitedash_core.config.settings import Settings


def create_storage(settings: Settings) -> KeyValueStorage:
    """Create the durable key-value store selected by ``settings.cache_backend``.

    ``redis`` connects lazily to ``settings.redis_url``; ``memory`` keeps
    everything in-process; anything else uses diskcache under
    ``settings.cache_dir``.
    """
    if settings.cache_backend == "redis":
        from redis.asyncio import Redis

        from suitedash_infra.storage.redis_storage import RedisStorage

        return RedisStorage(
            Redis.from_url(settings.redis_url),
            key_prefix=settings.redis_key_prefix,
        )

    if settings.cache_backend == "memory":
        from suitedash_infra.storage.memory_storage import InMemoryStorage

        return InMemoryStorage()

    from suitedash_infra.storage.disk_storage import DiskCacheStorage

    return DiskCacheStorage(settings.cache_dir)
