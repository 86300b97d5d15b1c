"""Time-boxed cache over a durable key-value store."""

from __future__ import annotations

from collections.abc import Callable
from datetime import UTC, datetime, timedelta
from typing import Any

import structlog
from pydantic import BaseModel, ValidationError

from suitedash_core.exceptions import CacheError
from suitedash_core.interfaces.storage import KeyValueStorage

logger = structlog.get_logger()

Clock = Callable[[], datetime]


def utc_now() -> datetime:
    """Current time as an aware UTC datetime."""
    return datetime.now(UTC)


class CacheEntry(BaseModel):
    """Serialized envelope of one cached value."""

    data: Any
    expiry: datetime

    def is_fresh(self, now: datetime) -> bool:
        """An entry is valid strictly before its expiry."""
        return now < self.expiry


class CacheStore:
    """Key-value cache with per-entry expiry.

    Caching is an optimization only: every storage failure is logged and
    swallowed here, turning reads into misses and writes into no-ops.
    """

    def __init__(self, storage: KeyValueStorage, clock: Clock = utc_now) -> None:
        """Initialize with a storage backend and an injectable clock."""
        self._storage = storage
        self._clock = clock

    @property
    def storage(self) -> KeyValueStorage:
        """The underlying durable store."""
        return self._storage

    async def put(self, key: str, value: Any, ttl_minutes: int) -> None:  # noqa: ANN401
        """Store ``value`` under ``key`` until ``now + ttl_minutes``."""
        entry = CacheEntry(data=value, expiry=self._clock() + timedelta(minutes=ttl_minutes))
        try:
            await self._write(key, entry)
        except CacheError as e:
            logger.warning("cache_write_failed", key=key, error=str(e))

    async def get(self, key: str) -> Any:  # noqa: ANN401
        """Return the cached value, or None on a miss.

        Expired entries are deleted as part of the miss.
        """
        try:
            entry = await self._read(key)
            if entry is None:
                return None
            if not entry.is_fresh(self._clock()):
                await self._delete(key)
                logger.debug("cache_expired", key=key)
                return None
        except CacheError as e:
            logger.warning("cache_read_failed", key=key, error=str(e))
            return None
        return entry.data

    async def remove(self, key: str) -> None:
        """Delete a single entry."""
        try:
            await self._delete(key)
        except CacheError as e:
            logger.warning("cache_remove_failed", key=key, error=str(e))

    async def remove_matching(self, predicate: Callable[[str], bool]) -> int:
        """Delete every stored key accepted by ``predicate``. Returns the count removed."""
        try:
            keys = [key for key in await self._keys() if predicate(key)]
            if keys:
                await self._delete_many(keys)
        except CacheError as e:
            logger.warning("cache_bulk_remove_failed", error=str(e))
            return 0
        logger.info("cache_entries_removed", count=len(keys))
        return len(keys)

    async def _read(self, key: str) -> CacheEntry | None:
        """Load and decode one entry. Undecodable entries are deleted and read as absent."""
        try:
            raw = await self._storage.get_item(key)
        except Exception as e:
            msg = f"Failed to read {key}: {e}"
            raise CacheError(msg) from e
        if raw is None:
            return None
        try:
            return CacheEntry.model_validate_json(raw)
        except ValidationError as e:
            logger.warning("cache_entry_corrupt", key=key, error=str(e))
            await self._delete(key)
            return None

    async def _write(self, key: str, entry: CacheEntry) -> None:
        """Encode and persist one entry."""
        try:
            await self._storage.set_item(key, entry.model_dump_json())
        except Exception as e:
            msg = f"Failed to write {key}: {e}"
            raise CacheError(msg) from e

    async def _delete(self, key: str) -> None:
        try:
            await self._storage.remove_item(key)
        except Exception as e:
            msg = f"Failed to delete {key}: {e}"
            raise CacheError(msg) from e

    async def _delete_many(self, keys: list[str]) -> None:
        try:
            await self._storage.multi_remove(keys)
        except Exception as e:
            msg = f"Failed to delete {len(keys)} keys: {e}"
            raise CacheError(msg) from e

    async def _keys(self) -> list[str]:
        try:
            return await self._storage.all_keys()
        except Exception as e:
            msg = f"Failed to list keys: {e}"
            raise CacheError(msg) from e
