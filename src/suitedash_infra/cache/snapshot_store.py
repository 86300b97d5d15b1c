"""Durable last-good snapshot of each list's first page."""

from __future__ import annotations

import json
from typing import Any

import structlog

from suitedash_core.exceptions import CacheError
from suitedash_core.interfaces.storage import KeyValueStorage

logger = structlog.get_logger()


class SnapshotStore:
    """Non-expiring copy of the first page a list last loaded successfully.

    Kept apart from the TTL cache so a screen can render something even
    after its cached pages have expired or been cleared.
    """

    def __init__(self, storage: KeyValueStorage) -> None:
        """Initialize with a storage backend."""
        self._storage = storage

    async def load(self, key: str) -> list[dict[str, Any]] | None:
        """Return the stored items, or None if absent or unreadable."""
        try:
            raw = await self._read(key)
            if raw is None:
                return None
            return self._decode(key, raw)
        except CacheError as e:
            logger.warning("snapshot_read_failed", key=key, error=str(e))
            return None

    async def save(self, key: str, items: list[dict[str, Any]]) -> None:
        """Replace the stored items."""
        try:
            await self._write(key, json.dumps(items))
        except (CacheError, TypeError, ValueError) as e:
            logger.warning("snapshot_write_failed", key=key, error=str(e))

    async def _read(self, key: str) -> str | None:
        try:
            return await self._storage.get_item(key)
        except Exception as e:
            msg = f"Failed to read snapshot {key}: {e}"
            raise CacheError(msg) from e

    async def _write(self, key: str, payload: str) -> None:
        try:
            await self._storage.set_item(key, payload)
        except Exception as e:
            msg = f"Failed to write snapshot {key}: {e}"
            raise CacheError(msg) from e

    def _decode(self, key: str, raw: str) -> list[dict[str, Any]]:
        try:
            items = json.loads(raw)
        except json.JSONDecodeError as e:
            msg = f"Corrupt snapshot {key}: {e}"
            raise CacheError(msg) from e
        if not isinstance(items, list):
            msg = f"Corrupt snapshot {key}: expected a list"
            raise CacheError(msg)
        return items
