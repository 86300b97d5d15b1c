"""Tests for the durable list snapshot store."""

from __future__ import annotations

import pytest

from suitedash_infra.cache.snapshot_store import SnapshotStore
from suitedash_infra.storage.memory_storage import InMemoryStorage
from tests.mocks.mock_factories import FailingStorage


@pytest.mark.unit
class TestSnapshotStore:
    """Test last-good snapshot persistence."""

    @pytest.mark.asyncio
    async def test_save_and_load(self, snapshots: SnapshotStore) -> None:
        """Saved items load back unchanged."""
        items = [{"id": 1, "name": "Draft proposal"}]
        await snapshots.save("tasks", items)
        assert await snapshots.load("tasks") == items

    @pytest.mark.asyncio
    async def test_load_missing(self, snapshots: SnapshotStore) -> None:
        """No snapshot yet returns None."""
        assert await snapshots.load("tasks") is None

    @pytest.mark.asyncio
    async def test_empty_list_is_a_snapshot(self, snapshots: SnapshotStore) -> None:
        """An empty first page is remembered as empty, not missing."""
        await snapshots.save("tasks", [])
        assert await snapshots.load("tasks") == []

    @pytest.mark.asyncio
    async def test_corrupt_snapshot_ignored(self) -> None:
        """Non-JSON or non-list payloads read as missing."""
        store = SnapshotStore(InMemoryStorage({"a": "{oops", "b": '{"id": 1}'}))
        assert await store.load("a") is None
        assert await store.load("b") is None

    @pytest.mark.asyncio
    async def test_storage_failures_absorbed(self) -> None:
        """I/O errors never reach the caller."""
        store = SnapshotStore(FailingStorage())
        await store.save("tasks", [{"id": 1}])
        assert await store.load("tasks") is None
