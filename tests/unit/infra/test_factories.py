"""Tests for storage factory selection."""

from __future__ import annotations

from pathlib import Path
from unittest.mock import MagicMock, patch

import pytest

from suitedash_infra.factories import create_storage
from suitedash_infra.storage.disk_storage import DiskCacheStorage
from suitedash_infra.storage.memory_storage import InMemoryStorage
from suitedash_infra.storage.redis_storage import RedisStorage
from tests.mocks.mock_settings import make_settings


@pytest.mark.unit
class TestCreateStorage:
    """Test backend selection from settings."""

    @pytest.mark.asyncio
    async def test_disk_backend(self, tmp_path: Path) -> None:
        """Disk backend creates the cache directory."""
        settings = make_settings(cache_backend="disk", cache_dir=tmp_path / "cache")
        storage = create_storage(settings)
        assert isinstance(storage, DiskCacheStorage)
        assert (tmp_path / "cache").is_dir()
        await storage.close()

    def test_memory_backend(self) -> None:
        """Memory backend needs nothing external."""
        assert isinstance(create_storage(make_settings(cache_backend="memory")), InMemoryStorage)

    def test_redis_backend(self) -> None:
        """Redis backend connects via URL and applies the prefix."""
        settings = make_settings(cache_backend="redis", redis_key_prefix="x:")
        with patch("redis.asyncio.Redis.from_url", return_value=MagicMock()) as from_url:
            storage = create_storage(settings)
        assert isinstance(storage, RedisStorage)
        from_url.assert_called_once_with(settings.redis_url)
        assert storage._full_key("k") == "x:k"
