"""Shared pytest fixtures for unit tests."""

from __future__ import annotations

import logging
from collections.abc import AsyncGenerator, Generator
from unittest.mock import MagicMock

import pytest
import structlog

from suitedash_client.api import SuiteDashApi, create_api
from suitedash_infra.cache.cache_store import CacheStore
from suitedash_infra.cache.snapshot_store import SnapshotStore
from suitedash_infra.storage.memory_storage import InMemoryStorage
from tests.mocks.mock_factories import FakeClock
from tests.mocks.mock_settings import make_settings
from tests.mocks.mock_transport import ApiStub


@pytest.fixture
def mock_settings() -> MagicMock:
    """Return a MagicMock Settings with sensible defaults."""
    return make_settings()


@pytest.fixture
def storage() -> InMemoryStorage:
    """Return an empty in-memory key-value store."""
    return InMemoryStorage()


@pytest.fixture
def clock() -> FakeClock:
    """Return a manually advanced clock."""
    return FakeClock()


@pytest.fixture
def cache_store(storage: InMemoryStorage, clock: FakeClock) -> CacheStore:
    """Return a CacheStore over in-memory storage with a fake clock."""
    return CacheStore(storage, clock=clock)


@pytest.fixture
def snapshots(storage: InMemoryStorage) -> SnapshotStore:
    """Return a SnapshotStore over the shared in-memory storage."""
    return SnapshotStore(storage)


@pytest.fixture
def api_stub() -> ApiStub:
    """Return an empty stubbed SuiteDash API."""
    return ApiStub()


@pytest.fixture
async def api(
    mock_settings: MagicMock, api_stub: ApiStub, storage: InMemoryStorage
) -> AsyncGenerator[SuiteDashApi, None]:
    """Return a SuiteDashApi wired to the stub and in-memory storage."""
    client = create_api(mock_settings, http_transport=api_stub.transport, storage=storage)
    yield client
    await client.aclose()


@pytest.fixture(autouse=True)
def _reset_logging() -> Generator[None, None, None]:
    """Restore root handlers and structlog defaults after each test.

    configure_logging() replaces root handlers and turns on logger caching,
    which would stop structlog.testing.capture_logs from seeing events in
    later tests.
    """
    root = logging.getLogger()
    original_handlers = root.handlers[:]
    original_level = root.level
    yield
    root.handlers = original_handlers
    root.level = original_level
    structlog.reset_defaults()
