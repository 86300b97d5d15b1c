"""Integration test fixtures: real storage backends, stubbed SuiteDash API."""

from __future__ import annotations

import logging
import socket
import time
from collections.abc import AsyncGenerator, Generator

import pytest
import pytest_asyncio
import structlog

# ---------------------------------------------------------------------------
# Service health checks
# ---------------------------------------------------------------------------


def _tcp_reachable(
    host: str,
    port: int,
    timeout: float = 1.0,
    retries: int = 3,
    delay: float = 1.0,
) -> bool:
    """Check if a TCP service is reachable, retrying on failure."""
    for attempt in range(retries):
        try:
            with socket.create_connection((host, port), timeout=timeout):
                return True
        except OSError:
            if attempt < retries - 1:
                time.sleep(delay)
    return False


_redis_up = _tcp_reachable("localhost", 6379)

require_redis = pytest.mark.skipif(
    not _redis_up,
    reason="Redis not reachable on localhost:6379",
)


# ---------------------------------------------------------------------------
# Redis fixtures
# ---------------------------------------------------------------------------


@pytest_asyncio.fixture
async def redis_client() -> AsyncGenerator[object, None]:
    """Function-scoped Redis client on test DB 1, flushed before each test."""
    if not _redis_up:
        pytest.skip("Redis not available")

    from redis.asyncio import Redis

    client = Redis.from_url("redis://localhost:6379/1")
    await client.flushdb()
    yield client
    await client.flushdb()
    await client.aclose()


# ---------------------------------------------------------------------------
# Logging cleanup
# ---------------------------------------------------------------------------


@pytest.fixture(autouse=True)
def _reset_logging() -> Generator[None, None, None]:
    """Save and restore root logger handlers and structlog configuration."""
    root = logging.getLogger()
    original_handlers = root.handlers[:]
    original_level = root.level
    yield
    root.handlers = original_handlers
    root.level = original_level
    structlog.reset_defaults()
