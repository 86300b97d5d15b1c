"""SuiteDash API facade: one client per resource type plus cache-wide operations."""

from __future__ import annotations

from typing import TYPE_CHECKING

import httpx
import structlog

from suitedash_client.resources.client import (
    FileResourceClient,
    MutableResourceClient,
    ResourceClient,
)
from suitedash_core.constants import AUTH_PROBE_PATH
from suitedash_core.exceptions import TransportError
from suitedash_core.models.resource import RESOURCE_SPECS, ResourceType
from suitedash_infra.cache.cache_store import CacheStore
from suitedash_infra.cache.keys import is_resource_key
from suitedash_infra.cache.snapshot_store import SnapshotStore
from suitedash_infra.factories import create_storage
from suitedash_infra.http.transport import create_transport

if TYPE_CHECKING:
    from suitedash_core.config.settings import Settings
    from suitedash_core.interfaces.storage import KeyValueStorage
    from suitedash_infra.http.transport import ApiTransport

logger = structlog.get_logger()


class SuiteDashApi:
    """Entry point for all data access.

    The cache store and snapshot store share one durable storage backend.
    """

    def __init__(
        self,
        transport: ApiTransport,
        storage: KeyValueStorage,
        cache_ttl_minutes: int,
        page_size: int,
    ) -> None:
        """Wire the per-resource clients around shared collaborators."""
        self.transport = transport
        self.storage = storage
        self.cache = CacheStore(storage)
        self.snapshots = SnapshotStore(storage)

        shared = (transport, self.cache, cache_ttl_minutes, page_size)
        self.contacts = ResourceClient(RESOURCE_SPECS[ResourceType.CONTACTS], *shared)
        self.projects = MutableResourceClient(RESOURCE_SPECS[ResourceType.PROJECTS], *shared)
        self.files = FileResourceClient(RESOURCE_SPECS[ResourceType.FILES], *shared)
        self.tasks = MutableResourceClient(RESOURCE_SPECS[ResourceType.TASKS], *shared)

    def resource(self, resource_type: ResourceType) -> ResourceClient:
        """Look up the client for a resource type."""
        clients: dict[ResourceType, ResourceClient] = {
            ResourceType.CONTACTS: self.contacts,
            ResourceType.PROJECTS: self.projects,
            ResourceType.FILES: self.files,
            ResourceType.TASKS: self.tasks,
        }
        return clients[resource_type]

    async def check_auth(self) -> bool:
        """Probe the API with the configured credentials.

        Returns False instead of raising when the probe fails.
        """
        try:
            response = await self.transport.send(
                "GET", AUTH_PROBE_PATH, params={"per_page": 1}
            )
        except TransportError as e:
            logger.error(
                "auth_check_failed",
                status_code=e.status_code,
                code=e.code,
                error=str(e),
            )
            return False
        return response.status_code == httpx.codes.OK

    async def clear_cache(self) -> int:
        """Remove every resource-prefixed cache entry. Returns the count removed.

        List snapshots are kept; they live outside the resource prefixes.
        """
        removed = await self.cache.remove_matching(is_resource_key)
        logger.info("api_cache_cleared", removed=removed)
        return removed

    async def aclose(self) -> None:
        """Close the HTTP pool and the storage backend."""
        await self.transport.aclose()
        await self.storage.close()


def create_api(
    settings: Settings,
    http_transport: httpx.AsyncBaseTransport | None = None,
    storage: KeyValueStorage | None = None,
) -> SuiteDashApi:
    """Build a SuiteDashApi from settings.

    ``http_transport`` and ``storage`` override the network layer and the
    durable store, mainly for tests.
    """
    return SuiteDashApi(
        transport=create_transport(settings, http_transport=http_transport),
        storage=storage if storage is not None else create_storage(settings),
        cache_ttl_minutes=settings.cache_ttl_minutes,
        page_size=settings.page_size,
    )
