"""Per-resource read/write operations over the cache and the API transport."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

import structlog

from suitedash_core.constants import DEFAULT_CACHE_TTL_MINUTES, DEFAULT_PAGE_SIZE
from suitedash_core.exceptions import TransportError
from suitedash_core.models.resource import PageRequest
from suitedash_infra.cache.keys import detail_key, is_list_page_key, list_page_key

if TYPE_CHECKING:
    from suitedash_core.models.resource import ResourceSpec
    from suitedash_infra.cache.cache_store import CacheStore
    from suitedash_infra.http.transport import ApiTransport

logger = structlog.get_logger()


class ResourceClient:
    """Cache-first reads and network-only creates for one resource type.

    Mutations never touch the cache; callers invalidate what they changed
    with ``invalidate`` / ``invalidate_lists`` or clear everything through
    ``SuiteDashApi.clear_cache``.
    """

    def __init__(
        self,
        spec: ResourceSpec,
        transport: ApiTransport,
        cache: CacheStore,
        ttl_minutes: int = DEFAULT_CACHE_TTL_MINUTES,
        default_page_size: int = DEFAULT_PAGE_SIZE,
    ) -> None:
        """Initialize with the resource layout and shared collaborators."""
        self.spec = spec
        self._transport = transport
        self._cache = cache
        self._ttl_minutes = ttl_minutes
        self._default_page_size = default_page_size

    async def list(
        self,
        page: int = 1,
        page_size: int | None = None,
        use_cache: bool = True,
        filters: dict[str, Any] | None = None,
    ) -> Any:  # noqa: ANN401
        """Fetch one page; returns the raw ``{<plural>: [...]}`` envelope.

        ``filters`` are sent as extra query parameters and cached under
        their own key.
        """
        request = PageRequest(
            resource_type=self.spec.resource_type,
            page=page,
            page_size=page_size if page_size is not None else self._default_page_size,
        )
        key = list_page_key(self.spec, request.page, request.page_size, filters)
        paging = {"page": request.page, "per_page": request.page_size}
        context = {**paging, "filters": filters} if filters else paging
        return await self._read(
            key,
            self.spec.list_path,
            params={**(filters or {}), **paging},
            use_cache=use_cache,
            context=context,
        )

    async def get_by_id(self, resource_id: int | str, use_cache: bool = True) -> Any:  # noqa: ANN401
        """Fetch a single resource body."""
        return await self._read(
            detail_key(self.spec, resource_id),
            self.spec.detail_path(resource_id),
            params=None,
            use_cache=use_cache,
            context={"resource_id": resource_id},
        )

    async def create(self, payload: dict[str, Any]) -> Any:  # noqa: ANN401
        """Create a resource. Always hits the network."""
        return await self._mutate("create", "POST", self.spec.list_path, json=payload)

    async def invalidate(self, resource_id: int | str) -> None:
        """Drop the cached body of one resource."""
        await self._cache.remove(detail_key(self.spec, resource_id))

    async def invalidate_lists(self) -> int:
        """Drop every cached page of this resource's list."""
        return await self._cache.remove_matching(
            lambda key: is_list_page_key(self.spec, key)
        )

    async def _read(
        self,
        key: str,
        path: str,
        *,
        params: dict[str, Any] | None,
        use_cache: bool,
        context: dict[str, Any],
    ) -> Any:  # noqa: ANN401
        """Cache-first GET; successful responses are cached when ``use_cache``."""
        if use_cache:
            cached = await self._cache.get(key)
            if cached is not None:
                logger.debug("resource_cache_hit", resource=self.spec.plural, key=key)
                return cached

        try:
            data = await self._transport.request("GET", path, params=params)
        except TransportError as e:
            logger.error(
                "resource_fetch_failed",
                resource=self.spec.plural,
                status_code=e.status_code,
                error=str(e),
                **context,
            )
            raise

        if use_cache:
            await self._cache.put(key, data, self._ttl_minutes)
        logger.info("resource_fetched", resource=self.spec.plural, cached=use_cache, **context)
        return data

    async def _mutate(
        self,
        operation: str,
        method: str,
        path: str,
        *,
        resource_id: int | str | None = None,
        **kwargs: Any,  # noqa: ANN401
    ) -> Any:  # noqa: ANN401
        """Send a write request, logging failures with resource context."""
        try:
            data = await self._transport.request(method, path, **kwargs)
        except TransportError as e:
            logger.error(
                "resource_mutation_failed",
                resource=self.spec.plural,
                operation=operation,
                resource_id=resource_id,
                status_code=e.status_code,
                error=str(e),
            )
            raise
        logger.info(
            "resource_mutated",
            resource=self.spec.plural,
            operation=operation,
            resource_id=resource_id,
        )
        return data


class MutableResourceClient(ResourceClient):
    """Resource types that also support update and delete (projects, tasks)."""

    async def update(self, resource_id: int | str, payload: dict[str, Any]) -> Any:  # noqa: ANN401
        """Replace a resource. Always hits the network."""
        return await self._mutate(
            "update",
            "PUT",
            self.spec.detail_path(resource_id),
            resource_id=resource_id,
            json=payload,
        )

    async def delete(self, resource_id: int | str) -> Any:  # noqa: ANN401
        """Delete a resource. Always hits the network."""
        return await self._mutate(
            "delete",
            "DELETE",
            self.spec.detail_path(resource_id),
            resource_id=resource_id,
        )


class FileResourceClient(ResourceClient):
    """Files are created by multipart upload rather than a JSON body."""

    async def list_for_project(
        self,
        project_id: int | str,
        page: int = 1,
        page_size: int | None = None,
        use_cache: bool = True,
    ) -> Any:  # noqa: ANN401
        """One page of the files attached to a project."""
        return await self.list(
            page=page,
            page_size=page_size,
            use_cache=use_cache,
            filters={"project_id": project_id},
        )

    async def upload(
        self,
        filename: str,
        content: bytes,
        content_type: str = "application/octet-stream",
        fields: dict[str, Any] | None = None,
    ) -> Any:  # noqa: ANN401
        """Upload a file as ``multipart/form-data``."""
        return await self._mutate(
            "upload",
            "POST",
            self.spec.list_path,
            files={"file": (filename, content, content_type)},
            data=fields,
        )
