"""Read capabilities consumed by the list and detail controllers."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Protocol, runtime_checkable

if TYPE_CHECKING:
    from suitedash_core.models.resource import ResourceSpec


@runtime_checkable
class ListSource(Protocol):
    """Anything that can fetch one page of a resource list."""

    spec: ResourceSpec

    async def list(
        self,
        page: int = 1,
        page_size: int | None = None,
        use_cache: bool = True,
    ) -> Any:  # noqa: ANN401
        """Return the raw ``{<plural>: [...]}`` envelope for one page."""
        ...


@runtime_checkable
class DetailSource(Protocol):
    """Anything that can fetch a single resource by id."""

    spec: ResourceSpec

    async def get_by_id(self, resource_id: int | str, use_cache: bool = True) -> Any:  # noqa: ANN401
        """Return the raw detail body for one resource."""
        ...
