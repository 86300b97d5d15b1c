"""Deterministic cache keys for API responses."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from suitedash_core.models.resource import all_cache_prefixes

if TYPE_CHECKING:
    from collections.abc import Mapping

    from suitedash_core.models.resource import ResourceSpec


def list_page_key(
    spec: ResourceSpec,
    page: int,
    page_size: int,
    filters: Mapping[str, Any] | None = None,
) -> str:
    """Key of one list page, e.g. ``tasks_p2_n20`` or ``files_p1_n20_project_id-7``.

    Filters are appended in name order so equal queries share one entry.
    """
    key = f"{spec.plural}_p{page}_n{page_size}"
    for name, value in sorted((filters or {}).items()):
        key += f"_{name}-{value}"
    return key


def detail_key(spec: ResourceSpec, resource_id: int | str) -> str:
    """Key of one resource body, e.g. ``contact_42``."""
    return f"{spec.singular}_{resource_id}"


def is_resource_key(key: str) -> bool:
    """True for keys owned by any resource's list or detail cache."""
    return key.startswith(all_cache_prefixes())


def is_list_page_key(spec: ResourceSpec, key: str) -> bool:
    """True for list-page keys of one resource type."""
    return key.startswith(f"{spec.plural}_p")
