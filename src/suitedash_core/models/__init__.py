"""Domain models for the SuiteDash client."""

from suitedash_core.models.resource import (
    RESOURCE_MODELS,
    RESOURCE_SPECS,
    Contact,
    File,
    PageRequest,
    Project,
    Resource,
    ResourceSpec,
    ResourceType,
    Task,
    all_cache_prefixes,
)

__all__ = [
    "RESOURCE_MODELS",
    "RESOURCE_SPECS",
    "Contact",
    "File",
    "PageRequest",
    "Project",
    "Resource",
    "ResourceSpec",
    "ResourceType",
    "Task",
    "all_cache_prefixes",
]
