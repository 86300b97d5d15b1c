"""Resource types, their API layout, and record models."""

from __future__ import annotations

from dataclasses import dataclass
from enum import StrEnum

from pydantic import BaseModel, ConfigDict, Field

from suitedash_core.constants import DEFAULT_PAGE_SIZE


class ResourceType(StrEnum):
    """Resource collections exposed by the SuiteDash API."""

    CONTACTS = "contacts"
    PROJECTS = "projects"
    FILES = "files"
    TASKS = "tasks"


@dataclass(frozen=True)
class ResourceSpec:
    """How one resource type is addressed on the API and in the cache."""

    resource_type: ResourceType
    singular: str
    detail_path_template: str

    @property
    def plural(self) -> str:
        """Collection name; doubles as the response envelope key."""
        return self.resource_type.value

    @property
    def list_path(self) -> str:
        """Path of the paginated list endpoint."""
        return f"/{self.plural}"

    def detail_path(self, resource_id: int | str) -> str:
        """Path of the single-resource endpoint."""
        return self.detail_path_template.format(id=resource_id)

    @property
    def cache_prefixes(self) -> tuple[str, str]:
        """Key prefixes of the list-page and detail cache entries."""
        return (f"{self.plural}_", f"{self.singular}_")

    @property
    def snapshot_key(self) -> str:
        """Key of the durable last-good first page; outside ``cache_prefixes``."""
        return self.plural


RESOURCE_SPECS: dict[ResourceType, ResourceSpec] = {
    ResourceType.CONTACTS: ResourceSpec(
        resource_type=ResourceType.CONTACTS,
        singular="contact",
        detail_path_template="/contact/{id}",
    ),
    ResourceType.PROJECTS: ResourceSpec(
        resource_type=ResourceType.PROJECTS,
        singular="project",
        detail_path_template="/projects/{id}",
    ),
    ResourceType.FILES: ResourceSpec(
        resource_type=ResourceType.FILES,
        singular="file",
        detail_path_template="/files/{id}",
    ),
    ResourceType.TASKS: ResourceSpec(
        resource_type=ResourceType.TASKS,
        singular="task",
        detail_path_template="/tasks/{id}",
    ),
}


def all_cache_prefixes() -> tuple[str, ...]:
    """Every resource-owned cache key prefix, used for bulk invalidation."""
    return tuple(prefix for spec in RESOURCE_SPECS.values() for prefix in spec.cache_prefixes)


class PageRequest(BaseModel):
    """One page of a resource list."""

    resource_type: ResourceType = Field(description="Collection being paged")
    page: int = Field(default=1, ge=1, description="1-based page number")
    page_size: int = Field(
        default=DEFAULT_PAGE_SIZE, ge=1, description="Items requested per page"
    )


class Resource(BaseModel):
    """A server-defined record. Only ``id`` is guaranteed; other fields pass through."""

    model_config = ConfigDict(extra="allow")

    id: int | str = Field(description="Server-assigned identifier")


class Contact(Resource):
    """A CRM contact."""

    first_name: str | None = None
    last_name: str | None = None
    email: str | None = None
    phone: str | None = None

    @property
    def full_name(self) -> str:
        """First and last name joined, skipping blanks."""
        return " ".join(part for part in (self.first_name, self.last_name) if part)


class Project(Resource):
    """A client project."""

    name: str | None = None
    status: str | None = None


class File(Resource):
    """An uploaded file."""

    name: str | None = None
    type: str | None = None


class Task(Resource):
    """A project task."""

    name: str | None = None
    status: str | None = None


RESOURCE_MODELS: dict[ResourceType, type[Resource]] = {
    ResourceType.CONTACTS: Contact,
    ResourceType.PROJECTS: Project,
    ResourceType.FILES: File,
    ResourceType.TASKS: Task,
}
