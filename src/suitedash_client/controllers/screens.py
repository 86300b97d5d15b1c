"""Per-resource list screen configuration."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from suitedash_core.constants import DEFAULT_PAGE_SIZE
from suitedash_core.models.resource import ResourceType


@dataclass(frozen=True)
class ScreenConfig:
    """What a list row shows for one resource type."""

    resource_type: ResourceType
    title_fields: tuple[str, ...]
    subtitle_field: str
    subtitle_label: str | None = None
    page_size: int = DEFAULT_PAGE_SIZE

    @property
    def empty_text(self) -> str:
        return f"No {self.resource_type.value} found"

    @property
    def error_text(self) -> str:
        return f"Failed to load {self.resource_type.value}. Please try again."

    def row_title(self, item: dict[str, Any]) -> str:
        """Title fields joined with spaces; blanks skipped."""
        parts = [str(item[name]) for name in self.title_fields if item.get(name)]
        return " ".join(parts)

    def row_subtitle(self, item: dict[str, Any]) -> str:
        value = item.get(self.subtitle_field)
        text = "" if value is None else str(value)
        if self.subtitle_label:
            return f"{self.subtitle_label}: {text}"
        return text


SCREEN_CONFIGS: dict[ResourceType, ScreenConfig] = {
    ResourceType.CONTACTS: ScreenConfig(
        resource_type=ResourceType.CONTACTS,
        title_fields=("first_name", "last_name"),
        subtitle_field="email",
    ),
    ResourceType.PROJECTS: ScreenConfig(
        resource_type=ResourceType.PROJECTS,
        title_fields=("name",),
        subtitle_field="status",
        subtitle_label="Status",
    ),
    ResourceType.FILES: ScreenConfig(
        resource_type=ResourceType.FILES,
        title_fields=("name",),
        subtitle_field="type",
        subtitle_label="Type",
    ),
    ResourceType.TASKS: ScreenConfig(
        resource_type=ResourceType.TASKS,
        title_fields=("name",),
        subtitle_field="status",
        subtitle_label="Status",
    ),
}
