"""Screen state owned by a single list or detail controller."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import StrEnum
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from suitedash_core.exceptions import SuiteDashError
    from suitedash_core.models.resource import Resource


class ListStatus(StrEnum):
    """Lifecycle of a paginated list."""

    IDLE = "idle"
    LOADING_INITIAL = "loading_initial"
    READY = "ready"
    LOADING_MORE = "loading_more"
    REFRESHING = "refreshing"
    ERROR = "error"


class DetailStatus(StrEnum):
    """Lifecycle of a single-resource view."""

    IDLE = "idle"
    LOADING = "loading"
    READY = "ready"
    NOT_FOUND = "not_found"
    ERROR = "error"


@dataclass
class ListState:
    """Visible state of one paginated list. Created on mount, discarded on unmount."""

    items: list[dict[str, Any]] = field(default_factory=list)
    current_page: int = 1
    has_more: bool = True
    status: ListStatus = ListStatus.IDLE
    last_error: SuiteDashError | None = None
    showing_stale: bool = False

    @property
    def is_loading_initial(self) -> bool:
        """True while the first page is being fetched."""
        return self.status == ListStatus.LOADING_INITIAL

    @property
    def is_refreshing(self) -> bool:
        """True while a pull-to-refresh is in flight."""
        return self.status == ListStatus.REFRESHING

    @property
    def is_loading_more(self) -> bool:
        """True while a follow-up page is in flight."""
        return self.status == ListStatus.LOADING_MORE

    @property
    def shows_error_screen(self) -> bool:
        """Full-screen error with retry: an error and nothing to show."""
        return self.status == ListStatus.ERROR and not self.items


@dataclass
class DetailState:
    """Visible state of one resource detail view."""

    resource: Resource | None = None
    status: DetailStatus = DetailStatus.IDLE
    error_message: str | None = None
    last_error: SuiteDashError | None = None
