"""Paginated list controller shared by every resource list screen."""

from __future__ import annotations

import asyncio
from typing import TYPE_CHECKING, Any

import structlog

from suitedash_core.constants import DEFAULT_PAGE_SIZE
from suitedash_core.exceptions import TransportError
from suitedash_core.state import ListState, ListStatus

if TYPE_CHECKING:
    from suitedash_core.interfaces.sources import ListSource
    from suitedash_core.models.resource import ResourceSpec
    from suitedash_infra.cache.snapshot_store import SnapshotStore

logger = structlog.get_logger()


class PaginatedListController:
    """Drives incremental page loading for one list screen.

    Lifecycle:
        IDLE -> LOADING_INITIAL -> READY | ERROR
        READY -> LOADING_MORE -> READY        (append path)
        READY | ERROR -> REFRESHING -> READY | ERROR   (reset path)

    Every reset path bumps a generation counter; a response is applied only
    if the generation it was issued under is still current and the
    controller has not been unmounted.
    """

    def __init__(
        self,
        source: ListSource,
        snapshots: SnapshotStore,
        page_size: int = DEFAULT_PAGE_SIZE,
    ) -> None:
        """Initialize with a page source and the durable snapshot store."""
        self._source = source
        self._snapshots = snapshots
        self.page_size = page_size
        self.state = ListState()
        self._generation = 0
        self._alive = True
        self._log = logger.bind(resource=source.spec.plural)

    @property
    def spec(self) -> ResourceSpec:
        return self._source.spec

    @property
    def is_mounted(self) -> bool:
        return self._alive

    async def mount(self) -> ListState:
        """Show the last good snapshot at once, then load page 1 from the API.

        The network result always wins over the snapshot. A failed load
        leaves any snapshot items on screen and enters ERROR.
        """
        if not self._alive or self.state.status != ListStatus.IDLE:
            self._log.debug("list_mount_skipped", status=self.state.status)
            return self.state

        generation = self._next_generation()
        self.state.status = ListStatus.LOADING_INITIAL
        fetch = asyncio.create_task(self._fetch_page(1, use_cache=True))
        try:
            stale = await self._snapshots.load(self.spec.snapshot_key)
            if stale is not None and self._is_current(generation):
                self.state.items = stale
                self.state.showing_stale = True
                self._log.debug("list_snapshot_shown", count=len(stale))
            items = await fetch
        except TransportError as e:
            if self._is_current(generation):
                self.state.status = ListStatus.ERROR
                self.state.last_error = e
                self._log.warning(
                    "list_initial_load_failed",
                    status_code=e.status_code,
                    kept_items=len(self.state.items),
                )
            return self.state
        except asyncio.CancelledError:
            fetch.cancel()
            raise

        if self._is_current(generation):
            await self._apply_first_page(items)
        return self.state

    async def load_more(self) -> ListState:
        """Append the next page when the end of the list is reached.

        A no-op unless READY with ``has_more``; this is what keeps at most
        one page request in flight. Snapshot items are never extended. A
        failure keeps the items and returns to READY so the next call
        retries the same page.
        """
        if (
            not self._alive
            or self.state.status != ListStatus.READY
            or not self.state.has_more
            or self.state.showing_stale
        ):
            self._log.debug(
                "list_load_more_skipped",
                status=self.state.status,
                has_more=self.state.has_more,
                stale=self.state.showing_stale,
            )
            return self.state

        generation = self._generation
        next_page = self.state.current_page + 1
        self.state.status = ListStatus.LOADING_MORE
        try:
            items = await self._fetch_page(next_page, use_cache=True)
        except TransportError as e:
            if self._is_current(generation):
                self.state.status = ListStatus.READY
                self.state.last_error = e
                self._log.warning(
                    "list_load_more_failed", page=next_page, status_code=e.status_code
                )
            return self.state

        if self._is_current(generation):
            self.state.items.extend(items)
            self.state.current_page = next_page
            self.state.has_more = self._is_full_page(items)
            self.state.last_error = None
            self.state.status = ListStatus.READY
            self._log.info(
                "list_page_appended",
                page=next_page,
                count=len(items),
                total=len(self.state.items),
                has_more=self.state.has_more,
            )
        return self.state

    async def refresh(self) -> ListState:
        """Reload page 1 from the server, bypassing the cache.

        Supersedes any in-flight request. On failure the previous items stay
        visible. The state is READY only when those items came from the
        server; with nothing to show or only a snapshot it stays ERROR.
        """
        if not self._alive or self.state.status == ListStatus.REFRESHING:
            self._log.debug("list_refresh_skipped", status=self.state.status)
            return self.state

        generation = self._next_generation()
        self.state.status = ListStatus.REFRESHING
        try:
            items = await self._fetch_page(1, use_cache=False)
        except TransportError as e:
            if self._is_current(generation):
                self.state.last_error = e
                self.state.status = (
                    ListStatus.READY
                    if self.state.items and not self.state.showing_stale
                    else ListStatus.ERROR
                )
                self._log.warning(
                    "list_refresh_failed",
                    status_code=e.status_code,
                    kept_items=len(self.state.items),
                )
            return self.state

        if self._is_current(generation):
            await self._apply_first_page(items)
        return self.state

    def unmount(self) -> None:
        """Detach from the view; late responses are dropped from now on."""
        self._alive = False
        self._generation += 1
        self._log.debug("list_unmounted")

    async def _fetch_page(self, page: int, *, use_cache: bool) -> list[dict[str, Any]]:
        data = await self._source.list(page=page, page_size=self.page_size, use_cache=use_cache)
        return self._extract_items(data)

    def _extract_items(self, data: Any) -> list[dict[str, Any]]:  # noqa: ANN401
        """Pull the item list out of a ``{<plural>: [...]}`` envelope."""
        if isinstance(data, dict):
            items = data.get(self.spec.plural) or []
        else:
            items = []
        return list(items)

    async def _apply_first_page(self, items: list[dict[str, Any]]) -> None:
        """Replace the visible sequence with a fresh page 1 and persist it."""
        self.state.items = items
        self.state.current_page = 1
        self.state.has_more = self._is_full_page(items)
        self.state.last_error = None
        self.state.showing_stale = False
        self.state.status = ListStatus.READY
        self._log.info("list_first_page_loaded", count=len(items), has_more=self.state.has_more)
        await self._snapshots.save(self.spec.snapshot_key, items)

    def _is_full_page(self, items: list[dict[str, Any]]) -> bool:
        """A full page means more may exist; only a short page is terminal."""
        return len(items) == self.page_size

    def _next_generation(self) -> int:
        self._generation += 1
        return self._generation

    def _is_current(self, generation: int) -> bool:
        return self._alive and generation == self._generation
