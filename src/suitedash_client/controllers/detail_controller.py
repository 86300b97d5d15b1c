"""Single-resource detail controller."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

import structlog
from pydantic import ValidationError

from suitedash_core.exceptions import TransportError
from suitedash_core.models.resource import RESOURCE_MODELS
from suitedash_core.state import DetailState, DetailStatus

if TYPE_CHECKING:
    from suitedash_core.interfaces.sources import DetailSource

logger = structlog.get_logger()


class DetailController:
    """Loads one resource for a detail view, guarded against late responses."""

    def __init__(self, source: DetailSource, resource_id: int | str) -> None:
        """Initialize with a detail source and the id to show."""
        self._source = source
        self.resource_id = resource_id
        self.state = DetailState()
        self._generation = 0
        self._alive = True

    async def load(self, use_cache: bool = True) -> DetailState:
        """Fetch the resource and settle into READY, NOT_FOUND or ERROR."""
        if not self._alive:
            return self.state

        self._generation += 1
        generation = self._generation
        spec = self._source.spec
        self.state.status = DetailStatus.LOADING
        try:
            data = await self._source.get_by_id(self.resource_id, use_cache=use_cache)
        except TransportError as e:
            if self._is_current(generation):
                self.state.status = DetailStatus.ERROR
                self.state.error_message = f"Failed to load {spec.singular} details."
                self.state.last_error = e
                logger.warning(
                    "detail_load_failed",
                    resource=spec.plural,
                    resource_id=self.resource_id,
                    status_code=e.status_code,
                )
            return self.state

        if not self._is_current(generation):
            return self.state

        body = self._unwrap(data)
        model = RESOURCE_MODELS[spec.resource_type]
        try:
            resource = model.model_validate(body) if body else None
        except ValidationError as e:
            logger.warning(
                "detail_invalid_body",
                resource=spec.plural,
                resource_id=self.resource_id,
                error=str(e),
            )
            resource = None

        self.state.resource = resource
        self.state.error_message = None
        self.state.last_error = None
        self.state.status = DetailStatus.READY if resource else DetailStatus.NOT_FOUND
        return self.state

    def unmount(self) -> None:
        """Detach from the view; late responses are dropped from now on."""
        self._alive = False
        self._generation += 1

    def _unwrap(self, data: Any) -> dict[str, Any] | None:  # noqa: ANN401
        """Accept both ``{"contact": {...}}`` envelopes and bare bodies."""
        if not isinstance(data, dict):
            return None
        inner = data.get(self._source.spec.singular)
        if isinstance(inner, dict):
            return inner
        return data

    def _is_current(self, generation: int) -> bool:
        return self._alive and generation == self._generation
