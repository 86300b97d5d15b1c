"""Single configured HTTP client for the SuiteDash secure API."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

import httpx
import structlog

from suitedash_core.constants import (
    PUBLIC_ID_HEADER,
    RATE_LIMIT_STATUS,
    SECRET_KEY_HEADER,
)
from suitedash_core.exceptions import TransportError

if TYPE_CHECKING:
    from suitedash_core.config.settings import Settings

logger = structlog.get_logger()


class ApiTransport:
    """httpx client carrying the fixed credentials, timeout and rate-limit hook.

    No retries happen here. A 429 is logged and counted, then raised like
    any other HTTP failure so callers decide what to do about it.
    """

    def __init__(
        self,
        base_url: str,
        public_id: str,
        secret_key: str,
        timeout_seconds: float,
        http_transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        """Initialize the underlying AsyncClient.

        ``http_transport`` replaces the network layer, e.g. with
        ``httpx.MockTransport`` in tests.
        """
        self.rate_limit_hits = 0
        self._client = httpx.AsyncClient(
            base_url=base_url,
            headers={
                "Accept": "application/json",
                PUBLIC_ID_HEADER: public_id,
                SECRET_KEY_HEADER: secret_key,
            },
            timeout=timeout_seconds,
            transport=http_transport,
            event_hooks={"response": [self._on_response]},
        )

    async def _on_response(self, response: httpx.Response) -> None:
        """Emit the rate-limit signal before the error propagates."""
        if response.status_code == RATE_LIMIT_STATUS:
            self.rate_limit_hits += 1
            logger.warning(
                "rate_limit_exceeded",
                method=response.request.method,
                url=str(response.request.url),
                retry_after=response.headers.get("Retry-After"),
                hits=self.rate_limit_hits,
            )

    async def send(
        self,
        method: str,
        path: str,
        *,
        params: dict[str, Any] | None = None,
        json: Any = None,  # noqa: ANN401
        data: dict[str, Any] | None = None,
        files: dict[str, Any] | None = None,
    ) -> httpx.Response:
        """Send a request and return the successful response.

        Raises TransportError for non-2xx statuses and network failures.
        """
        try:
            response = await self._client.request(
                method, path, params=params, json=json, data=data, files=files
            )
            response.raise_for_status()
        except httpx.HTTPStatusError as e:
            status = e.response.status_code
            msg = f"{method} {path} failed with HTTP {status}"
            raise TransportError(
                msg, status_code=status, code=e.response.reason_phrase
            ) from e
        except httpx.RequestError as e:
            msg = f"{method} {path} failed: {e!r}"
            raise TransportError(msg, code=type(e).__name__) from e
        return response

    async def request(
        self,
        method: str,
        path: str,
        *,
        params: dict[str, Any] | None = None,
        json: Any = None,  # noqa: ANN401
        data: dict[str, Any] | None = None,
        files: dict[str, Any] | None = None,
    ) -> Any:  # noqa: ANN401
        """Send a request and return the decoded JSON body (None when empty)."""
        response = await self.send(
            method, path, params=params, json=json, data=data, files=files
        )
        if not response.content:
            return None
        try:
            return response.json()
        except ValueError as e:
            msg = f"{method} {path} returned a non-JSON body"
            raise TransportError(
                msg, status_code=response.status_code, code="InvalidJSON"
            ) from e

    async def aclose(self) -> None:
        """Close the connection pool."""
        await self._client.aclose()


def create_transport(
    settings: Settings,
    http_transport: httpx.AsyncBaseTransport | None = None,
) -> ApiTransport:
    """Build the API transport from settings."""
    return ApiTransport(
        base_url=settings.api_base_url,
        public_id=settings.public_id.get_secret_value(),
        secret_key=settings.secret_key.get_secret_value(),
        timeout_seconds=settings.request_timeout_seconds,
        http_transport=http_transport,
    )
