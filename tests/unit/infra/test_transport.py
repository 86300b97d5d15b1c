"""Tests for the SuiteDash HTTP transport."""

from __future__ import annotations

from collections.abc import AsyncGenerator
from unittest.mock import MagicMock

import httpx
import pytest
from structlog.testing import capture_logs

from suitedash_core.exceptions import TransportError
from suitedash_infra.http.transport import ApiTransport, create_transport
from tests.mocks.mock_settings import TEST_PUBLIC_ID, TEST_SECRET_KEY
from tests.mocks.mock_transport import ApiStub


@pytest.fixture
async def transport(
    mock_settings: MagicMock, api_stub: ApiStub
) -> AsyncGenerator[ApiTransport, None]:
    """Create an ApiTransport over the stub."""
    client = create_transport(mock_settings, http_transport=api_stub.transport)
    yield client
    await client.aclose()


@pytest.mark.unit
class TestApiTransport:
    """Test request building and error mapping."""

    @pytest.mark.asyncio
    async def test_sends_credentials_and_base_url(
        self, transport: ApiTransport, api_stub: ApiStub
    ) -> None:
        """Every request carries both credential headers under the base path."""
        api_stub.on("GET", "/contacts", json={"contacts": []})
        await transport.request("GET", "/contacts", params={"page": 1, "per_page": 20})

        request = api_stub.calls[0]
        assert request.headers["X-Public-ID"] == TEST_PUBLIC_ID
        assert request.headers["X-Secret-Key"] == TEST_SECRET_KEY
        assert request.headers["Accept"] == "application/json"
        assert request.url.host == "suitedash.test"
        assert request.url.path == "/secure-api/contacts"
        assert request.url.params["per_page"] == "20"

    @pytest.mark.asyncio
    async def test_returns_decoded_json(
        self, transport: ApiTransport, api_stub: ApiStub
    ) -> None:
        """Successful JSON bodies are decoded."""
        api_stub.on("GET", "/tasks", json={"tasks": [{"id": 1}]})
        assert await transport.request("GET", "/tasks") == {"tasks": [{"id": 1}]}

    @pytest.mark.asyncio
    async def test_empty_body_returns_none(
        self, transport: ApiTransport, api_stub: ApiStub
    ) -> None:
        """No-content responses decode to None."""
        api_stub.on("DELETE", "/tasks/1", status=204)
        assert await transport.request("DELETE", "/tasks/1") is None

    @pytest.mark.asyncio
    async def test_json_body_sent(self, transport: ApiTransport, api_stub: ApiStub) -> None:
        """JSON payloads are encoded with a JSON content type."""
        api_stub.on("POST", "/contacts", json={"contact": {"id": 5}})
        await transport.request("POST", "/contacts", json={"first_name": "Ann"})
        request = api_stub.calls[0]
        assert request.headers["Content-Type"] == "application/json"
        assert b"Ann" in request.content

    @pytest.mark.asyncio
    async def test_http_error_maps_to_transport_error(
        self, transport: ApiTransport, api_stub: ApiStub
    ) -> None:
        """Non-2xx status becomes TransportError carrying the status."""
        api_stub.on("GET", "/projects", status=500, json={"error": "boom"})
        with pytest.raises(TransportError) as exc_info:
            await transport.request("GET", "/projects")
        assert exc_info.value.status_code == 500
        assert isinstance(exc_info.value.__cause__, httpx.HTTPStatusError)

    @pytest.mark.asyncio
    async def test_network_error_maps_to_transport_error(
        self, transport: ApiTransport, api_stub: ApiStub
    ) -> None:
        """Connection failures carry the underlying error name, no status."""
        api_stub.fail("GET", "/files", httpx.ConnectTimeout)
        with pytest.raises(TransportError) as exc_info:
            await transport.request("GET", "/files")
        assert exc_info.value.status_code is None
        assert exc_info.value.code == "ConnectTimeout"

    @pytest.mark.asyncio
    async def test_non_json_body_raises(
        self, transport: ApiTransport, api_stub: ApiStub
    ) -> None:
        """HTML or garbage bodies are transport failures."""
        api_stub.on_call(
            "GET", "/tasks", lambda request: httpx.Response(200, text="<html>oops</html>")
        )
        with pytest.raises(TransportError, match="non-JSON"):
            await transport.request("GET", "/tasks")


@pytest.mark.unit
class TestRateLimitHook:
    """Test 429 detection."""

    @pytest.mark.asyncio
    async def test_rate_limit_logged_counted_and_propagated(
        self, transport: ApiTransport, api_stub: ApiStub
    ) -> None:
        """A 429 is logged and counted, then raised unchanged; no retry."""
        api_stub.on("GET", "/tasks", status=429, headers={"Retry-After": "30"})

        with capture_logs() as logs:
            with pytest.raises(TransportError) as exc_info:
                await transport.request("GET", "/tasks")

        assert exc_info.value.is_rate_limited
        assert transport.rate_limit_hits == 1
        assert len(api_stub.calls_to("GET", "/tasks")) == 1
        events = [entry for entry in logs if entry["event"] == "rate_limit_exceeded"]
        assert events and events[0]["retry_after"] == "30"

    @pytest.mark.asyncio
    async def test_other_errors_not_counted(
        self, transport: ApiTransport, api_stub: ApiStub
    ) -> None:
        """Only 429 bumps the counter."""
        api_stub.on("GET", "/tasks", status=503)
        with pytest.raises(TransportError):
            await transport.request("GET", "/tasks")
        assert transport.rate_limit_hits == 0
