"""App-level connection state: credential probe and forced refresh."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

import structlog

from suitedash_core.constants import CONNECTION_FAILED_MESSAGE
from suitedash_core.exceptions import AuthError, SuiteDashError

if TYPE_CHECKING:
    from suitedash_client.api import SuiteDashApi

logger = structlog.get_logger()


@dataclass
class ConnectionState:
    """What the app shell shows before any resource screen."""

    is_loading: bool = True
    is_authenticated: bool = False
    error: str | None = None


class ConnectionMonitor:
    """Owns the connection state for the whole app, not per resource."""

    def __init__(self, api: SuiteDashApi) -> None:
        """Initialize with the API facade."""
        self._api = api
        self.state = ConnectionState()

    async def connect(self) -> ConnectionState:
        """Probe the API and record whether the credentials work."""
        self.state.is_loading = True
        self.state.error = None
        try:
            authenticated = await self._api.check_auth()
        except SuiteDashError as e:
            logger.error("connection_check_errored", error=str(e))
            authenticated = False
        finally:
            self.state.is_loading = False

        self.state.is_authenticated = authenticated
        if not authenticated:
            self.state.error = CONNECTION_FAILED_MESSAGE
        logger.info("connection_checked", authenticated=authenticated)
        return self.state

    async def refresh_data(self) -> ConnectionState:
        """Drop all cached responses, then re-probe the API."""
        await self._api.clear_cache()
        return await self.connect()

    def require_auth(self) -> None:
        """Raise AuthError unless the last probe succeeded."""
        if not self.state.is_authenticated:
            raise AuthError(self.state.error or CONNECTION_FAILED_MESSAGE)
