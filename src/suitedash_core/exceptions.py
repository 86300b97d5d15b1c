"""Custom exception hierarchy for the SuiteDash client."""

from __future__ import annotations

from suitedash_core.constants import RATE_LIMIT_STATUS


class SuiteDashError(Exception):
    """Base exception for all SuiteDash client errors."""


class TransportError(SuiteDashError):
    """Raised when an API request fails at the network or HTTP level.

    ``status_code`` is the HTTP status when the server answered, ``None``
    otherwise. ``code`` names the underlying failure (e.g. ``ConnectTimeout``).
    """

    def __init__(
        self,
        message: str,
        *,
        status_code: int | None = None,
        code: str | None = None,
    ) -> None:
        super().__init__(message)
        self.status_code = status_code
        self.code = code

    @property
    def is_rate_limited(self) -> bool:
        """True when the server rejected the request with HTTP 429."""
        return self.status_code == RATE_LIMIT_STATUS


class CacheError(SuiteDashError):
    """Raised when local storage I/O or decoding fails. Never leaves the cache layer."""


class AuthError(SuiteDashError):
    """Raised when the credential probe against the API fails."""
