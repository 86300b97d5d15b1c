"""Shared constants for the SuiteDash client."""

from __future__ import annotations

DEFAULT_API_BASE_URL = "https://app.suitedash.com/secure-api"
DEFAULT_REQUEST_TIMEOUT_SECONDS = 15.0

# Credential headers expected by the secure API
PUBLIC_ID_HEADER = "X-Public-ID"
SECRET_KEY_HEADER = "X-Secret-Key"

DEFAULT_PAGE_SIZE = 20
DEFAULT_CACHE_TTL_MINUTES = 10

RATE_LIMIT_STATUS = 429

AUTH_PROBE_PATH = "/contacts"
CONNECTION_FAILED_MESSAGE = "Failed to connect to SuiteDash"

VERSION = "0.1.0"
