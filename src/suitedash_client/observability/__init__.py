"""Observability: structured logging."""

from suitedash_client.observability.logging import (
    bind_resource_context,
    clear_resource_context,
    configure_logging,
)

__all__ = [
    "bind_resource_context",
    "clear_resource_context",
    "configure_logging",
]
