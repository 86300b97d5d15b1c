"""Abstract durable key-value storage interface."""

from __future__ import annotations

from typing import Protocol, runtime_checkable


@runtime_checkable
class KeyValueStorage(Protocol):
    """String-keyed, string-valued durable store."""

    async def get_item(self, key: str) -> str | None:
        """Retrieve a value by key, or None if not found."""
        ...

    async def set_item(self, key: str, value: str) -> None:
        """Store a value, overwriting any previous one."""
        ...

    async def remove_item(self, key: str) -> None:
        """Delete a key. Missing keys are ignored."""
        ...

    async def multi_remove(self, keys: list[str]) -> None:
        """Delete several keys."""
        ...

    async def all_keys(self) -> list[str]:
        """List every stored key."""
        ...

    async def close(self) -> None:
        """Release the underlying connection or file handles."""
        ...
