"""In-process dict implementation of KeyValueStorage."""

from __future__ import annotations


class InMemoryStorage:
    """Non-durable storage for tests and throwaway sessions."""

    def __init__(self, initial: dict[str, str] | None = None) -> None:
        self._data: dict[str, str] = dict(initial or {})

    async def get_item(self, key: str) -> str | None:
        return self._data.get(key)

    async def set_item(self, key: str, value: str) -> None:
        self._data[key] = value

    async def remove_item(self, key: str) -> None:
        self._data.pop(key, None)

    async def multi_remove(self, keys: list[str]) -> None:
        for key in keys:
            self._data.pop(key, None)

    async def all_keys(self) -> list[str]:
        return list(self._data)

    async def close(self) -> None:
        """Nothing to release; data lives as long as the instance."""
