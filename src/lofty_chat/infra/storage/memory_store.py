"""In-memory key-value store for lofty_chat.

Useful for tests and for embedding the client where nothing should be
written to disk. State is lost when the process exits.
"""

from typing import Any, Self

from lofty_chat.interfaces.storage import KeyValueStoreInterface

__all__ = [
    "MemoryKeyValueStore",
]


class MemoryKeyValueStore(KeyValueStoreInterface):
    """Dict-backed implementation of KeyValueStoreInterface."""

    config_class = None

    def __init__(self, initial: dict[str, str] | None = None) -> None:
        self._data: dict[str, str] = dict(initial or {})

    @classmethod
    async def from_dict(cls, config: dict[str, Any]) -> Self:
        """Factory method for LoftyChat instantiation.

        Args:
            config: Optional ``initial`` mapping of pre-seeded values
        """
        return cls(config.get("initial"))

    async def close(self) -> None:
        pass

    async def get(self, key: str) -> str | None:
        return self._data.get(key)

    async def set(self, key: str, value: str) -> None:
        self._data[key] = value

    async def delete(self, key: str) -> None:
        self._data.pop(key, None)

    def snapshot(self) -> dict[str, str]:
        """Copy of all stored values."""
        return dict(self._data)
