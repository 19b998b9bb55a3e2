"""Storage interface for lofty_chat.

This module defines the Protocol for the durable key-value store that
sessions and settings are mirrored to.
"""

from typing import ClassVar, Protocol, runtime_checkable

__all__ = [
    "KeyValueStoreInterface",
]


@runtime_checkable
class KeyValueStoreInterface(Protocol):
    """Contract for a string-keyed store of text blobs.

    Values are opaque text (JSON produced by the PersistenceAdapter).
    Implementations raise StorageError when a write cannot be completed.
    """

    config_class: ClassVar[type | None] = None

    async def get(self, key: str) -> str | None:
        """Read a value.

        Args:
            key: Store key

        Returns:
            Stored text, or None if absent
        """
        ...

    async def set(self, key: str, value: str) -> None:
        """Write a value, replacing any previous one.

        Args:
            key: Store key
            value: Text to store
        """
        ...

    async def delete(self, key: str) -> None:
        """Remove a key if present.

        Args:
            key: Store key
        """
        ...
