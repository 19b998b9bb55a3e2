"""Redis-backed key-value store for lofty_chat.

A durable mirror for a single client process. There is no locking:
concurrent writers to the same prefix are last-write-wins.
Keys are namespaced with the configured prefix.
"""

from typing import Any, Self

from lofty_chat.config import RedisSettings
from lofty_chat.errors import StorageError
from lofty_chat.infra.redis.client import RedisClient
from lofty_chat.interfaces.storage import KeyValueStoreInterface

__all__ = [
    "RedisKeyValueStore",
]


class RedisKeyValueStore(KeyValueStoreInterface):
    """Redis implementation of KeyValueStoreInterface.

    Reads degrade to "absent" when Redis is down; writes raise StorageError
    so the caller can log the lost write.
    """

    config_class = RedisSettings

    def __init__(self, client: RedisClient, key_prefix: str = "lofty:") -> None:
        """Initialize store with a Redis client.

        Args:
            client: RedisClient (connected or not)
            key_prefix: Namespace prefix for every key
        """
        self._client = client
        self._prefix = key_prefix
        self._owns_client = False

    @classmethod
    async def from_config(cls, config: RedisSettings) -> Self:
        """Factory method for LoftyChat instantiation.

        Creates and connects a RedisClient owned by the store.
        """
        client = RedisClient(config)
        await client.connect()
        instance = cls(client, key_prefix=config.key_prefix)
        instance._owns_client = True
        return instance

    @classmethod
    async def from_dict(cls, config: dict[str, Any]) -> Self:
        """Factory method for a custom config dict."""
        return await cls.from_config(RedisSettings(**config))

    async def close(self) -> None:
        """Disconnect the client if this store created it."""
        if self._owns_client:
            await self._client.disconnect()

    def _key(self, key: str) -> str:
        return f"{self._prefix}{key}"

    async def get(self, key: str) -> str | None:
        return await self._client.get(self._key(key))

    async def set(self, key: str, value: str) -> None:
        if not await self._client.set(self._key(key), value):
            raise StorageError(f"Redis write failed for key: {key}")

    async def delete(self, key: str) -> None:
        if not await self._client.delete(self._key(key)):
            raise StorageError(f"Redis delete failed for key: {key}")
