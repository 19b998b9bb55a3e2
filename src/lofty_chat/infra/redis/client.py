"""Redis client for lofty_chat.

Thin async wrapper over ``redis.asyncio`` used by the Redis key-value
store. The redis package is an optional extra and is imported on connect.
"""

from typing import TYPE_CHECKING, Any

from lofty_chat.config import RedisSettings
from lofty_chat.logging import get_logger
from lofty_chat.utils.imports import optional_import

if TYPE_CHECKING:
    from redis.asyncio import Redis

__all__ = [
    "RedisClient",
]

logger = get_logger(__name__)

get_async_redis = optional_import("redis.asyncio", "Redis", extra="redis")


class RedisClient:
    """Async Redis client wrapper.

    Operations never raise: reads return None and writes return False when
    Redis is not configured or unreachable.

    Example:
        client = RedisClient(settings)
        if await client.connect():
            await client.set("lofty:sessions", "[]")
        await client.disconnect()
    """

    def __init__(self, settings: RedisSettings) -> None:
        """Initialize client with settings.

        Args:
            settings: Redis connection settings
        """
        self._settings = settings
        self._redis: "Redis | None" = None
        self._connected = False

    @property
    def is_enabled(self) -> bool:
        """Check if Redis is enabled in configuration."""
        return self._settings.enabled and self._settings.url is not None

    @property
    def is_connected(self) -> bool:
        return self._connected

    async def connect(self) -> bool:
        """Initialize connection to Redis.

        Returns:
            True if connected successfully, False otherwise
        """
        if self._redis is not None:
            return self._connected

        if not self.is_enabled:
            logger.info("redis_disabled", reason="not configured")
            return False

        try:
            Redis = get_async_redis()  # noqa: N806
            self._redis = Redis.from_url(self._settings.url, decode_responses=True)
            await self._redis.ping()
            self._connected = True
            logger.info("connected_to_redis")
            return True
        except Exception as e:
            logger.warning("redis_connection_failed", error=str(e))
            self._redis = None
            self._connected = False
            return False

    async def disconnect(self) -> None:
        """Close connection to Redis."""
        if self._redis:
            await self._redis.aclose()
            self._redis = None
            self._connected = False
            logger.info("disconnected_from_redis")

    async def get(self, key: str) -> str | None:
        """Get a value, or None if missing or not connected."""
        if not self._connected or not self._redis:
            return None
        try:
            return await self._redis.get(key)
        except Exception as e:
            logger.warning("redis_get_error", redis_key=key, error=str(e))
            return None

    async def set(self, key: str, value: str) -> bool:
        """Set a value.

        Returns:
            True if successful, False otherwise
        """
        if not self._connected or not self._redis:
            return False
        try:
            await self._redis.set(key, value)
            return True
        except Exception as e:
            logger.warning("redis_set_error", redis_key=key, error=str(e))
            return False

    async def delete(self, key: str) -> bool:
        """Delete a key.

        Returns:
            True if successful, False otherwise
        """
        if not self._connected or not self._redis:
            return False
        try:
            await self._redis.delete(key)
            return True
        except Exception as e:
            logger.warning("redis_delete_error", redis_key=key, error=str(e))
            return False

    async def __aenter__(self) -> "RedisClient":
        await self.connect()
        return self

    async def __aexit__(self, exc_type: Any, exc_val: Any, exc_tb: Any) -> None:
        await self.disconnect()
