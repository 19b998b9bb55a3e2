"""Redis infrastructure for lofty_chat (optional)."""

from lofty_chat.infra.redis.client import RedisClient
from lofty_chat.infra.redis.store import RedisKeyValueStore

__all__ = ["RedisClient", "RedisKeyValueStore"]
