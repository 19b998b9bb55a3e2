"""Local key-value store backends for lofty_chat."""

from lofty_chat.infra.storage.file_store import JSONFileStore
from lofty_chat.infra.storage.memory_store import MemoryKeyValueStore

__all__ = ["JSONFileStore", "MemoryKeyValueStore"]
