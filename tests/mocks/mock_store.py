"""Key-value stores with failure modes for testing."""

from typing import Any, Self

from lofty_chat.errors import StorageError
from lofty_chat.infra.storage.memory_store import MemoryKeyValueStore


class FailingKeyValueStore(MemoryKeyValueStore):
    """Memory store whose writes fail while ``fail_writes`` is set."""

    def __init__(self, initial: dict[str, str] | None = None) -> None:
        super().__init__(initial)
        self.fail_writes = True
        self.write_attempts = 0

    @classmethod
    async def from_dict(cls, config: dict[str, Any]) -> Self:
        return cls(config.get("initial"))

    async def set(self, key: str, value: str) -> None:
        self.write_attempts += 1
        if self.fail_writes:
            raise StorageError(f"disk full while writing {key}")
        await super().set(key, value)


class CountingKeyValueStore(MemoryKeyValueStore):
    """Memory store counting writes per key."""

    def __init__(self, initial: dict[str, str] | None = None) -> None:
        super().__init__(initial)
        self.writes: dict[str, int] = {}

    async def set(self, key: str, value: str) -> None:
        self.writes[key] = self.writes.get(key, 0) + 1
        await super().set(key, value)

    @property
    def total_writes(self) -> int:
        return sum(self.writes.values())
