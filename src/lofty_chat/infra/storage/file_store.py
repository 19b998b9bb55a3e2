"""JSON file key-value store for lofty_chat.

All keys live in a single JSON document on disk, the local equivalent of a
browser's localStorage. The file is read once on first access; every write
rewrites it atomically (temp file + rename) off the event loop.
"""

import asyncio
import json
import os
import tempfile
from pathlib import Path
from typing import Any, Self

from lofty_chat.config import StorageSettings
from lofty_chat.errors import StorageError
from lofty_chat.interfaces.storage import KeyValueStoreInterface
from lofty_chat.logging import get_logger

__all__ = [
    "JSONFileStore",
]

logger = get_logger(__name__)


def _read_document(path: Path) -> dict[str, str]:
    if not path.exists():
        return {}
    try:
        data = json.loads(path.read_text(encoding="utf-8"))
    except (OSError, json.JSONDecodeError) as e:
        logger.warning("state_file_unreadable", path=str(path), error=str(e))
        return {}
    if not isinstance(data, dict):
        logger.warning("state_file_invalid", path=str(path))
        return {}
    return {str(k): v for k, v in data.items() if isinstance(v, str)}


def _write_document(path: Path, data: dict[str, str]) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    fd, tmp_name = tempfile.mkstemp(dir=path.parent, prefix=f".{path.name}.", suffix=".tmp")
    try:
        with os.fdopen(fd, "w", encoding="utf-8") as f:
            json.dump(data, f, ensure_ascii=False, indent=2)
        os.replace(tmp_name, path)
    except BaseException:
        Path(tmp_name).unlink(missing_ok=True)
        raise


class JSONFileStore(KeyValueStoreInterface):
    """Single-file JSON implementation of KeyValueStoreInterface.

    Example:
        store = JSONFileStore(Path("~/.lofty_chat/state.json").expanduser())
        await store.set("sessions", "[]")
    """

    config_class = StorageSettings

    def __init__(self, path: Path, key_prefix: str = "") -> None:
        """Initialize the store.

        Args:
            path: Location of the JSON document
            key_prefix: Prefix applied to every key
        """
        self._path = Path(path).expanduser()
        self._prefix = key_prefix
        self._data: dict[str, str] | None = None
        self._lock = asyncio.Lock()

    @classmethod
    async def from_config(cls, config: StorageSettings) -> Self:
        """Factory method for LoftyChat instantiation."""
        return cls(config.path, key_prefix=config.key_prefix)

    @classmethod
    async def from_dict(cls, config: dict[str, Any]) -> Self:
        """Factory method for a custom config dict."""
        return cls(Path(config["path"]), key_prefix=config.get("key_prefix", ""))

    @property
    def path(self) -> Path:
        return self._path

    async def close(self) -> None:
        pass

    async def _load(self) -> dict[str, str]:
        if self._data is None:
            self._data = await asyncio.to_thread(_read_document, self._path)
            logger.debug("state_file_loaded", path=str(self._path), keys=len(self._data))
        return self._data

    async def get(self, key: str) -> str | None:
        data = await self._load()
        return data.get(self._prefix + key)

    async def set(self, key: str, value: str) -> None:
        async with self._lock:
            data = await self._load()
            data[self._prefix + key] = value
            await self._flush(data)

    async def delete(self, key: str) -> None:
        async with self._lock:
            data = await self._load()
            if data.pop(self._prefix + key, None) is not None:
                await self._flush(data)

    async def _flush(self, data: dict[str, str]) -> None:
        try:
            await asyncio.to_thread(_write_document, self._path, dict(data))
        except OSError as e:
            raise StorageError(f"Cannot write {self._path}: {e}") from e
