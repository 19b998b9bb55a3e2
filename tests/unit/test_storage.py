"""Unit tests for key-value stores and the persistence adapter."""

import json
from unittest.mock import AsyncMock

import pytest

from lofty_chat.config import RedisSettings
from lofty_chat.errors import StorageError
from lofty_chat.infra.redis.client import RedisClient
from lofty_chat.infra.redis.store import RedisKeyValueStore
from lofty_chat.infra.storage.memory_store import MemoryKeyValueStore
from lofty_chat.models.message import Message
from lofty_chat.models.session import Session
from lofty_chat.models.settings import SystemPromptSettings
from lofty_chat.services.persistence import (
    ACTIVE_SESSION_KEY,
    SESSIONS_KEY,
    PersistenceAdapter,
)


class TestMemoryKeyValueStore:
    """Tests for MemoryKeyValueStore."""

    @pytest.mark.asyncio
    async def test_set_get_delete(self) -> None:
        store = MemoryKeyValueStore()
        await store.set("a", "1")
        assert await store.get("a") == "1"

        await store.delete("a")
        assert await store.get("a") is None

    @pytest.mark.asyncio
    async def test_delete_missing_is_noop(self) -> None:
        await MemoryKeyValueStore().delete("missing")

    @pytest.mark.asyncio
    async def test_from_dict_seeds_values(self) -> None:
        store = await MemoryKeyValueStore.from_dict({"initial": {"a": "1"}})
        assert store.snapshot() == {"a": "1"}


class TestRedisKeyValueStore:
    """Tests for RedisKeyValueStore with a mocked client."""

    @pytest.fixture
    def redis_client(self) -> AsyncMock:
        client = AsyncMock(spec=RedisClient)
        client.get.return_value = '["x"]'
        client.set.return_value = True
        client.delete.return_value = True
        return client

    @pytest.mark.asyncio
    async def test_keys_prefixed(self, redis_client: AsyncMock) -> None:
        store = RedisKeyValueStore(redis_client, key_prefix="lofty:")

        assert await store.get("sessions") == '["x"]'
        await store.set("sessions", "[]")

        redis_client.get.assert_awaited_once_with("lofty:sessions")
        redis_client.set.assert_awaited_once_with("lofty:sessions", "[]")

    @pytest.mark.asyncio
    async def test_failed_write_raises(self, redis_client: AsyncMock) -> None:
        redis_client.set.return_value = False
        store = RedisKeyValueStore(redis_client)

        with pytest.raises(StorageError):
            await store.set("sessions", "[]")

    @pytest.mark.asyncio
    async def test_failed_delete_raises(self, redis_client: AsyncMock) -> None:
        redis_client.delete.return_value = False
        with pytest.raises(StorageError):
            await RedisKeyValueStore(redis_client).delete("sessions")

    @pytest.mark.asyncio
    async def test_close_leaves_injected_client(self, redis_client: AsyncMock) -> None:
        await RedisKeyValueStore(redis_client).close()
        redis_client.disconnect.assert_not_awaited()


class TestRedisClient:
    """Tests for RedisClient without a server."""

    @pytest.mark.asyncio
    async def test_disabled_without_url(self) -> None:
        client = RedisClient(RedisSettings(url=None))

        assert client.is_enabled is False
        assert await client.connect() is False
        assert await client.get("k") is None
        assert await client.set("k", "v") is False

    @pytest.mark.asyncio
    async def test_disabled_flag(self) -> None:
        client = RedisClient(RedisSettings(url="redis://localhost:6379", enabled=False))
        assert client.is_enabled is False


class TestPersistenceAdapter:
    """Tests for PersistenceAdapter."""

    @pytest.mark.asyncio
    async def test_session_round_trip(
        self, persistence: PersistenceAdapter, sample_messages: list[Message]
    ) -> None:
        session = Session(title="Pricing")
        for message in sample_messages:
            session = session.with_message(message)

        await persistence.save_sessions([session], session.id)
        loaded = await persistence.load_sessions()

        assert loaded == [session]
        assert loaded[0].messages[0].attachments == sample_messages[0].attachments
        assert await persistence.load_active_session_id() == session.id

    @pytest.mark.asyncio
    async def test_invalid_session_entries_skipped(self) -> None:
        valid = Session(title="ok").model_dump(mode="json")
        store = MemoryKeyValueStore({SESSIONS_KEY: json.dumps([{"title": 5}, valid])})

        loaded = await PersistenceAdapter(store).load_sessions()
        assert [s.title for s in loaded] == ["ok"]

    @pytest.mark.asyncio
    async def test_non_string_active_id_ignored(self) -> None:
        store = MemoryKeyValueStore({ACTIVE_SESSION_KEY: "42"})
        assert await PersistenceAdapter(store).load_active_session_id() is None

    @pytest.mark.asyncio
    async def test_missing_settings(self, persistence: PersistenceAdapter) -> None:
        assert await persistence.load_system_prompt_settings() is None
        assert await persistence.load_user_profile() is None

    @pytest.mark.asyncio
    async def test_settings_round_trip(self, persistence: PersistenceAdapter) -> None:
        settings = SystemPromptSettings(prompt="You are terse.", prompt_history=("old",))
        await persistence.save_system_prompt_settings(settings)
        assert await persistence.load_system_prompt_settings() == settings
