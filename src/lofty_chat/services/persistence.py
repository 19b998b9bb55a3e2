"""Persistence adapter for lofty_chat.

Mirrors sessions, the active session id, the system prompt settings and
the user profile to a KeyValueStoreInterface as JSON text. The adapter
holds no state of its own.
"""

import json
from typing import Any

from pydantic import ValidationError

from lofty_chat.interfaces.storage import KeyValueStoreInterface
from lofty_chat.logging import get_logger
from lofty_chat.models.session import Session
from lofty_chat.models.settings import SystemPromptSettings, UserProfile

__all__ = [
    "ACTIVE_SESSION_KEY",
    "PersistenceAdapter",
    "SESSIONS_KEY",
    "SYSTEM_PROMPT_KEY",
    "USER_PROFILE_KEY",
]

logger = get_logger(__name__)

SESSIONS_KEY = "sessions"
ACTIVE_SESSION_KEY = "activeSessionId"
USER_PROFILE_KEY = "userProfile"
SYSTEM_PROMPT_KEY = "systemPromptSettings"


class PersistenceAdapter:
    """JSON (de)serialization over a key-value store.

    Reads tolerate missing or corrupt data by returning None (and logging);
    write errors propagate so the owning store decides how to report them.

    Example:
        persistence = PersistenceAdapter(MemoryKeyValueStore())
        await persistence.save_sessions(sessions, active_id)
        sessions = await persistence.load_sessions()
    """

    def __init__(self, store: KeyValueStoreInterface) -> None:
        """Initialize adapter.

        Args:
            store: Backend holding the JSON blobs
        """
        self._store = store

    async def load_json(self, key: str) -> Any | None:
        """Read and decode a JSON blob, or None if absent or corrupt."""
        raw = await self._store.get(key)
        if raw is None:
            return None
        try:
            return json.loads(raw)
        except json.JSONDecodeError as e:
            logger.warning("persisted_json_corrupt", store_key=key, error=str(e))
            return None

    async def save_json(self, key: str, value: Any) -> None:
        """Encode and write a JSON blob."""
        await self._store.set(key, json.dumps(value, ensure_ascii=False))

    # Sessions

    async def load_sessions(self) -> list[Session]:
        """Load persisted sessions, skipping entries that fail validation."""
        data = await self.load_json(SESSIONS_KEY)
        if not isinstance(data, list):
            return []
        sessions: list[Session] = []
        for item in data:
            try:
                sessions.append(Session.model_validate(item))
            except ValidationError as e:
                logger.warning("persisted_session_invalid", error=str(e))
        return sessions

    async def load_active_session_id(self) -> str | None:
        data = await self.load_json(ACTIVE_SESSION_KEY)
        return data if isinstance(data, str) else None

    async def save_sessions(self, sessions: list[Session], active_session_id: str | None) -> None:
        """Write the full session list and the active pointer."""
        await self.save_json(SESSIONS_KEY, [s.model_dump(mode="json") for s in sessions])
        await self.save_json(ACTIVE_SESSION_KEY, active_session_id)

    # Settings

    async def load_system_prompt_settings(self) -> SystemPromptSettings | None:
        data = await self.load_json(SYSTEM_PROMPT_KEY)
        if data is None:
            return None
        try:
            return SystemPromptSettings.model_validate(data)
        except ValidationError as e:
            logger.warning("persisted_settings_invalid", error=str(e))
            return None

    async def save_system_prompt_settings(self, settings: SystemPromptSettings) -> None:
        await self.save_json(SYSTEM_PROMPT_KEY, settings.model_dump(mode="json"))

    async def load_user_profile(self) -> UserProfile | None:
        data = await self.load_json(USER_PROFILE_KEY)
        if data is None:
            return None
        try:
            return UserProfile.model_validate(data)
        except ValidationError as e:
            logger.warning("persisted_profile_invalid", error=str(e))
            return None

    async def save_user_profile(self, profile: UserProfile) -> None:
        await self.save_json(USER_PROFILE_KEY, profile.model_dump(mode="json"))
