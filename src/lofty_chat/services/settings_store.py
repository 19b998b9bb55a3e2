"""Settings store for lofty_chat.

This module owns the system prompt settings and the user profile, and
mirrors both to the persistence adapter on every change.
"""

from typing import Any

from pydantic import SecretStr

from lofty_chat.logging import get_logger
from lofty_chat.models.settings import (
    SystemPromptSettings,
    UserProfile,
    push_prompt_history,
)
from lofty_chat.services.persistence import PersistenceAdapter
from lofty_chat.services.prompt_templates import get_template_by_id
from lofty_chat.utils.ids import now_epoch

__all__ = [
    "SettingsStore",
]

logger = get_logger(__name__)


class SettingsStore:
    """System prompt settings and user profile.

    Updates build a new validated settings object from the current one, so
    invalid values (e.g. temperature 1.5) raise pydantic's ValidationError
    and leave the stored settings untouched.

    Example:
        store = SettingsStore(persistence, defaults=SystemPromptSettings())
        await store.load()
        await store.update_system_prompt(prompt="You are a research assistant.")
    """

    def __init__(
        self,
        persistence: PersistenceAdapter,
        defaults: SystemPromptSettings | None = None,
        *,
        fallback_api_key: SecretStr | None = None,
        history_limit: int = 10,
    ) -> None:
        """Initialize the store.

        Args:
            persistence: Adapter the settings are mirrored to
            defaults: Settings used when nothing was persisted yet
            fallback_api_key: Key used when the user has not saved one
            history_limit: Maximum prompt history length
        """
        self._persistence = persistence
        self._system_prompt = defaults or SystemPromptSettings()
        self._user_profile = UserProfile()
        self._fallback_api_key = fallback_api_key
        self._history_limit = history_limit

    async def load(self) -> None:
        """Read persisted settings once."""
        system_prompt = await self._persistence.load_system_prompt_settings()
        if system_prompt is not None:
            self._system_prompt = system_prompt
        profile = await self._persistence.load_user_profile()
        if profile is not None:
            self._user_profile = profile
        logger.info(
            "settings_loaded",
            model=self._system_prompt.selected_model,
            has_api_key=self.api_key is not None,
        )

    @property
    def system_prompt(self) -> SystemPromptSettings:
        return self._system_prompt

    @property
    def user_profile(self) -> UserProfile:
        return self._user_profile

    @property
    def api_key(self) -> str | None:
        """Saved API key, else the environment-configured one."""
        if self._system_prompt.has_api_key:
            assert self._system_prompt.api_key is not None
            return self._system_prompt.api_key.get_secret_value().strip()
        if self._fallback_api_key and self._fallback_api_key.get_secret_value().strip():
            return self._fallback_api_key.get_secret_value().strip()
        return None

    # === SYSTEM PROMPT ===

    async def update_system_prompt(self, **changes: Any) -> SystemPromptSettings:
        """Apply changes to the system prompt settings.

        A prompt change pushes the previous prompt onto the history.

        Args:
            **changes: SystemPromptSettings fields to replace

        Returns:
            The new settings

        Raises:
            pydantic.ValidationError: A value is out of range
        """
        current = self._system_prompt
        changes.pop("prompt_history", None)
        changes.pop("last_updated", None)

        if "prompt" in changes and changes["prompt"] != current.prompt:
            changes["prompt_history"] = push_prompt_history(
                current.prompt_history,
                current.prompt,
                changes["prompt"],
                limit=self._history_limit,
            )
        # Explicit template choice wins; a hand-edited prompt clears it
        if "prompt" in changes and "selected_template_id" not in changes:
            if changes["prompt"] != current.prompt:
                changes["selected_template_id"] = None

        data = current.model_dump()
        data.update(changes)
        data["last_updated"] = now_epoch()
        updated = SystemPromptSettings.model_validate(data)

        self._system_prompt = updated
        logger.info(
            "system_prompt_updated",
            fields=sorted(k for k in changes if k != "api_key"),
            history_length=len(updated.prompt_history),
        )
        await self._persist_system_prompt()
        return updated

    async def set_api_key(self, api_key: str | None) -> SystemPromptSettings:
        """Save (or clear, with None/blank) the API key."""
        value = SecretStr(api_key.strip()) if api_key and api_key.strip() else None
        return await self.update_system_prompt(api_key=value)

    async def select_model(self, model_id: str) -> SystemPromptSettings:
        return await self.update_system_prompt(selected_model=model_id)

    async def apply_template(self, template_id: str) -> SystemPromptSettings:
        """Replace the prompt with a template's text.

        Raises:
            TemplateNotFoundError: Unknown template id
        """
        template = get_template_by_id(template_id)
        return await self.update_system_prompt(
            prompt=template.template,
            selected_template_id=template.id,
        )

    # === USER PROFILE ===

    async def update_user_profile(self, **changes: Any) -> UserProfile:
        """Apply changes to the user profile.

        Raises:
            pydantic.ValidationError: A value has the wrong type
        """
        data = self._user_profile.model_dump()
        data.update(changes)
        self._user_profile = UserProfile.model_validate(data)
        logger.info("user_profile_updated", fields=sorted(changes))
        await self._persist_user_profile()
        return self._user_profile

    async def update_notification_settings(self, **changes: Any) -> UserProfile:
        data = self._user_profile.notification_settings.model_dump()
        data.update(changes)
        return await self.update_user_profile(notification_settings=data)

    async def update_security_settings(self, **changes: Any) -> UserProfile:
        data = self._user_profile.security_settings.model_dump()
        data.update(changes)
        return await self.update_user_profile(security_settings=data)

    # === INTERNALS ===

    async def _persist_system_prompt(self) -> None:
        try:
            await self._persistence.save_system_prompt_settings(self._system_prompt)
        except Exception as e:
            logger.warning("settings_persist_failed", error=str(e))

    async def _persist_user_profile(self) -> None:
        try:
            await self._persistence.save_user_profile(self._user_profile)
        except Exception as e:
            logger.warning("profile_persist_failed", error=str(e))
