"""User-facing settings models for lofty_chat.

SystemPromptSettings drives every model call; UserProfile holds the
account preferences shown on the profile page.
"""

from pydantic import BaseModel, Field, SecretStr, field_serializer

from lofty_chat.config import DEFAULT_SYSTEM_PROMPT
from lofty_chat.utils.ids import now_epoch

__all__ = [
    "NotificationSettings",
    "SecuritySettings",
    "SystemPromptSettings",
    "UserProfile",
    "push_prompt_history",
]

PROMPT_HISTORY_LIMIT = 10


def push_prompt_history(
    history: tuple[str, ...],
    previous_prompt: str,
    new_prompt: str,
    limit: int = PROMPT_HISTORY_LIMIT,
) -> tuple[str, ...]:
    """Compute prompt history after replacing ``previous_prompt``.

    The previous prompt goes to the front when it is non-empty and differs
    from the new one. The new prompt is dropped from history. Duplicates
    are matched on stripped, case-sensitive text.

    Args:
        history: Current history, most recent first
        previous_prompt: Prompt being replaced
        new_prompt: Prompt taking its place
        limit: Maximum history length

    Returns:
        Updated history, most recent first
    """
    previous = previous_prompt.strip()
    current = new_prompt.strip()
    rest = tuple(p for p in history if p.strip() != current)
    if not previous or previous == current:
        return rest[:limit]
    rest = tuple(p for p in rest if p.strip() != previous)
    return (previous, *rest)[:limit]


class SystemPromptSettings(BaseModel, frozen=True):
    """System prompt and generation parameters.

    Attributes:
        prompt: System prompt sent ahead of every conversation
        temperature: Sampling temperature in [0, 1]
        max_tokens: Maximum output tokens
        auto_save: Whether the settings page saves on change
        api_key: Gemini API key, if the user saved one
        selected_model: Logical model id chosen in the UI
        selected_template_id: Prompt template the prompt came from, if any
        prompt_history: Previous prompts, most recent first
        last_updated: Timestamp of the last change in epoch seconds
    """

    prompt: str = DEFAULT_SYSTEM_PROMPT
    temperature: float = Field(default=0.7, ge=0, le=1)
    max_tokens: int = Field(default=1024, gt=0)
    auto_save: bool = False
    api_key: SecretStr | None = None
    selected_model: str = "gemini-1.5-pro"
    selected_template_id: str | None = None
    prompt_history: tuple[str, ...] = Field(default=(), max_length=PROMPT_HISTORY_LIMIT)
    last_updated: int = Field(default_factory=now_epoch)

    @field_serializer("api_key", when_used="json")
    def _dump_api_key(self, value: SecretStr | None) -> str | None:
        # The local store is the only place the key lives
        return value.get_secret_value() if value else None

    @property
    def has_api_key(self) -> bool:
        """Check if a non-blank API key is configured."""
        return bool(self.api_key and self.api_key.get_secret_value().strip())


class NotificationSettings(BaseModel, frozen=True):
    """Notification channel preferences."""

    push: bool = True
    email: bool = True
    sound: bool = True


class SecuritySettings(BaseModel, frozen=True):
    """Account security preferences."""

    two_factor_enabled: bool = False
    last_password_change: int = Field(default_factory=now_epoch)


class UserProfile(BaseModel, frozen=True):
    """Local user profile."""

    name: str = "User Name"
    email: str | None = "user@example.com"
    avatar: str | None = None
    language: str = "english"
    theme: str = "light"
    notification_settings: NotificationSettings = Field(default_factory=NotificationSettings)
    security_settings: SecuritySettings = Field(default_factory=SecuritySettings)
