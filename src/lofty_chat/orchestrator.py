"""LoftyChat orchestrator for the chat client core.

This module provides the main entry point for the lofty_chat package,
wiring storage, the model gateway and the services behind one facade that
a UI layer drives.
"""

import random
from collections.abc import Sequence
from typing import Any

from lofty_chat.config import GeminiSettings, LoftyChatConfig, RedisSettings, StorageSettings
from lofty_chat.infra.gemini.client import GeminiGateway
from lofty_chat.interfaces.extractor import TextExtractorInterface
from lofty_chat.interfaces.gateway import ModelGatewayInterface
from lofty_chat.interfaces.storage import KeyValueStoreInterface
from lofty_chat.logging import get_logger
from lofty_chat.models.message import AttachmentMeta, Message
from lofty_chat.models.model_option import ModelOption
from lofty_chat.models.notification import Notification
from lofty_chat.models.prompt import PromptTemplate, PromptValidationResult, TemplateCategory
from lofty_chat.models.session import Session
from lofty_chat.models.settings import SystemPromptSettings, UserProfile
from lofty_chat.models.verification import DocumentFile, VerificationRequest, VerificationResult
from lofty_chat.services.alignment import DocumentAlignmentAnalyzer
from lofty_chat.services.dispatch import MessageDispatcher
from lofty_chat.services.notifications import NotificationCenter
from lofty_chat.services.persistence import PersistenceAdapter
from lofty_chat.services.prompt_templates import get_prompt_templates
from lofty_chat.services.prompt_validator import validate_prompt
from lofty_chat.services.session_store import SessionStore
from lofty_chat.services.settings_store import SettingsStore
from lofty_chat.services.text_extraction import PlainTextExtractor

__all__ = ["LoftyChat"]

logger = get_logger(__name__)


class LoftyChat:
    """Main orchestrator of the lofty_chat client core.

    Accepts implementation classes. Config is loaded from .env automatically.
    For custom implementations, set config_class = None and pass custom_config dict.

    Example:
        async with LoftyChat(store_class=JSONFileStore) as chat:
            await chat.send_message("How do I price a consulting retainer?")
            print(chat.messages[-1].content)
    """

    def __init__(
        self,
        store_class: type[KeyValueStoreInterface],
        gateway_class: type[ModelGatewayInterface] = GeminiGateway,
        *,
        config: LoftyChatConfig | None = None,
        store_custom_config: dict[str, Any] | None = None,
        gateway_custom_config: dict[str, Any] | None = None,
        extractor: TextExtractorInterface | None = None,
        rng: random.Random | None = None,
    ) -> None:
        """Initialize LoftyChat with implementation classes.

        Args:
            store_class: Key-value store implementation class
            gateway_class: Model gateway implementation class
            config: Settings (loaded from .env when omitted)
            store_custom_config: Custom config dict if store_class.config_class is None
            gateway_custom_config: Custom config dict if gateway_class.config_class is None
            extractor: Document text extractor (plain text by default)
            rng: Random source for mocked analysis results
        """
        self._config = config or LoftyChatConfig()  # Loads from .env

        self._store_class = store_class
        self._gateway_class = gateway_class
        self._store_custom_config = store_custom_config
        self._gateway_custom_config = gateway_custom_config
        self._extractor = extractor or PlainTextExtractor()
        self._rng = rng

        # Instances (created on connect)
        self._store: KeyValueStoreInterface | None = None
        self._gateway: ModelGatewayInterface | None = None

        # Services (wired on connect)
        self._notifications = NotificationCenter()
        self._sessions: SessionStore | None = None
        self._settings: SettingsStore | None = None
        self._dispatcher: MessageDispatcher | None = None
        self._analyzer: DocumentAlignmentAnalyzer | None = None

        self._connected = False

    def _settings_for(self, config_class: type) -> Any:
        """Nested settings instance matching a backend's config class."""
        nested = {
            GeminiSettings: self._config.gemini,
            StorageSettings: self._config.storage,
            RedisSettings: self._config.redis,
        }
        if config_class in nested:
            return nested[config_class]
        return config_class()

    async def _instantiate_class(
        self,
        cls: type,
        custom_config: dict[str, Any] | None,
    ) -> Any:
        """Instantiate an implementation class.

        If cls.config_class is set, use the matching settings (loads from .env).
        If cls.config_class is None, use custom_config dict.
        """
        config_class = getattr(cls, "config_class", None)

        if config_class is None:
            # Custom implementation - use dict
            if custom_config is None:
                raise ValueError(
                    f"{cls.__name__} has config_class=None but no custom_config provided"
                )
            return await cls.from_dict(custom_config)
        else:
            return await cls.from_config(self._settings_for(config_class))

    async def _connect(self) -> None:
        """Initialize backends, load persisted state and wire services."""
        if self._connected:
            return

        self._store = await self._instantiate_class(self._store_class, self._store_custom_config)
        self._gateway = await self._instantiate_class(
            self._gateway_class, self._gateway_custom_config
        )

        persistence = PersistenceAdapter(self._store)
        self._sessions = SessionStore(persistence, title_max_length=self._config.title_max_length)
        self._settings = SettingsStore(
            persistence,
            SystemPromptSettings(
                prompt=self._config.default_system_prompt,
                temperature=self._config.default_temperature,
                max_tokens=self._config.default_max_tokens,
                selected_model=self._config.gemini.default_model,
            ),
            fallback_api_key=self._config.gemini.api_key,
            history_limit=self._config.prompt_history_limit,
        )
        await self._sessions.load()
        await self._settings.load()

        self._dispatcher = MessageDispatcher(
            self._sessions,
            self._settings,
            self._gateway,
            self._notifications,
            simulated_latency_seconds=self._config.simulated_latency_seconds,
        )
        self._analyzer = DocumentAlignmentAnalyzer(
            self._gateway,
            self._extractor,
            report_url=self._config.report_url,
            delay_seconds=self._config.analysis_delay_seconds,
            rng=self._rng,
        )

        self._connected = True
        logger.info("lofty_chat_connected", session_count=len(self._sessions.sessions))

    async def _disconnect(self) -> None:
        """Close all connections."""
        if self._gateway and hasattr(self._gateway, "close"):
            await self._gateway.close()
        if self._store and hasattr(self._store, "close"):
            await self._store.close()

        self._connected = False
        logger.info("lofty_chat_disconnected")

    async def __aenter__(self) -> "LoftyChat":
        """Async context manager entry - connects automatically."""
        await self._connect()
        return self

    async def __aexit__(
        self,
        exc_type: type[BaseException] | None,
        exc_val: BaseException | None,
        exc_tb: Any,
    ) -> None:
        """Async context manager exit - disconnects automatically."""
        await self._disconnect()

    def _ensure_connected(self) -> None:
        if not self._connected:
            raise RuntimeError("LoftyChat not connected. Use 'async with LoftyChat(...) as chat:'")

    # === CHAT ===

    async def send_message(
        self,
        content: str,
        attachments: Sequence[DocumentFile | AttachmentMeta] | None = None,
    ) -> Message | None:
        """Send a user message and wait for the assistant reply.

        Returns:
            The assistant message, or None when nothing was sent
        """
        self._ensure_connected()
        assert self._dispatcher is not None
        return await self._dispatcher.send_message(content, attachments)

    @property
    def is_generating(self) -> bool:
        self._ensure_connected()
        assert self._dispatcher is not None
        return self._dispatcher.is_generating

    # === SESSIONS ===

    @property
    def sessions(self) -> tuple[Session, ...]:
        self._ensure_connected()
        assert self._sessions is not None
        return self._sessions.sessions

    @property
    def active_session(self) -> Session | None:
        self._ensure_connected()
        assert self._sessions is not None
        return self._sessions.active_session

    @property
    def messages(self) -> tuple[Message, ...]:
        """Messages of the active session."""
        self._ensure_connected()
        assert self._sessions is not None
        return self._sessions.messages

    async def create_session(self) -> str:
        self._ensure_connected()
        assert self._sessions is not None
        return await self._sessions.create_session()

    async def select_session(self, session_id: str) -> None:
        self._ensure_connected()
        assert self._sessions is not None
        await self._sessions.select_session(session_id)

    async def delete_session(self, session_id: str) -> None:
        self._ensure_connected()
        assert self._sessions is not None
        await self._sessions.delete_session(session_id)

    async def rename_session(self, session_id: str, title: str) -> None:
        self._ensure_connected()
        assert self._sessions is not None
        await self._sessions.rename_session(session_id, title)

    async def clear_all(self) -> str:
        """Delete all chat history and start a fresh session."""
        self._ensure_connected()
        assert self._sessions is not None
        session_id = await self._sessions.clear_all()
        self._notifications.notify("Chat history cleared", "All conversations have been deleted.")
        return session_id

    def export_history(self) -> str:
        """JSON dump of every session, for download."""
        self._ensure_connected()
        assert self._sessions is not None
        return self._sessions.export_history()

    # === DOCUMENT VERIFICATION ===

    async def analyze_document(self, request: VerificationRequest) -> VerificationResult:
        """Check a document's alignment with the business strategy.

        Falls back to the configured API key and selected model when the
        request does not carry its own.

        Raises:
            RequestValidationError: Missing document or business inputs
        """
        self._ensure_connected()
        assert self._analyzer is not None
        assert self._settings is not None
        return await self._analyzer.analyze(
            request,
            api_key=self._settings.api_key,
            model_id=self._settings.system_prompt.selected_model,
        )

    # === MODELS & CREDENTIALS ===

    async def test_credential(self, api_key: str | None = None) -> bool:
        """Check an API key (the configured one by default) against the API."""
        self._ensure_connected()
        assert self._gateway is not None
        assert self._settings is not None
        key = api_key if api_key is not None else self._settings.api_key
        if not key:
            return False
        valid = await self._gateway.test_credential(key)
        logger.info("credential_tested", valid=valid)
        return valid

    def list_models(self) -> list[ModelOption]:
        self._ensure_connected()
        assert self._gateway is not None
        assert self._settings is not None
        return self._gateway.list_models(self._settings.api_key)

    async def select_model(self, model_id: str) -> SystemPromptSettings:
        self._ensure_connected()
        assert self._settings is not None
        return await self._settings.select_model(model_id)

    async def set_api_key(self, api_key: str | None) -> SystemPromptSettings:
        """Save (or clear) the API key used for remote calls."""
        self._ensure_connected()
        assert self._settings is not None
        return await self._settings.set_api_key(api_key)

    # === SETTINGS ===

    @property
    def system_prompt(self) -> SystemPromptSettings:
        self._ensure_connected()
        assert self._settings is not None
        return self._settings.system_prompt

    @property
    def user_profile(self) -> UserProfile:
        self._ensure_connected()
        assert self._settings is not None
        return self._settings.user_profile

    async def update_system_prompt(self, **changes: Any) -> SystemPromptSettings:
        """Apply changes to the system prompt settings.

        Raises:
            pydantic.ValidationError: A value is out of range
        """
        self._ensure_connected()
        assert self._settings is not None
        return await self._settings.update_system_prompt(**changes)

    async def apply_template(self, template_id: str) -> SystemPromptSettings:
        """Use a prompt template as the system prompt.

        Raises:
            TemplateNotFoundError: Unknown template id
        """
        self._ensure_connected()
        assert self._settings is not None
        return await self._settings.apply_template(template_id)

    def validate_prompt(self, text: str | None = None) -> PromptValidationResult:
        """Validate a prompt (the current system prompt by default)."""
        self._ensure_connected()
        assert self._settings is not None
        return validate_prompt(text if text is not None else self._settings.system_prompt.prompt)

    def get_prompt_templates(
        self,
        category: TemplateCategory | None = None,
    ) -> list[PromptTemplate]:
        return get_prompt_templates(category)

    async def update_user_profile(self, **changes: Any) -> UserProfile:
        self._ensure_connected()
        assert self._settings is not None
        return await self._settings.update_user_profile(**changes)

    # === NOTIFICATIONS ===

    @property
    def notifications(self) -> NotificationCenter:
        return self._notifications
