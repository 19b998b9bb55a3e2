"""Unit tests for LoftyChat orchestrator."""

import json
from typing import Any, Self
from unittest.mock import MagicMock

import pytest
from mocks.mock_gateway import StubGateway
from pydantic import ValidationError

from lofty_chat.config import GeminiSettings, LoftyChatConfig
from lofty_chat.errors import (
    GatewayError,
    RequestValidationError,
    SessionNotFoundError,
    TemplateNotFoundError,
)
from lofty_chat.infra.storage.memory_store import MemoryKeyValueStore
from lofty_chat.models.message import MessageRole
from lofty_chat.models.notification import NotificationLevel
from lofty_chat.models.verification import VerificationRequest
from lofty_chat.orchestrator import LoftyChat


class ConfiguredStore(MemoryKeyValueStore):
    """Memory store that pretends to have a settings class."""

    config_class = MagicMock()
    received_config: Any = None

    @classmethod
    async def from_config(cls, config: Any) -> Self:
        cls.received_config = config
        return cls()


def _chat(config: LoftyChatConfig, **gateway_config: Any) -> LoftyChat:
    return LoftyChat(
        store_class=MemoryKeyValueStore,
        gateway_class=StubGateway,
        config=config,
        store_custom_config={},
        gateway_custom_config={"reply": "Consider a tiered retainer.", **gateway_config},
    )


class TestLoftyChatInit:
    """Tests for LoftyChat initialization."""

    def test_init_stores_classes(self, fast_config: LoftyChatConfig) -> None:
        chat = _chat(fast_config)
        assert chat._store_class is MemoryKeyValueStore
        assert chat._gateway_class is StubGateway
        assert chat._connected is False

    @pytest.mark.asyncio
    async def test_not_connected_raises(self, fast_config: LoftyChatConfig) -> None:
        chat = _chat(fast_config)
        with pytest.raises(RuntimeError, match="not connected"):
            await chat.send_message("hello")

    @pytest.mark.asyncio
    async def test_missing_custom_config_raises(self, fast_config: LoftyChatConfig) -> None:
        chat = LoftyChat(
            store_class=MemoryKeyValueStore,
            gateway_class=StubGateway,
            config=fast_config,
            gateway_custom_config={},
        )
        with pytest.raises(ValueError, match="no custom_config"):
            async with chat:
                pass

    @pytest.mark.asyncio
    async def test_config_class_instantiated(self, fast_config: LoftyChatConfig) -> None:
        chat = LoftyChat(
            store_class=ConfiguredStore,
            gateway_class=StubGateway,
            config=fast_config,
            gateway_custom_config={},
        )
        async with chat:
            assert chat.active_session is not None
        assert ConfiguredStore.received_config is ConfiguredStore.config_class.return_value

    @pytest.mark.asyncio
    async def test_context_manager_connects(self, fast_config: LoftyChatConfig) -> None:
        async with _chat(fast_config) as chat:
            assert chat._connected is True
            assert len(chat.sessions) == 1
        assert chat._connected is False


class TestChatFlow:
    """Tests for messaging through the facade."""

    @pytest.mark.asyncio
    async def test_simulated_reply_without_key(self, fast_config: LoftyChatConfig) -> None:
        async with _chat(fast_config) as chat:
            reply = await chat.send_message("hello")

            assert reply is not None
            assert "API key" in reply.content
            assert chat.is_generating is False
            assert [m.role for m in chat.messages] == [MessageRole.USER, MessageRole.ASSISTANT]

    @pytest.mark.asyncio
    async def test_remote_reply_with_key(self, fast_config: LoftyChatConfig) -> None:
        async with _chat(fast_config) as chat:
            await chat.set_api_key("AIza-key")
            reply = await chat.send_message("How should I price?")

            assert reply is not None
            assert reply.content == "Consider a tiered retainer."
            assert chat.active_session is not None
            assert chat.active_session.title == "How should I price?"

    @pytest.mark.asyncio
    async def test_env_key_used_as_fallback(self) -> None:
        config = LoftyChatConfig(
            simulated_latency_seconds=0,
            gemini=GeminiSettings(api_key="env-key"),
        )
        async with _chat(config) as chat:
            reply = await chat.send_message("hi")
            assert reply is not None
            assert reply.content == "Consider a tiered retainer."

    @pytest.mark.asyncio
    async def test_session_management(self, fast_config: LoftyChatConfig) -> None:
        async with _chat(fast_config) as chat:
            first_id = chat.sessions[0].id
            second_id = await chat.create_session()
            await chat.rename_session(second_id, "Budget")
            await chat.select_session(first_id)

            assert chat.active_session is not None
            assert chat.active_session.id == first_id

            await chat.delete_session(first_id)
            assert [s.title for s in chat.sessions] == ["Budget"]

            with pytest.raises(SessionNotFoundError):
                await chat.select_session(first_id)

    @pytest.mark.asyncio
    async def test_clear_all_notifies(self, fast_config: LoftyChatConfig) -> None:
        async with _chat(fast_config) as chat:
            await chat.send_message("hello")
            await chat.clear_all()

            assert len(chat.sessions) == 1
            assert chat.messages == ()
            titles = [n.title for n in chat.notifications.drain()]
            assert "Chat history cleared" in titles

    @pytest.mark.asyncio
    async def test_export_history(self, fast_config: LoftyChatConfig) -> None:
        async with _chat(fast_config) as chat:
            await chat.send_message("hello")
            exported = json.loads(chat.export_history())
            assert exported[0]["messages"][0]["content"] == "hello"

    @pytest.mark.asyncio
    async def test_gateway_error_notification(self, fast_config: LoftyChatConfig) -> None:
        async with _chat(fast_config) as chat:
            await chat.set_api_key("AIza-key")
            chat._gateway.error = GatewayError(429, "quota")  # type: ignore[union-attr]

            reply = await chat.send_message("hello")

            assert reply is not None
            assert "429" in reply.content
            levels = [n.level for n in chat.notifications.drain()]
            assert NotificationLevel.ERROR in levels


class TestSettingsFacade:
    """Tests for settings operations through the facade."""

    @pytest.mark.asyncio
    async def test_defaults_from_config(self) -> None:
        config = LoftyChatConfig(
            simulated_latency_seconds=0,
            default_system_prompt="You are a CFO.",
            default_temperature=0.3,
        )
        async with _chat(config) as chat:
            assert chat.system_prompt.prompt == "You are a CFO."
            assert chat.system_prompt.temperature == 0.3

    @pytest.mark.asyncio
    async def test_update_and_validate(self, fast_config: LoftyChatConfig) -> None:
        async with _chat(fast_config) as chat:
            await chat.update_system_prompt(prompt="Short")
            assert chat.validate_prompt().is_valid is False
            assert chat.validate_prompt("You are an operations expert.").is_valid

            with pytest.raises(ValidationError):
                await chat.update_system_prompt(temperature=2)

    @pytest.mark.asyncio
    async def test_templates(self, fast_config: LoftyChatConfig) -> None:
        async with _chat(fast_config) as chat:
            assert len(chat.get_prompt_templates()) == 5
            settings = await chat.apply_template("creative-consultant")
            assert settings.selected_template_id == "creative-consultant"

            with pytest.raises(TemplateNotFoundError):
                await chat.apply_template("missing")

    @pytest.mark.asyncio
    async def test_models_and_credentials(self, fast_config: LoftyChatConfig) -> None:
        async with _chat(fast_config, valid_keys=["good-key"]) as chat:
            assert all(m.disabled for m in chat.list_models() if m.id != "lofty-simulator")
            assert await chat.test_credential() is False
            assert await chat.test_credential("good-key") is True

            await chat.set_api_key("good-key")
            await chat.select_model("gemini-2.5-pro")

            assert chat.system_prompt.selected_model == "gemini-2.5-pro"
            assert not any(m.disabled for m in chat.list_models())
            assert await chat.test_credential() is True

    @pytest.mark.asyncio
    async def test_user_profile(self, fast_config: LoftyChatConfig) -> None:
        async with _chat(fast_config) as chat:
            await chat.update_user_profile(name="Sam")
            assert chat.user_profile.name == "Sam"


class TestDocumentAnalysis:
    """Tests for analyze_document through the facade."""

    @pytest.mark.asyncio
    async def test_uses_configured_key(
        self, fast_config: LoftyChatConfig, sample_request: VerificationRequest
    ) -> None:
        reply = "Alignment score: 82. • Point A aligns well. Recommendation: • Do X."
        async with _chat(fast_config, reply=reply) as chat:
            await chat.set_api_key("AIza-key")
            result = await chat.analyze_document(sample_request)

            assert result.alignment_score == 82
            assert result.report_url == fast_config.report_url

    @pytest.mark.asyncio
    async def test_mock_without_key(
        self, fast_config: LoftyChatConfig, sample_request: VerificationRequest
    ) -> None:
        async with _chat(fast_config) as chat:
            result = await chat.analyze_document(sample_request)
            assert 60 <= result.alignment_score <= 90

    @pytest.mark.asyncio
    async def test_validation_error_propagates(
        self, fast_config: LoftyChatConfig, sample_request: VerificationRequest
    ) -> None:
        async with _chat(fast_config) as chat:
            with pytest.raises(RequestValidationError):
                await chat.analyze_document(
                    sample_request.model_copy(update={"business_strategy": ""})
                )
