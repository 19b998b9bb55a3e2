"""Unit tests for lofty_chat models."""

import json

import pytest
from pydantic import SecretStr, ValidationError

from lofty_chat.models.message import AttachmentMeta, Message, MessageRole
from lofty_chat.models.session import Session
from lofty_chat.models.settings import SystemPromptSettings, UserProfile, push_prompt_history
from lofty_chat.models.verification import DocumentFile, KeyPoint, VerificationResult
from lofty_chat.utils.text import truncate_title


class TestMessage:
    """Tests for Message model."""

    def test_user_factory(self) -> None:
        msg = Message.user("Hello")
        assert msg.role == MessageRole.USER
        assert msg.content == "Hello"
        assert msg.attachments == ()
        assert msg.id

    def test_assistant_factory(self) -> None:
        msg = Message.assistant("Hi there")
        assert msg.role == MessageRole.ASSISTANT

    def test_ids_are_unique(self) -> None:
        assert Message.user("a").id != Message.user("a").id

    def test_immutable(self) -> None:
        msg = Message.user("Hello")
        with pytest.raises(ValidationError):
            msg.content = "changed"  # type: ignore[misc]

    def test_attachment_size_non_negative(self) -> None:
        with pytest.raises(ValidationError):
            AttachmentMeta(name="a.txt", size_bytes=-1)


class TestSession:
    """Tests for Session model."""

    def test_with_message_returns_copy(self) -> None:
        session = Session(title="New chat 1")
        updated = session.with_message(Message.user("Hello"))

        assert session.messages == ()
        assert len(updated.messages) == 1
        assert updated.id == session.id

    def test_with_message_sets_title(self) -> None:
        session = Session(title="New chat 1")
        updated = session.with_message(Message.user("Hello"), title="Hello")
        assert updated.title == "Hello"

    def test_has_user_message(self) -> None:
        session = Session(title="t").with_message(Message.assistant("Welcome"))
        assert not session.has_user_message
        assert session.with_message(Message.user("Hi")).has_user_message

    def test_renamed(self) -> None:
        session = Session(title="Old")
        assert session.renamed("New").title == "New"
        assert session.title == "Old"

    def test_json_round_trip(self, sample_messages: list[Message]) -> None:
        session = Session(title="Pricing")
        for message in sample_messages:
            session = session.with_message(message)

        raw = json.dumps(session.model_dump(mode="json"))
        restored = Session.model_validate(json.loads(raw))

        assert restored.id == session.id
        assert restored.title == session.title
        assert restored.messages == session.messages
        assert restored.messages[0].attachments[0].name == "strategy.pdf"


class TestTruncateTitle:
    """Tests for session auto-titles."""

    def test_short_text_unchanged(self) -> None:
        assert truncate_title("Hello") == "Hello"

    def test_long_text_truncated(self) -> None:
        text = "a" * 45
        assert truncate_title(text) == "a" * 30 + "..."

    def test_exactly_limit(self) -> None:
        assert truncate_title("b" * 30) == "b" * 30

    def test_strips_whitespace(self) -> None:
        assert truncate_title("  Hi  ") == "Hi"


class TestPromptHistory:
    """Tests for push_prompt_history."""

    def test_previous_prompt_goes_first(self) -> None:
        history = push_prompt_history((), "A", "B")
        history = push_prompt_history(history, "B", "C")
        assert history == ("B", "A")

    def test_unchanged_prompt_not_pushed(self) -> None:
        assert push_prompt_history(("X",), "A", "A ") == ("X",)

    def test_blank_previous_not_pushed(self) -> None:
        assert push_prompt_history(("X",), "   ", "B") == ("X",)

    def test_duplicates_removed(self) -> None:
        history = push_prompt_history(("B", "A"), "A", "C")
        assert history == ("A", "B")

    def test_new_prompt_dropped_from_history(self) -> None:
        history = push_prompt_history(("B", "A"), "C", "A")
        assert history == ("C", "B")

    def test_case_sensitive(self) -> None:
        history = push_prompt_history(("a",), "A", "C")
        assert history == ("A", "a")

    def test_capped(self) -> None:
        history = tuple(f"p{i}" for i in range(10))
        result = push_prompt_history(history, "new-prev", "next", limit=10)
        assert len(result) == 10
        assert result[0] == "new-prev"
        assert "p9" not in result


class TestSystemPromptSettings:
    """Tests for SystemPromptSettings model."""

    def test_defaults(self) -> None:
        settings = SystemPromptSettings()
        assert settings.temperature == 0.7
        assert settings.max_tokens == 1024
        assert settings.selected_model == "gemini-1.5-pro"
        assert not settings.has_api_key

    @pytest.mark.parametrize("temperature", [-0.1, 1.5])
    def test_temperature_range(self, temperature: float) -> None:
        with pytest.raises(ValidationError):
            SystemPromptSettings(temperature=temperature)

    def test_max_tokens_positive(self) -> None:
        with pytest.raises(ValidationError):
            SystemPromptSettings(max_tokens=0)

    def test_blank_key_is_not_a_key(self) -> None:
        assert not SystemPromptSettings(api_key=SecretStr("  ")).has_api_key

    def test_api_key_hidden_in_repr(self) -> None:
        settings = SystemPromptSettings(api_key=SecretStr("AIza-secret"))
        assert "AIza-secret" not in repr(settings)

    def test_api_key_survives_json(self) -> None:
        settings = SystemPromptSettings(api_key=SecretStr("AIza-secret"))
        restored = SystemPromptSettings.model_validate(settings.model_dump(mode="json"))
        assert restored.api_key is not None
        assert restored.api_key.get_secret_value() == "AIza-secret"


class TestUserProfile:
    """Tests for UserProfile model."""

    def test_defaults(self) -> None:
        profile = UserProfile()
        assert profile.language == "english"
        assert profile.notification_settings.push
        assert not profile.security_settings.two_factor_enabled


class TestVerificationModels:
    """Tests for document verification models."""

    def test_document_to_attachment(self) -> None:
        doc = DocumentFile(name="plan.txt", mime_type="text/plain", content=b"abc")
        meta = doc.to_attachment()
        assert meta == AttachmentMeta(name="plan.txt", mime_type="text/plain", size_bytes=3)

    def test_score_range(self) -> None:
        with pytest.raises(ValidationError):
            VerificationResult(alignment_score=101, summary="", report_url="u")

    def test_key_points(self) -> None:
        result = VerificationResult(
            alignment_score=50,
            summary="ok",
            key_points=(KeyPoint(aligned=False, point="Off-strategy"),),
            report_url="u",
        )
        assert not result.key_points[0].aligned
