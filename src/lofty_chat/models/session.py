"""Session models for lofty_chat."""

from pydantic import BaseModel, Field

from lofty_chat.models.message import Message, MessageRole
from lofty_chat.utils.ids import new_id, now_epoch

__all__ = [
    "Session",
]


class Session(BaseModel, frozen=True):
    """A conversation thread.

    Sessions are immutable values; ``with_message`` and ``renamed`` return
    updated copies. The SessionStore swaps the stored copy on every change.

    Attributes:
        id: Opaque session identifier
        title: Display title ("New chat N" until auto-titled)
        messages: Messages in insertion order
        created_at: Creation timestamp in epoch seconds
        updated_at: Timestamp of the last change in epoch seconds
    """

    id: str = Field(default_factory=new_id)
    title: str
    messages: tuple[Message, ...] = ()
    created_at: int = Field(default_factory=now_epoch)
    updated_at: int = Field(default_factory=now_epoch)

    @property
    def has_user_message(self) -> bool:
        """Check if any user message was appended yet."""
        return any(m.role == MessageRole.USER for m in self.messages)

    def with_message(self, message: Message, title: str | None = None) -> "Session":
        """Return a copy with the message appended (and optionally a new title)."""
        update: dict[str, object] = {
            "messages": (*self.messages, message),
            "updated_at": max(now_epoch(), self.updated_at),
        }
        if title is not None:
            update["title"] = title
        return self.model_copy(update=update)

    def renamed(self, title: str) -> "Session":
        """Return a copy with a new title."""
        return self.model_copy(
            update={"title": title, "updated_at": max(now_epoch(), self.updated_at)}
        )
