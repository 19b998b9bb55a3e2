"""Message models for lofty_chat.

Messages are append-only: once a message is stored in a session it is
never modified.
"""

from enum import StrEnum

from pydantic import BaseModel, Field

from lofty_chat.utils.ids import new_id, now_epoch

__all__ = [
    "AttachmentMeta",
    "Message",
    "MessageRole",
]


class MessageRole(StrEnum):
    """Author of a chat message."""

    USER = "user"
    ASSISTANT = "assistant"


class AttachmentMeta(BaseModel, frozen=True):
    """Metadata of a file attached to a message.

    Only metadata is kept; file contents are never stored in a session.
    """

    name: str
    mime_type: str = Field(default="application/octet-stream")
    size_bytes: int = Field(default=0, ge=0)


class Message(BaseModel, frozen=True):
    """A single chat message.

    Attributes:
        id: Opaque message identifier
        role: Author of the message
        content: Message text (may be empty when only attachments were sent)
        attachments: Metadata of attached files, in the order they were sent
        created_at: Creation timestamp in epoch seconds
    """

    id: str = Field(default_factory=new_id)
    role: MessageRole
    content: str = ""
    attachments: tuple[AttachmentMeta, ...] = ()
    created_at: int = Field(default_factory=now_epoch)

    @classmethod
    def user(cls, content: str, attachments: tuple[AttachmentMeta, ...] = ()) -> "Message":
        """Create a user message."""
        return cls(role=MessageRole.USER, content=content, attachments=attachments)

    @classmethod
    def assistant(cls, content: str) -> "Message":
        """Create an assistant message."""
        return cls(role=MessageRole.ASSISTANT, content=content)
