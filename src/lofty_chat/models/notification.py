"""Notification models for lofty_chat."""

from enum import StrEnum

from pydantic import BaseModel, Field

from lofty_chat.utils.ids import now_epoch

__all__ = [
    "Notification",
    "NotificationLevel",
]


class NotificationLevel(StrEnum):
    INFO = "info"
    WARNING = "warning"
    ERROR = "error"


class Notification(BaseModel, frozen=True):
    """A non-blocking message for the UI (toast)."""

    title: str
    description: str = ""
    level: NotificationLevel = NotificationLevel.INFO
    created_at: int = Field(default_factory=now_epoch)
