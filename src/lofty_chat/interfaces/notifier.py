"""Notifier interface for lofty_chat."""

from typing import Protocol, runtime_checkable

from lofty_chat.models.notification import NotificationLevel

__all__ = [
    "NotifierInterface",
]


@runtime_checkable
class NotifierInterface(Protocol):
    """Contract for non-blocking user notifications (toasts)."""

    def notify(
        self,
        title: str,
        description: str = "",
        level: NotificationLevel = NotificationLevel.INFO,
    ) -> None:
        """Publish a notification. Must not raise or block."""
        ...
