"""Notification center for lofty_chat.

Collects toast-style notifications for the UI to display. Publishing
never blocks; the UI drains the queue when it renders.
"""

from collections import deque

from lofty_chat.interfaces.notifier import NotifierInterface
from lofty_chat.logging import get_logger
from lofty_chat.models.notification import Notification, NotificationLevel

__all__ = [
    "NotificationCenter",
]

logger = get_logger(__name__)


class NotificationCenter(NotifierInterface):
    """Bounded in-memory notification queue."""

    def __init__(self, max_pending: int = 50) -> None:
        self._pending: deque[Notification] = deque(maxlen=max_pending)

    def notify(
        self,
        title: str,
        description: str = "",
        level: NotificationLevel = NotificationLevel.INFO,
    ) -> None:
        notification = Notification(title=title, description=description, level=level)
        self._pending.append(notification)
        log = logger.warning if level == NotificationLevel.ERROR else logger.info
        log("notification", title=title, level=level.value)

    @property
    def pending(self) -> tuple[Notification, ...]:
        return tuple(self._pending)

    def drain(self) -> list[Notification]:
        """Return and clear pending notifications, oldest first."""
        drained = list(self._pending)
        self._pending.clear()
        return drained
