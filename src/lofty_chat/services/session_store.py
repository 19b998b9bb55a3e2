"""Session store for lofty_chat.

This module owns the chat sessions and the active-session pointer. It is
the only writer of Session objects.
"""

import json

from lofty_chat.errors import SessionNotFoundError
from lofty_chat.logging import get_logger
from lofty_chat.models.message import Message, MessageRole
from lofty_chat.models.session import Session
from lofty_chat.services.persistence import PersistenceAdapter
from lofty_chat.utils.text import truncate_title

__all__ = [
    "SessionStore",
]

logger = get_logger(__name__)


class SessionStore:
    """Collection of chat sessions with an active pointer.

    Guarantees that once loaded there is always an active session. Every
    mutation swaps in a new immutable Session and writes the full list
    through the persistence adapter. Write failures are logged and ignored;
    the in-memory state stays authoritative.

    Mutations happen synchronously before the first ``await``, so each one
    is atomic on the event loop.

    Example:
        store = SessionStore(persistence)
        await store.load()
        session_id = await store.create_session()
        await store.append_message(session_id, Message.user("Hello"))
    """

    def __init__(
        self,
        persistence: PersistenceAdapter,
        *,
        title_max_length: int = 30,
    ) -> None:
        """Initialize the store.

        Args:
            persistence: Adapter the state is mirrored to
            title_max_length: Characters kept when auto-titling a session
        """
        self._persistence = persistence
        self._title_max_length = title_max_length
        self._sessions: list[Session] = []
        self._active_id: str | None = None

    async def load(self) -> None:
        """Read persisted state once; make sure a session is active."""
        self._sessions = await self._persistence.load_sessions()
        active_id = await self._persistence.load_active_session_id()

        if not self._sessions:
            await self.create_session()
            return

        if active_id is None or self._find_index(active_id) is None:
            active_id = self._sessions[0].id
        self._active_id = active_id

        logger.info(
            "sessions_loaded",
            session_count=len(self._sessions),
            active_session_id=self._active_id,
        )

    # === READ ACCESS ===

    @property
    def sessions(self) -> tuple[Session, ...]:
        return tuple(self._sessions)

    @property
    def active_session_id(self) -> str | None:
        return self._active_id

    @property
    def active_session(self) -> Session | None:
        if self._active_id is None:
            return None
        index = self._find_index(self._active_id)
        return self._sessions[index] if index is not None else None

    @property
    def messages(self) -> tuple[Message, ...]:
        """Messages of the active session."""
        session = self.active_session
        return session.messages if session else ()

    def get_session(self, session_id: str) -> Session:
        """Get a session by id.

        Raises:
            SessionNotFoundError: Unknown id
        """
        return self._sessions[self._require_index(session_id)]

    def export_history(self) -> str:
        """Pretty JSON dump of every session, for download."""
        return json.dumps(
            [s.model_dump(mode="json") for s in self._sessions],
            ensure_ascii=False,
            indent=2,
        )

    # === MUTATIONS ===

    async def create_session(self) -> str:
        """Append an empty session and make it active.

        Returns:
            Id of the new session
        """
        session = Session(title=f"New chat {len(self._sessions) + 1}")
        self._sessions.append(session)
        self._active_id = session.id
        logger.info("session_created", session_id=session.id, title=session.title)
        await self._persist()
        return session.id

    async def ensure_active_session(self) -> str:
        """Return the active session id, creating a session if needed."""
        if self.active_session is None:
            return await self.create_session()
        assert self._active_id is not None
        return self._active_id

    async def select_session(self, session_id: str) -> None:
        """Make a session active.

        Raises:
            SessionNotFoundError: Unknown id (state unchanged)
        """
        self._require_index(session_id)
        if self._active_id == session_id:
            return
        self._active_id = session_id
        await self._persist()

    async def delete_session(self, session_id: str) -> None:
        """Delete a session, keeping an active session available.

        If the deleted session was active, the first remaining session
        becomes active, or a fresh one is created when none remain.

        Raises:
            SessionNotFoundError: Unknown id (state unchanged)
        """
        index = self._require_index(session_id)
        del self._sessions[index]
        logger.info("session_deleted", session_id=session_id)

        if self._active_id == session_id:
            if self._sessions:
                self._active_id = self._sessions[0].id
            else:
                self._active_id = None
                await self.create_session()
                return
        await self._persist()

    async def rename_session(self, session_id: str, title: str) -> None:
        """Give a session a new title.

        Raises:
            SessionNotFoundError: Unknown id
            ValueError: Blank title
        """
        title = title.strip()
        if not title:
            raise ValueError("Session title cannot be empty")
        index = self._require_index(session_id)
        self._sessions[index] = self._sessions[index].renamed(title)
        await self._persist()

    async def append_message(self, session_id: str, message: Message) -> Session:
        """Append a message to a session.

        The first user message with non-blank content also sets the title.

        Args:
            session_id: Target session
            message: Message to append

        Returns:
            The updated session

        Raises:
            SessionNotFoundError: Unknown id
        """
        index = self._require_index(session_id)
        session = self._sessions[index]

        title = None
        if (
            message.role == MessageRole.USER
            and message.content.strip()
            and not session.has_user_message
        ):
            title = truncate_title(message.content, self._title_max_length)

        updated = session.with_message(message, title=title)
        self._sessions[index] = updated

        logger.debug(
            "message_appended",
            session_id=session_id,
            role=message.role.value,
            message_count=len(updated.messages),
        )
        await self._persist()
        return updated

    async def clear_all(self) -> str:
        """Delete every session and start a fresh one.

        Returns:
            Id of the fresh session
        """
        count = len(self._sessions)
        self._sessions = []
        self._active_id = None
        logger.info("sessions_cleared", session_count=count)
        return await self.create_session()

    # === INTERNALS ===

    def _find_index(self, session_id: str) -> int | None:
        for i, session in enumerate(self._sessions):
            if session.id == session_id:
                return i
        return None

    def _require_index(self, session_id: str) -> int:
        index = self._find_index(session_id)
        if index is None:
            raise SessionNotFoundError(session_id)
        return index

    async def _persist(self) -> None:
        try:
            await self._persistence.save_sessions(list(self._sessions), self._active_id)
        except Exception as e:
            logger.warning("session_persist_failed", error=str(e))
