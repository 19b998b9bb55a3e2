"""Message dispatch for lofty_chat.

This module is the single entry point for "the user sends a message". It
appends the user turn, picks a route (simulator or Gemini), and appends
the assistant turn to the session the message was sent from.
"""

import asyncio
from collections.abc import Sequence

from lofty_chat.errors import ModelGatewayError, SessionNotFoundError
from lofty_chat.infra.gemini.catalog import resolve_route
from lofty_chat.interfaces.gateway import ModelGatewayInterface
from lofty_chat.interfaces.notifier import NotifierInterface
from lofty_chat.logging import get_logger
from lofty_chat.models.message import AttachmentMeta, Message
from lofty_chat.models.model_option import LocalModel, LocalReason, ModelRoute
from lofty_chat.models.notification import NotificationLevel
from lofty_chat.models.verification import DocumentFile
from lofty_chat.services.session_store import SessionStore
from lofty_chat.services.settings_store import SettingsStore

__all__ = [
    "CREDENTIAL_HINT",
    "MessageDispatcher",
    "error_reply",
    "simulated_reply",
]

logger = get_logger(__name__)

CREDENTIAL_HINT = (
    "To get real answers from Gemini, add your API key in the system settings."
)


def simulated_reply(content: str, reason: LocalReason) -> str:
    """Canned reply used when the simulator answers."""
    reply = f'This is a simulated response to: "{content}"'
    if reason == LocalReason.MISSING_CREDENTIAL:
        reply = f"{reply}\n\n{CREDENTIAL_HINT}"
    return reply


def error_reply(error: ModelGatewayError) -> str:
    return f"Sorry, I couldn't get a response from Gemini. {error}"


def _to_attachment(item: DocumentFile | AttachmentMeta) -> AttachmentMeta:
    if isinstance(item, DocumentFile):
        return item.to_attachment()
    return item


class MessageDispatcher:
    """Coordinates session mutation and model invocation.

    Gateway errors never escape ``send_message``: they become an assistant
    turn explaining the failure plus an error notification.

    Concurrency: one in-flight call per session is the expected use. Each
    append is atomic on the event loop, so a call's user message always
    precedes its reply, but concurrent calls on the same session may
    interleave their turns.

    Example:
        dispatcher = MessageDispatcher(sessions, settings, gateway, notifications)
        await dispatcher.send_message("Summarize our Q3 plan")
    """

    def __init__(
        self,
        session_store: SessionStore,
        settings_store: SettingsStore,
        gateway: ModelGatewayInterface,
        notifier: NotifierInterface,
        *,
        simulated_latency_seconds: float = 1.0,
    ) -> None:
        """Initialize dispatcher with dependencies.

        Args:
            session_store: Owner of the chat sessions
            settings_store: Source of prompt, parameters and credential
            gateway: Remote completion API
            notifier: Sink for user-visible failures
            simulated_latency_seconds: Delay before a simulated reply
        """
        self._sessions = session_store
        self._settings = settings_store
        self._gateway = gateway
        self._notifier = notifier
        self._simulated_latency_seconds = simulated_latency_seconds
        self._in_flight = 0

    @property
    def is_generating(self) -> bool:
        """True while any reply is being produced."""
        return self._in_flight > 0

    async def send_message(
        self,
        content: str,
        attachments: Sequence[DocumentFile | AttachmentMeta] | None = None,
    ) -> Message | None:
        """Send a user message and append the assistant reply.

        Args:
            content: Message text
            attachments: Uploaded files or their metadata

        Returns:
            The assistant message, or None when nothing was sent or the
            originating session was deleted before the reply arrived
        """
        attachment_meta = tuple(_to_attachment(a) for a in attachments or ())
        if not content.strip() and not attachment_meta:
            return None

        session_id = await self._sessions.ensure_active_session()
        session = await self._sessions.append_message(
            session_id,
            Message.user(content, attachment_meta),
        )

        self._in_flight += 1
        try:
            model_id = self._settings.system_prompt.selected_model
            api_key = self._settings.api_key
            route = resolve_route(model_id, api_key)
            reply = await self._reply(route, content, session.messages, api_key)
            return await self._append_reply(session_id, Message.assistant(reply))
        finally:
            self._in_flight -= 1

    async def _reply(
        self,
        route: ModelRoute,
        content: str,
        history: Sequence[Message],
        api_key: str | None,
    ) -> str:
        if isinstance(route, LocalModel):
            logger.info("reply_simulated", model=route.model_id, reason=route.reason.value)
            if self._simulated_latency_seconds > 0:
                await asyncio.sleep(self._simulated_latency_seconds)
            return simulated_reply(content, route.reason)

        settings = self._settings.system_prompt
        try:
            reply = await self._gateway.generate(
                list(history),
                settings.prompt,
                api_key or "",
                route.model_id,
                temperature=settings.temperature,
                max_tokens=settings.max_tokens,
            )
        except ModelGatewayError as e:
            logger.warning("reply_failed", model=route.model_id, error=str(e))
            self._notifier.notify(
                "Gemini request failed",
                str(e),
                NotificationLevel.ERROR,
            )
            return error_reply(e)

        logger.info("reply_generated", model=route.model_id, reply_length=len(reply))
        return reply

    async def _append_reply(self, session_id: str, reply: Message) -> Message | None:
        try:
            await self._sessions.append_message(session_id, reply)
        except SessionNotFoundError:
            logger.warning("reply_dropped", session_id=session_id, reason="session_deleted")
            return None
        return reply
