"""lofty_chat - Async core of a Gemini-backed consulting chat client.

This package provides tools for:
- Managing persisted chat sessions with an active-session pointer
- Sending messages to Gemini, with a simulated fallback when no key is set
- Configuring the system prompt, generation parameters and prompt templates
- Checking documents for alignment with a business strategy

Example usage:
    from lofty_chat import JSONFileStore, LoftyChat

    # Simple usage - config loaded from .env automatically
    async with LoftyChat(store_class=JSONFileStore) as chat:
        await chat.set_api_key("...")
        await chat.send_message("Draft a go-to-market outline")
        reply = chat.messages[-1].content
"""

__version__ = "0.1.0"

# Errors
from lofty_chat.errors import (
    GatewayError,
    LoftyChatError,
    MalformedResponseError,
    MissingCredentialError,
    ModelGatewayError,
    NotFoundError,
    RequestValidationError,
    SessionNotFoundError,
    StorageError,
    TemplateNotFoundError,
)

# Implementations
from lofty_chat.infra.gemini.client import GeminiGateway
from lofty_chat.infra.redis.store import RedisKeyValueStore
from lofty_chat.infra.storage.file_store import JSONFileStore
from lofty_chat.infra.storage.memory_store import MemoryKeyValueStore

# Interfaces
from lofty_chat.interfaces.extractor import TextExtractorInterface
from lofty_chat.interfaces.gateway import ModelGatewayInterface
from lofty_chat.interfaces.notifier import NotifierInterface
from lofty_chat.interfaces.storage import KeyValueStoreInterface

# Models
from lofty_chat.models.message import AttachmentMeta, Message, MessageRole
from lofty_chat.models.session import Session
from lofty_chat.models.settings import SystemPromptSettings, UserProfile
from lofty_chat.models.verification import DocumentFile, VerificationRequest, VerificationResult
from lofty_chat.orchestrator import LoftyChat

__all__ = [  # noqa: RUF022
    # Orchestrator
    "LoftyChat",
    # Implementations
    "GeminiGateway",
    "JSONFileStore",
    "MemoryKeyValueStore",
    "RedisKeyValueStore",
    # Interfaces
    "KeyValueStoreInterface",
    "ModelGatewayInterface",
    "NotifierInterface",
    "TextExtractorInterface",
    # Models
    "AttachmentMeta",
    "DocumentFile",
    "Message",
    "MessageRole",
    "Session",
    "SystemPromptSettings",
    "UserProfile",
    "VerificationRequest",
    "VerificationResult",
    # Errors
    "GatewayError",
    "LoftyChatError",
    "MalformedResponseError",
    "MissingCredentialError",
    "ModelGatewayError",
    "NotFoundError",
    "RequestValidationError",
    "SessionNotFoundError",
    "StorageError",
    "TemplateNotFoundError",
]
