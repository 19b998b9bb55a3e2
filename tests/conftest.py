"""Shared test fixtures for lofty_chat.

This module provides pytest fixtures used across all tests.
"""

import random
from unittest.mock import AsyncMock

import pytest
from mocks.mock_gateway import StubGateway
from mocks.mock_store import CountingKeyValueStore

from lofty_chat.config import LoftyChatConfig
from lofty_chat.models.message import AttachmentMeta, Message
from lofty_chat.models.verification import DocumentFile, VerificationRequest
from lofty_chat.services.dispatch import MessageDispatcher
from lofty_chat.services.notifications import NotificationCenter
from lofty_chat.services.persistence import PersistenceAdapter
from lofty_chat.services.session_store import SessionStore
from lofty_chat.services.settings_store import SettingsStore


# Mock fixtures
@pytest.fixture
def mock_gateway() -> AsyncMock:
    """Create mock model gateway."""
    gateway = AsyncMock()
    gateway.generate.return_value = "Mock reply"
    gateway.test_credential.return_value = True
    return gateway


@pytest.fixture
def mock_extractor() -> AsyncMock:
    """Create mock text extractor."""
    extractor = AsyncMock()
    extractor.extract_text.return_value = "Quarterly plan: expand into two new regions."
    return extractor


@pytest.fixture
def stub_gateway() -> StubGateway:
    return StubGateway(reply="Here is my advice.")


@pytest.fixture
def kv_store() -> CountingKeyValueStore:
    return CountingKeyValueStore()


@pytest.fixture
def persistence(kv_store: CountingKeyValueStore) -> PersistenceAdapter:
    return PersistenceAdapter(kv_store)


@pytest.fixture
async def session_store(persistence: PersistenceAdapter) -> SessionStore:
    """Create a loaded session store (one empty active session)."""
    store = SessionStore(persistence)
    await store.load()
    return store


@pytest.fixture
async def settings_store(persistence: PersistenceAdapter) -> SettingsStore:
    """Create a loaded settings store without an API key."""
    store = SettingsStore(persistence)
    await store.load()
    return store


@pytest.fixture
def notifications() -> NotificationCenter:
    return NotificationCenter()


@pytest.fixture
def dispatcher(
    session_store: SessionStore,
    settings_store: SettingsStore,
    stub_gateway: StubGateway,
    notifications: NotificationCenter,
) -> MessageDispatcher:
    """Create a dispatcher with no simulated latency."""
    return MessageDispatcher(
        session_store,
        settings_store,
        stub_gateway,
        notifications,
        simulated_latency_seconds=0,
    )


@pytest.fixture
def fast_config() -> LoftyChatConfig:
    """Config with simulated delays disabled."""
    return LoftyChatConfig(simulated_latency_seconds=0, analysis_delay_seconds=0)


@pytest.fixture
def rng() -> random.Random:
    return random.Random(42)


# Sample data fixtures
@pytest.fixture
def sample_attachment() -> AttachmentMeta:
    """Create sample attachment metadata."""
    return AttachmentMeta(name="strategy.pdf", mime_type="application/pdf", size_bytes=20480)


@pytest.fixture
def sample_messages(sample_attachment: AttachmentMeta) -> list[Message]:
    """Create sample conversation."""
    return [
        Message.user("How should we price the retainer?", (sample_attachment,)),
        Message.assistant("Start from the value delivered per month."),
        Message.user("And for small clients?"),
    ]


@pytest.fixture
def sample_document() -> DocumentFile:
    """Create sample plain-text document."""
    return DocumentFile(
        name="plan.txt",
        mime_type="text/plain",
        content="We will expand into two new regions next year.".encode(),
    )


@pytest.fixture
def sample_request(sample_document: DocumentFile) -> VerificationRequest:
    """Create sample verification request."""
    return VerificationRequest(
        document=sample_document,
        business_strategy="Grow recurring revenue in existing markets.",
        mission_vision="Help small firms make better decisions.",
    )
