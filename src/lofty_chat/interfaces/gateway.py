"""Model gateway interface for lofty_chat.

This module defines the Protocol for the component that talks to the
remote completion API.
"""

from collections.abc import Sequence
from typing import ClassVar, Protocol, runtime_checkable

from lofty_chat.models.message import Message
from lofty_chat.models.model_option import ModelOption

__all__ = [
    "ModelGatewayInterface",
]


@runtime_checkable
class ModelGatewayInterface(Protocol):
    """Contract for completion API access.

    Implementations are stateless between calls and never retry.
    """

    config_class: ClassVar[type | None] = None

    async def generate(
        self,
        messages: Sequence[Message],
        system_prompt: str,
        api_key: str,
        model_id: str,
        temperature: float | None = None,
        max_tokens: int | None = None,
    ) -> str:
        """Generate the next assistant turn.

        Args:
            messages: Conversation, oldest first
            system_prompt: System prompt (may be empty)
            api_key: API key for the call
            model_id: Logical model id
            temperature: Sampling temperature (default 0.7)
            max_tokens: Maximum output tokens (default 1024)

        Returns:
            Generated text

        Raises:
            MissingCredentialError: api_key is empty
            GatewayError: non-2xx response or transport failure
            MalformedResponseError: no candidate text in the response
        """
        ...

    async def test_credential(self, api_key: str) -> bool:
        """Check an API key against the models-listing endpoint.

        Returns:
            True if the key works; False on any failure (never raises)
        """
        ...

    def list_models(self, api_key: str | None = None) -> list[ModelOption]:
        """Return the static model catalog.

        Args:
            api_key: Configured key; remote models are disabled without one

        Returns:
            Catalog entries in display order
        """
        ...
