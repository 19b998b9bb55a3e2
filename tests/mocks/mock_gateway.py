"""Stub model gateway for testing."""

import asyncio
from collections.abc import Sequence
from typing import Any, Self

from lofty_chat.infra.gemini.catalog import list_model_options
from lofty_chat.interfaces.gateway import ModelGatewayInterface
from lofty_chat.models.message import Message
from lofty_chat.models.model_option import ModelOption


class StubGateway(ModelGatewayInterface):
    """Gateway returning a canned reply and recording every call.

    Set ``error`` to make ``generate`` raise it. Set ``release`` to an
    asyncio.Event to hold replies until the test sets it.
    """

    config_class = None

    def __init__(self, reply: str = "Stub reply", valid_keys: Sequence[str] = ()) -> None:
        self.reply = reply
        self.valid_keys = set(valid_keys)
        self.error: Exception | None = None
        self.release: asyncio.Event | None = None
        self.calls: list[dict[str, Any]] = []

    @classmethod
    async def from_dict(cls, config: dict[str, Any]) -> Self:
        return cls(
            reply=config.get("reply", "Stub reply"),
            valid_keys=config.get("valid_keys", ()),
        )

    async def close(self) -> None:
        pass

    async def generate(
        self,
        messages: Sequence[Message],
        system_prompt: str,
        api_key: str,
        model_id: str,
        temperature: float | None = None,
        max_tokens: int | None = None,
    ) -> str:
        self.calls.append(
            {
                "messages": list(messages),
                "system_prompt": system_prompt,
                "api_key": api_key,
                "model_id": model_id,
                "temperature": temperature,
                "max_tokens": max_tokens,
            }
        )
        if self.release is not None:
            await self.release.wait()
        if self.error is not None:
            raise self.error
        return self.reply

    async def test_credential(self, api_key: str) -> bool:
        return api_key in self.valid_keys

    def list_models(self, api_key: str | None = None) -> list[ModelOption]:
        return list_model_options(api_key)
