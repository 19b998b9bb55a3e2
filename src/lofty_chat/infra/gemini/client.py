"""Gemini gateway for lofty_chat.

This module implements the ModelGatewayInterface against the Gemini
``generateContent`` REST endpoint using httpx.
"""

from collections.abc import Sequence
from typing import Any, Self

import httpx

from lofty_chat.config import GeminiSettings
from lofty_chat.errors import GatewayError, MalformedResponseError, MissingCredentialError
from lofty_chat.infra.gemini.catalog import list_model_options, resolve_remote_model
from lofty_chat.interfaces.gateway import ModelGatewayInterface
from lofty_chat.logging import get_logger
from lofty_chat.models.message import Message, MessageRole
from lofty_chat.models.model_option import ModelOption

__all__ = [
    "DEFAULT_MAX_TOKENS",
    "DEFAULT_TEMPERATURE",
    "GeminiGateway",
    "build_generate_body",
    "extract_candidate_text",
]

logger = get_logger(__name__)

DEFAULT_TEMPERATURE = 0.7
DEFAULT_MAX_TOKENS = 1024

SAFETY_CATEGORIES = (
    "HARM_CATEGORY_HARASSMENT",
    "HARM_CATEGORY_HATE_SPEECH",
    "HARM_CATEGORY_SEXUALLY_EXPLICIT",
    "HARM_CATEGORY_DANGEROUS_CONTENT",
)


def build_generate_body(
    messages: Sequence[Message],
    system_prompt: str,
    temperature: float,
    max_tokens: int,
    *,
    top_p: float,
    top_k: int,
    safety_threshold: str,
) -> dict[str, Any]:
    """Build a ``generateContent`` request body.

    Assistant turns use the API's ``model`` role. A non-empty system prompt
    is sent as a leading user turn.
    """
    contents: list[dict[str, Any]] = []
    if system_prompt.strip():
        contents.append({"role": "user", "parts": [{"text": system_prompt}]})
    for message in messages:
        role = "model" if message.role == MessageRole.ASSISTANT else "user"
        contents.append({"role": role, "parts": [{"text": message.content}]})

    return {
        "contents": contents,
        "generationConfig": {
            "temperature": temperature,
            "maxOutputTokens": max_tokens,
            "topP": top_p,
            "topK": top_k,
        },
        "safetySettings": [
            {"category": category, "threshold": safety_threshold}
            for category in SAFETY_CATEGORIES
        ],
    }


def extract_candidate_text(data: Any) -> str | None:
    """Return the text of the first candidate, or None if there is none."""
    if not isinstance(data, dict):
        return None
    candidates = data.get("candidates")
    if not isinstance(candidates, list) or not candidates:
        return None
    if not isinstance(candidates[0], dict):
        return None
    content = candidates[0].get("content")
    if not isinstance(content, dict):
        return None
    parts = content.get("parts")
    if not isinstance(parts, list):
        return None
    texts = [
        p["text"] for p in parts if isinstance(p, dict) and isinstance(p.get("text"), str)
    ]
    return "".join(texts) or None


class GeminiGateway(ModelGatewayInterface):
    """Gemini implementation of the model gateway.

    Each call opens its own short-lived httpx client, so the gateway keeps
    no state between calls. A custom transport can be injected for tests.

    Example:
        gateway = GeminiGateway(GeminiSettings())
        text = await gateway.generate(messages, "You are...", key, "gemini-2.0-flash")
    """

    config_class = GeminiSettings

    def __init__(
        self,
        settings: GeminiSettings,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        """Initialize the gateway.

        Args:
            settings: Gemini API settings
            transport: Optional httpx transport (e.g. httpx.MockTransport)
        """
        self._settings = settings
        self._base_url = settings.base_url.rstrip("/")
        self._transport = transport

    @classmethod
    async def from_config(cls, config: GeminiSettings) -> Self:
        """Factory method for LoftyChat instantiation."""
        return cls(config)

    @classmethod
    async def from_dict(cls, config: dict[str, Any]) -> Self:
        """Factory method for a custom config dict."""
        config = dict(config)
        transport = config.pop("transport", None)
        return cls(GeminiSettings(**config), transport=transport)

    async def close(self) -> None:
        """Close resources (no-op, clients are per call)."""
        pass

    def _client(self, timeout: float) -> httpx.AsyncClient:
        return httpx.AsyncClient(timeout=timeout, transport=self._transport)

    async def generate(
        self,
        messages: Sequence[Message],
        system_prompt: str,
        api_key: str,
        model_id: str,
        temperature: float | None = None,
        max_tokens: int | None = None,
    ) -> str:
        """Generate the next assistant turn."""
        if not api_key or not api_key.strip():
            raise MissingCredentialError()

        route = resolve_remote_model(model_id)
        body = build_generate_body(
            messages,
            system_prompt,
            DEFAULT_TEMPERATURE if temperature is None else temperature,
            DEFAULT_MAX_TOKENS if max_tokens is None else max_tokens,
            top_p=self._settings.top_p,
            top_k=self._settings.top_k,
            safety_threshold=self._settings.safety_threshold,
        )
        url = f"{self._base_url}/{route.api_version}/models/{route.api_model}:generateContent"

        logger.info(
            "gemini_request",
            model_id=model_id,
            api_model=route.api_model,
            api_version=route.api_version,
            message_count=len(messages),
        )

        try:
            async with self._client(self._settings.request_timeout_seconds) as client:
                resp = await client.post(url, params={"key": api_key.strip()}, json=body)
        except httpx.TimeoutException as e:
            timeout = self._settings.request_timeout_seconds
            logger.warning("gemini_timeout", model_id=model_id, timeout=timeout)
            raise GatewayError(None, f"Timeout after {timeout}s") from e
        except httpx.HTTPError as e:
            logger.warning("gemini_transport_error", model_id=model_id, error=str(e))
            raise GatewayError(None, str(e)) from e

        if not resp.is_success:
            logger.warning(
                "gemini_http_error",
                model_id=model_id,
                status_code=resp.status_code,
                body=resp.text[:200],
            )
            raise GatewayError(resp.status_code, resp.text)

        try:
            data = resp.json()
        except ValueError as e:
            raise MalformedResponseError("Gemini API returned a non-JSON body") from e

        text = extract_candidate_text(data)
        if text is None:
            logger.warning("gemini_empty_candidates", model_id=model_id)
            raise MalformedResponseError()

        logger.debug("gemini_response", model_id=model_id, length=len(text))
        return text

    async def test_credential(self, api_key: str) -> bool:
        """Check an API key against the models-listing endpoint."""
        if not api_key or not api_key.strip():
            return False
        try:
            async with self._client(self._settings.credential_timeout_seconds) as client:
                resp = await client.get(
                    f"{self._base_url}/v1beta/models",
                    params={"key": api_key.strip()},
                )
            if not resp.is_success:
                logger.info("credential_rejected", status_code=resp.status_code)
                return False
            models = resp.json().get("models")
            return isinstance(models, list) and len(models) > 0
        except Exception as e:
            logger.info("credential_check_failed", error=str(e))
            return False

    def list_models(self, api_key: str | None = None) -> list[ModelOption]:
        """Return the static model catalog."""
        return list_model_options(api_key)
