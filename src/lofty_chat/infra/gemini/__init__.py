"""Gemini completion API adapter for lofty_chat."""

from lofty_chat.infra.gemini.catalog import (
    MODEL_CATALOG,
    MODEL_MAPPING,
    list_model_options,
    resolve_remote_model,
    resolve_route,
)
from lofty_chat.infra.gemini.client import GeminiGateway

__all__ = [
    "MODEL_CATALOG",
    "MODEL_MAPPING",
    "GeminiGateway",
    "list_model_options",
    "resolve_remote_model",
    "resolve_route",
]
