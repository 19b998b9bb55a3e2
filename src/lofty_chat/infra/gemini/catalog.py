"""Static Gemini model catalog and model-id mapping for lofty_chat.

The UI offers logical model ids; this table maps each to the model name and
API version used in the request path. Ids missing from the table fall back
to DEFAULT_REMOTE_MODEL instead of failing, because the picker may list
models the table does not know yet.
"""

from typing import NamedTuple

from lofty_chat.models.model_option import (
    LocalModel,
    LocalReason,
    ModelOption,
    ModelRoute,
    RemoteModel,
)

__all__ = [
    "DEFAULT_REMOTE_MODEL",
    "LOCAL_MODEL_IDS",
    "MODEL_CATALOG",
    "MODEL_MAPPING",
    "is_local_model",
    "list_model_options",
    "resolve_remote_model",
    "resolve_route",
]


class ApiModel(NamedTuple):
    api_model: str
    api_version: str


DEFAULT_REMOTE_MODEL = ApiModel("gemini-1.5-flash", "v1beta")

MODEL_MAPPING: dict[str, ApiModel] = {
    "gemini-2.0-flash": ApiModel("gemini-2.0-flash", "v1beta"),
    "gemini-2.0-flash-thinking": ApiModel("gemini-2.0-flash-thinking-exp", "v1beta"),
    "gemini-deep-research": ApiModel("gemini-1.5-pro", "v1beta"),
    "gemini-personalization": ApiModel("gemini-2.0-flash", "v1beta"),
    "gemini-2.5-pro": ApiModel("gemini-2.5-pro", "v1beta"),
    "gemini-1.5-pro": ApiModel("gemini-1.5-pro", "v1"),
    "gemini-1.5-flash": ApiModel("gemini-1.5-flash", "v1"),
}

LOCAL_MODEL_IDS = frozenset({"lofty-simulator"})

MODEL_CATALOG: tuple[ModelOption, ...] = (
    ModelOption(
        id="gemini-2.0-flash",
        display_name="Gemini 2.0 Flash",
        description="Get everyday help",
        capabilities=frozenset({"chat", "fast responses"}),
        context_window_tokens=1_048_576,
    ),
    ModelOption(
        id="gemini-2.0-flash-thinking",
        display_name="Gemini 2.0 Flash Thinking (experimental)",
        description="Uses advanced reasoning",
        capabilities=frozenset({"chat", "reasoning"}),
        context_window_tokens=1_048_576,
    ),
    ModelOption(
        id="gemini-deep-research",
        display_name="Deep Research",
        description="Get in-depth research reports",
        capabilities=frozenset({"chat", "research", "long context"}),
        context_window_tokens=2_097_152,
    ),
    ModelOption(
        id="gemini-personalization",
        display_name="Personalization (experimental)",
        description="Help based on your Search history",
        capabilities=frozenset({"chat", "personalization"}),
        context_window_tokens=1_048_576,
    ),
    ModelOption(
        id="gemini-2.5-pro",
        display_name="Gemini 2.5 Pro (experimental)",
        description="Best for complex tasks",
        capabilities=frozenset({"chat", "reasoning", "code"}),
        context_window_tokens=1_048_576,
    ),
    ModelOption(
        id="gemini-1.5-pro",
        display_name="Gemini 1.5 Pro",
        description="Long-context analysis and document review",
        capabilities=frozenset({"chat", "long context", "document analysis"}),
        context_window_tokens=2_097_152,
    ),
    ModelOption(
        id="lofty-simulator",
        display_name="Offline simulator",
        description="Canned replies, no API key needed",
        capabilities=frozenset({"chat", "offline"}),
        context_window_tokens=32_768,
    ),
)


def is_local_model(model_id: str) -> bool:
    """Check if a model id is answered by the built-in simulator."""
    return model_id in LOCAL_MODEL_IDS


def resolve_remote_model(model_id: str) -> RemoteModel:
    """Map a logical model id to its API model and version."""
    api_model, api_version = MODEL_MAPPING.get(model_id, DEFAULT_REMOTE_MODEL)
    return RemoteModel(model_id=model_id, api_model=api_model, api_version=api_version)


def resolve_route(model_id: str, api_key: str | None) -> ModelRoute:
    """Decide once per call who answers a message.

    Args:
        model_id: Selected logical model id
        api_key: Configured API key, if any

    Returns:
        LocalModel for simulator models or when no key is configured,
        RemoteModel otherwise
    """
    if is_local_model(model_id):
        return LocalModel(model_id=model_id, reason=LocalReason.LOCAL_MODEL)
    if not api_key or not api_key.strip():
        return LocalModel(model_id=model_id, reason=LocalReason.MISSING_CREDENTIAL)
    return resolve_remote_model(model_id)


def list_model_options(api_key: str | None = None) -> list[ModelOption]:
    """Catalog entries with ``disabled`` derived from key presence."""
    has_key = bool(api_key and api_key.strip())
    return [
        option.model_copy(update={"disabled": not has_key and not is_local_model(option.id)})
        for option in MODEL_CATALOG
    ]
