"""Model catalog and routing models for lofty_chat."""

from enum import StrEnum

from pydantic import BaseModel, Field

__all__ = [
    "LocalModel",
    "LocalReason",
    "ModelOption",
    "ModelRoute",
    "RemoteModel",
]


class ModelOption(BaseModel, frozen=True):
    """Entry of the model picker.

    Attributes:
        id: Logical model id stored in settings
        display_name: Human-readable name
        description: One-line description
        capabilities: Capability labels shown on the model card
        context_window_tokens: Context window size in tokens
        disabled: True when the model cannot be used (no API key)
    """

    id: str
    display_name: str
    description: str
    capabilities: frozenset[str] = frozenset()
    context_window_tokens: int = Field(gt=0)
    disabled: bool = False


class LocalReason(StrEnum):
    """Why a message is answered locally instead of by the remote API."""

    MISSING_CREDENTIAL = "missing_credential"
    LOCAL_MODEL = "local_model"


class LocalModel(BaseModel, frozen=True):
    """Route answered by the built-in simulator."""

    model_id: str
    reason: LocalReason


class RemoteModel(BaseModel, frozen=True):
    """Route answered by the Gemini API.

    Attributes:
        model_id: Logical model id the user selected
        api_model: Model name in the API path
        api_version: API version segment (e.g. "v1beta")
    """

    model_id: str
    api_model: str
    api_version: str


ModelRoute = LocalModel | RemoteModel
