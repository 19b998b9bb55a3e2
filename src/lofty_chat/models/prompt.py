"""Prompt template and prompt validation models for lofty_chat."""

from enum import StrEnum

from pydantic import BaseModel

__all__ = [
    "PromptTemplate",
    "PromptValidationResult",
    "TemplateCategory",
]


class TemplateCategory(StrEnum):
    """Grouping used by the template picker."""

    BUSINESS = "business"
    CREATIVE = "creative"
    RESEARCH = "research"
    GENERAL = "general"


class PromptTemplate(BaseModel, frozen=True):
    """A ready-made system prompt."""

    id: str
    name: str
    description: str
    template: str
    tags: tuple[str, ...] = ()
    category: TemplateCategory = TemplateCategory.GENERAL


class PromptValidationResult(BaseModel, frozen=True):
    """Outcome of a system prompt lint."""

    is_valid: bool
    message: str
    warnings: tuple[str, ...] = ()
