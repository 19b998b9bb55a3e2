"""System prompt linting for lofty_chat.

Catches prompts that are too short to steer the model and flags common
weaknesses as warnings without rejecting the prompt.
"""

import re

from lofty_chat.models.prompt import PromptValidationResult

__all__ = [
    "validate_prompt",
]

MIN_PROMPT_LENGTH = 20
MAX_RECOMMENDED_LENGTH = 1000
AMBIGUOUS_TERMS = ("maybe", "possibly", "perhaps", "sometimes")

_ROLE_DEFINITION = re.compile(r"you are|act as|behave as|function as|serve as", re.IGNORECASE)


def validate_prompt(text: str) -> PromptValidationResult:
    """Lint a system prompt.

    Args:
        text: Prompt to check

    Returns:
        PromptValidationResult; ``is_valid`` is False only for prompts
        shorter than 20 characters
    """
    if len(text) < MIN_PROMPT_LENGTH:
        return PromptValidationResult(is_valid=False, message="System prompt is too short")

    warnings: list[str] = []
    if not _ROLE_DEFINITION.search(text):
        warnings.append("Consider defining a clear role (e.g., 'You are...')")
    if len(text) > MAX_RECOMMENDED_LENGTH:
        warnings.append("Prompt is very long. Consider simplifying for better results.")

    lowered = text.lower()
    for term in AMBIGUOUS_TERMS:
        if term in lowered:
            warnings.append(
                f'Contains ambiguous term: "{term}". Consider using more definitive language.'
            )

    message = "Prompt is valid, but could be improved" if warnings else "Prompt looks good!"
    return PromptValidationResult(is_valid=True, message=message, warnings=tuple(warnings))
