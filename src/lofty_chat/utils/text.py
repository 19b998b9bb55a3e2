"""Text helpers for lofty_chat."""

__all__ = [
    "truncate_title",
]

ELLIPSIS = "..."


def truncate_title(text: str, max_length: int = 30) -> str:
    """Derive a session title from message content.

    Args:
        text: Message content
        max_length: Maximum number of characters kept before the ellipsis

    Returns:
        The first ``max_length`` characters, followed by "..." when the
        content was longer
    """
    text = text.strip()
    if len(text) > max_length:
        return text[:max_length] + ELLIPSIS
    return text
