"""Text extraction interface for lofty_chat."""

from typing import Protocol, runtime_checkable

from lofty_chat.models.verification import DocumentFile

__all__ = [
    "TextExtractorInterface",
]


@runtime_checkable
class TextExtractorInterface(Protocol):
    """Contract for turning an uploaded document into plain text."""

    async def extract_text(self, document: DocumentFile) -> str:
        """Extract the text content of a document.

        Args:
            document: Uploaded file

        Returns:
            Plain text (or a placeholder for unsupported formats)
        """
        ...
