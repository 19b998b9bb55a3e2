"""Document text extraction for lofty_chat.

Only plain text is read. Other formats get a placeholder naming the file;
real PDF/DOCX extraction can be plugged in through TextExtractorInterface.
"""

from lofty_chat.interfaces.extractor import TextExtractorInterface
from lofty_chat.logging import get_logger
from lofty_chat.models.verification import DocumentFile

__all__ = [
    "PlainTextExtractor",
]

logger = get_logger(__name__)

PLAIN_TEXT_MIME_TYPE = "text/plain"


class PlainTextExtractor(TextExtractorInterface):
    """Extractor that understands ``text/plain`` only."""

    async def extract_text(self, document: DocumentFile) -> str:
        if document.mime_type == PLAIN_TEXT_MIME_TYPE:
            return document.content.decode("utf-8", errors="replace")
        logger.debug(
            "extraction_unsupported",
            document=document.name,
            mime_type=document.mime_type,
        )
        return f"[Document content would be extracted from {document.name}]"
