"""Document verification models for lofty_chat.

These models describe a document-alignment request and its structured
result. Results are ephemeral UI state and are never persisted.
"""

from pydantic import BaseModel, Field, SecretStr

from lofty_chat.models.message import AttachmentMeta

__all__ = [
    "DocumentFile",
    "KeyPoint",
    "VerificationRequest",
    "VerificationResult",
]


class DocumentFile(BaseModel, frozen=True):
    """An uploaded file with its raw bytes."""

    name: str
    mime_type: str = "application/octet-stream"
    content: bytes = b""

    @property
    def size_bytes(self) -> int:
        return len(self.content)

    def to_attachment(self) -> AttachmentMeta:
        """Metadata view of the file, as stored on chat messages."""
        return AttachmentMeta(name=self.name, mime_type=self.mime_type, size_bytes=self.size_bytes)


class VerificationRequest(BaseModel, frozen=True):
    """Inputs of a document-alignment analysis.

    Attributes:
        document: Document to analyze
        business_strategy: Business strategy text
        mission_vision: Mission and vision statements
        system_prompt: Optional system prompt sent with the analysis
        api_key: Optional API key overriding the configured one
        model: Optional model id overriding the selected one
    """

    document: DocumentFile
    business_strategy: str = ""
    mission_vision: str = ""
    system_prompt: str | None = None
    api_key: SecretStr | None = None
    model: str | None = None


class KeyPoint(BaseModel, frozen=True):
    """A single alignment finding."""

    aligned: bool
    point: str


class VerificationResult(BaseModel, frozen=True):
    """Structured outcome of a document-alignment analysis.

    Attributes:
        alignment_score: Overall alignment, 0-100
        summary: Short prose summary
        key_points: Findings, at most five
        recommendations: Suggested improvements, at most four
        report_url: Link to the full report
    """

    alignment_score: int = Field(ge=0, le=100)
    summary: str
    key_points: tuple[KeyPoint, ...] = ()
    recommendations: tuple[str, ...] = ()
    report_url: str
