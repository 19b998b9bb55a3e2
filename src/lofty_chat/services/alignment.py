"""Document alignment analysis for lofty_chat.

This module checks a document against a business strategy and a
mission/vision statement. With an API key the Gemini model writes the
analysis and the prose is parsed into a VerificationResult; without one, or
when the call fails, a mocked result keeps the UI flow working.
"""

import asyncio
import random

from lofty_chat.config import DEFAULT_REPORT_URL
from lofty_chat.errors import RequestValidationError
from lofty_chat.interfaces.extractor import TextExtractorInterface
from lofty_chat.interfaces.gateway import ModelGatewayInterface
from lofty_chat.logging import get_logger
from lofty_chat.models.message import Message
from lofty_chat.models.verification import KeyPoint, VerificationRequest, VerificationResult
from lofty_chat.services.alignment_parsing import FALLBACK_SCORE_RANGE, parse_verification_text

__all__ = [
    "ANALYSIS_MAX_TOKENS",
    "ANALYSIS_TEMPERATURE",
    "DocumentAlignmentAnalyzer",
    "build_analysis_prompt",
]

logger = get_logger(__name__)

ANALYSIS_TEMPERATURE = 0.2
ANALYSIS_MAX_TOKENS = 2048
DEFAULT_ANALYSIS_MODEL = "gemini-1.5-pro"

MOCK_KEY_POINTS = (
    "The document's core objectives align with your strategic goals.",
    "Market positioning statements match your target audience definition.",
    "Financial projections align with your growth strategy.",
    "Resource allocation reflects strategic priorities.",
    "Timeline and milestones match strategic planning horizons.",
)

MOCK_RECOMMENDATIONS = (
    "Strengthen the connection between your value proposition and mission statement",
    "Add more specific metrics to track alignment with strategic objectives",
    "Include clearer references to your core values throughout the document",
    "Align the risk assessment section more closely with your strategic challenges",
)


def build_analysis_prompt(document_text: str, business_strategy: str, mission_vision: str) -> str:
    """Build the single prompt sent for an alignment analysis."""
    return f"""You are an expert business consultant specializing in strategic alignment.

Analyze the following document to determine if it aligns with the provided business strategy, mission, and vision.

BUSINESS STRATEGY:
{business_strategy}

MISSION AND VISION:
{mission_vision}

DOCUMENT CONTENT:
{document_text}

Provide a detailed analysis including:
1. An overall alignment score (0-100), written as "Alignment score: N"
2. A summary of how well the document aligns with the business strategy, under a "Summary:" heading
3. Key points of alignment and misalignment, as bullet points
4. Specific recommendations to improve alignment, as bullet points under a "Recommendations:" heading

Focus on evaluating whether the document's content, tone, objectives, and proposed actions align with the stated business strategy, mission, and vision."""  # noqa: E501


class DocumentAlignmentAnalyzer:
    """Best-effort document verification.

    Extraction and gateway failures never propagate: they degrade to the
    mocked result.
    Only request validation errors reach the caller.

    Example:
        analyzer = DocumentAlignmentAnalyzer(gateway, PlainTextExtractor())
        result = await analyzer.analyze(request, api_key=key)
    """

    def __init__(
        self,
        gateway: ModelGatewayInterface,
        extractor: TextExtractorInterface,
        *,
        report_url: str = DEFAULT_REPORT_URL,
        delay_seconds: float = 3.0,
        rng: random.Random | None = None,
    ) -> None:
        """Initialize analyzer with dependencies.

        Args:
            gateway: Model gateway for the real analysis
            extractor: Document text extractor
            report_url: Placeholder link attached to every result
            delay_seconds: Simulated latency of the mocked path
            rng: Random source for mocked scores and fallbacks
        """
        self._gateway = gateway
        self._extractor = extractor
        self._report_url = report_url
        self._delay_seconds = delay_seconds
        self._rng = rng or random.Random()

    async def analyze(
        self,
        request: VerificationRequest,
        *,
        api_key: str | None = None,
        model_id: str | None = None,
    ) -> VerificationResult:
        """Analyze a document's alignment with the business inputs.

        Args:
            request: Document and business inputs
            api_key: Configured key, used when the request carries none
            model_id: Configured model, used when the request names none

        Returns:
            Parsed or mocked VerificationResult

        Raises:
            RequestValidationError: Missing document or business inputs
        """
        self._validate(request)

        key = request.api_key.get_secret_value().strip() if request.api_key else ""
        key = key or (api_key or "").strip()
        model = request.model or model_id or DEFAULT_ANALYSIS_MODEL

        if not key:
            logger.info("alignment_mocked", reason="missing_credential")
            return await self._mock_result()

        try:
            document_text = await self._extractor.extract_text(request.document)
            prompt = build_analysis_prompt(
                document_text,
                request.business_strategy,
                request.mission_vision,
            )
            reply = await self._gateway.generate(
                [Message.user(prompt)],
                request.system_prompt or "",
                key,
                model,
                temperature=ANALYSIS_TEMPERATURE,
                max_tokens=ANALYSIS_MAX_TOKENS,
            )
        except Exception as e:
            logger.warning("alignment_request_failed", model=model, error=str(e))
            return await self._mock_result()

        result = parse_verification_text(reply, report_url=self._report_url, rng=self._rng)
        logger.info(
            "alignment_analyzed",
            document=request.document.name,
            model=model,
            score=result.alignment_score,
            key_points=len(result.key_points),
        )
        return result

    def _validate(self, request: VerificationRequest) -> None:
        missing = []
        if not request.document.name.strip():
            missing.append("document")
        if not request.business_strategy.strip():
            missing.append("business_strategy")
        if not request.mission_vision.strip():
            missing.append("mission_vision")
        if missing:
            raise RequestValidationError(f"Missing required fields: {', '.join(missing)}")

    async def _mock_result(self) -> VerificationResult:
        if self._delay_seconds > 0:
            await asyncio.sleep(self._delay_seconds)
        key_points = [KeyPoint(aligned=True, point=MOCK_KEY_POINTS[0])]
        key_points.extend(
            KeyPoint(aligned=self._rng.random() > 0.5, point=point)
            for point in MOCK_KEY_POINTS[1:]
        )
        return VerificationResult(
            alignment_score=self._rng.randint(*FALLBACK_SCORE_RANGE),
            summary=(
                "The document has been analyzed and shows varying levels of alignment "
                "with your business strategy and mission/vision statements."
            ),
            key_points=tuple(key_points),
            recommendations=MOCK_RECOMMENDATIONS,
            report_url=self._report_url,
        )
