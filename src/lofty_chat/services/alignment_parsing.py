"""Heuristic parsing of alignment analyses written in prose.

The model is asked for a score, a summary, key points and recommendations,
but answers in free text. These pure functions pull those fields out with
regexes and line scans. They are best-effort: a reply that ignores the
requested structure falls back to generic entries (and a random score).
"""

import random
import re

from lofty_chat.models.verification import KeyPoint, VerificationResult

__all__ = [
    "FALLBACK_KEY_POINTS",
    "FALLBACK_RECOMMENDATIONS",
    "find_alignment_score",
    "normalize_lines",
    "parse_key_points",
    "parse_recommendations",
    "parse_summary",
    "parse_verification_text",
]

MAX_KEY_POINTS = 5
MAX_RECOMMENDATIONS = 4
SUMMARY_MIN_LINE_LENGTH = 50
SUMMARY_FALLBACK_LENGTH = 150
FALLBACK_SCORE_RANGE = (60, 90)

FALLBACK_KEY_POINTS: tuple[KeyPoint, ...] = (
    KeyPoint(aligned=True, point="The document addresses several of your strategic objectives."),
    KeyPoint(
        aligned=False,
        point="Some sections are not clearly tied to your mission and vision.",
    ),
)

FALLBACK_RECOMMENDATIONS: tuple[str, ...] = (
    "Reference your strategic objectives explicitly in each section",
    "Add measurable targets that track progress against the strategy",
)

_SCORE = re.compile(
    r"alignment\s+score(?:\s*\([^)]*\))?\D{0,20}?(\d{1,3})",
    re.IGNORECASE,
)
_INLINE_BULLET = re.compile(r"\s*•\s*")
_INLINE_HEADING = re.compile(
    r"(?<=[.!?])\s+(?=(?:key\s+)?(?:recommendations?|suggestions?|summary)\s*:)",
    re.IGNORECASE,
)
_BULLET = re.compile(r"^\s*[•\-*]\s+(.*\S)")
_RECOMMENDATION_HEADER = re.compile(r"recommendation|suggest", re.IGNORECASE)
_MISALIGNED = re.compile(r"not\s+align|misalign", re.IGNORECASE)


def _clean(text: str) -> str:
    return text.replace("**", "").strip().strip("#").strip()


def normalize_lines(text: str) -> list[str]:
    """Split a reply into lines, breaking out inline bullets and headings."""
    text = _INLINE_BULLET.sub("\n• ", text)
    text = _INLINE_HEADING.sub("\n", text)
    return [line.rstrip() for line in text.splitlines()]


def find_alignment_score(text: str) -> int | None:
    """Number following "alignment score", clamped to 0..100."""
    match = _SCORE.search(text)
    if match is None:
        return None
    return max(0, min(100, int(match.group(1))))


def _recommendation_header_index(lines: list[str]) -> int | None:
    """Index of the first non-bullet line naming recommendations or suggestions."""
    for i, line in enumerate(lines):
        if not _BULLET.match(line) and _RECOMMENDATION_HEADER.search(line):
            return i
    return None


def parse_summary(text: str, lines: list[str] | None = None) -> str:
    """Extract the summary paragraph.

    Priority:
    1. Text after "Summary:" on the heading line
    2. The next non-empty line after a line containing "summary"
    3. The first line longer than 50 characters
    4. The first 150 characters of the reply
    """
    lines = normalize_lines(text) if lines is None else lines

    for i, line in enumerate(lines):
        if "summary" not in line.lower():
            continue
        _, sep, after = line.partition(":")
        if sep and _clean(after):
            return _clean(after)
        for following in lines[i + 1 :]:
            if _clean(following):
                return _clean(following)
        break

    for line in lines:
        if len(line.strip()) > SUMMARY_MIN_LINE_LENGTH:
            return _clean(line)

    return text[:SUMMARY_FALLBACK_LENGTH].strip()


def parse_key_points(lines: list[str]) -> list[KeyPoint]:
    """Bulleted findings ahead of the recommendations section (at most 5)."""
    end = _recommendation_header_index(lines)
    scope = lines if end is None else lines[:end]

    points: list[KeyPoint] = []
    for line in scope:
        match = _BULLET.match(line)
        if not match or "recommendation" in line.lower():
            continue
        point = _clean(match.group(1))
        if not point:
            continue
        points.append(KeyPoint(aligned=not _MISALIGNED.search(point), point=point))
        if len(points) == MAX_KEY_POINTS:
            break
    return points


def parse_recommendations(lines: list[str]) -> list[str]:
    """Bulleted lines after the first recommendation heading (at most 4)."""
    start = _recommendation_header_index(lines)
    if start is None:
        return []

    recommendations: list[str] = []
    for line in lines[start + 1 :]:
        match = _BULLET.match(line)
        if not match:
            continue
        item = _clean(match.group(1))
        if item:
            recommendations.append(item)
        if len(recommendations) == MAX_RECOMMENDATIONS:
            break
    return recommendations


def parse_verification_text(
    text: str,
    *,
    report_url: str,
    rng: random.Random | None = None,
) -> VerificationResult:
    """Turn a prose analysis into a VerificationResult.

    Args:
        text: Model reply
        report_url: Link attached to the result
        rng: Random source for the fallback score

    Returns:
        Parsed result, with fallbacks for missing fields
    """
    rng = rng or random.Random()
    lines = normalize_lines(text)

    score = find_alignment_score(text)
    if score is None:
        score = rng.randint(*FALLBACK_SCORE_RANGE)

    key_points = parse_key_points(lines) or list(FALLBACK_KEY_POINTS)
    recommendations = parse_recommendations(lines) or list(FALLBACK_RECOMMENDATIONS)

    return VerificationResult(
        alignment_score=score,
        summary=parse_summary(text, lines),
        key_points=tuple(key_points),
        recommendations=tuple(recommendations),
        report_url=report_url,
    )
