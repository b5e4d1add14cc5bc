"""
Result normalization - maps raw classifier output to the Verdict contract.

Service replies are free-form ("AI, 87" / "Human: 64%"). They are split on
the first comma or colon: the head is the label, the tail is read as a
number the way a lenient float parser would (leading numeric token only).

When the reply cannot be fully parsed, a fixed fallback confidence (70) is
substituted. This masks upstream format drift, so every fallback is logged
as a WARNING and flagged on the Verdict (`fallback_used=True`).
"""
import math
import re
from dataclasses import dataclass
from typing import Optional

from neuroscope.detection.artifact import Modality, RawVerdict, Verdict
from neuroscope.detection.errors import VerdictParseError
from neuroscope.core.logging import get_logger

logger = get_logger("detection.normalizer")

FALLBACK_CONFIDENCE = 70.0
UNKNOWN_LABEL = "Unknown"

_DELIMITER = re.compile(r"[,:]")
_LEADING_FLOAT = re.compile(r"^\s*([+-]?(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?)")


@dataclass(frozen=True)
class ParsedVerdict:
    """Label and confidence read from a service reply."""
    label: str
    confidence: float


def parse_leading_float(value: str) -> Optional[float]:
    """Parse the leading numeric token of a string, or None."""
    match = _LEADING_FLOAT.match(value)
    if not match:
        return None
    number = float(match.group(1))
    if not math.isfinite(number):
        return None
    return number


def parse_verdict(text: str) -> ParsedVerdict:
    """
    Parse a free-form service reply.

    Args:
        text: Raw reply, e.g. "AI, 87"

    Returns:
        ParsedVerdict with trimmed label and parsed confidence

    Raises:
        VerdictParseError: If the label is empty or no number follows the
            delimiter. The error carries whatever label was found.
    """
    parts = _DELIMITER.split(text or "", maxsplit=1)
    label = parts[0].strip()

    if not label:
        raise VerdictParseError(f"No label in service reply: {text!r}")

    if len(parts) < 2:
        raise VerdictParseError(f"No confidence in service reply: {text!r}", label=label)

    confidence = parse_leading_float(parts[1])
    if confidence is None:
        raise VerdictParseError(
            f"Unparseable confidence in service reply: {text!r}", label=label
        )

    return ParsedVerdict(label=label, confidence=confidence)


def clamp_confidence(value: float) -> float:
    """Clamp a confidence into [0, 100]."""
    return max(0.0, min(100.0, float(value)))


def normalize(
    raw: RawVerdict,
    modality: Modality,
    fingerprint: Optional[str] = None,
    fallback_confidence: float = FALLBACK_CONFIDENCE
) -> Verdict:
    """
    Turn a RawVerdict into a Verdict.

    Structured input passes through with confidence clamped to [0, 100].
    Free-form input goes through parse_verdict(); on failure the fallback
    confidence is used and the Verdict is flagged.
    """
    if raw.is_structured:
        confidence = raw.confidence
        if confidence is None or not math.isfinite(confidence):
            logger.warning(
                f"Classifier gave no usable confidence for {modality.value}, "
                f"using fallback {fallback_confidence}"
            )
            return Verdict(
                label=raw.label,
                confidence=clamp_confidence(fallback_confidence),
                modality=modality,
                fingerprint=fingerprint,
                fallback_used=True,
            )
        return Verdict(
            label=raw.label,
            confidence=clamp_confidence(confidence),
            modality=modality,
            fingerprint=fingerprint,
        )

    try:
        parsed = parse_verdict(raw.text)
    except VerdictParseError as e:
        logger.warning(
            f"Malformed {modality.value} service reply, "
            f"substituting confidence {fallback_confidence}: {e}"
        )
        return Verdict(
            label=e.label or UNKNOWN_LABEL,
            confidence=clamp_confidence(fallback_confidence),
            modality=modality,
            fingerprint=fingerprint,
            fallback_used=True,
        )

    return Verdict(
        label=parsed.label,
        confidence=clamp_confidence(parsed.confidence),
        modality=modality,
        fingerprint=fingerprint,
    )
