"""
Artifact validation - per-uploader type, size and emptiness rules.

Rules run in order (type, size, emptiness) and the first violation wins.
Nothing downstream runs for a rejected artifact.
"""
from dataclasses import dataclass
from typing import Dict, Tuple

from neuroscope.detection.artifact import Artifact, Uploader
from neuroscope.detection.errors import ValidationError, ValidationErrorKind
from neuroscope.detection.fingerprint import trim_text
from neuroscope.core.logging import get_logger

logger = get_logger("detection.validation")

MIB = 1024 * 1024


@dataclass(frozen=True)
class UploadRule:
    """Constraints for one upload surface."""
    mime_prefixes: Tuple[str, ...]
    max_bytes: int
    wrong_type_message: str
    too_large_message: str
    exact_mime_types: Tuple[str, ...] = ()
    reject_empty_bytes: bool = False
    reject_blank_text: bool = False
    empty_message: str = "Empty file uploaded."

    def accepts_mime(self, mime_type: str) -> bool:
        mime = (mime_type or "").lower()
        if mime in self.exact_mime_types:
            return True
        return any(mime.startswith(prefix) for prefix in self.mime_prefixes)


UPLOAD_RULES: Dict[Uploader, UploadRule] = {
    Uploader.TEXT: UploadRule(
        mime_prefixes=("text/",),
        exact_mime_types=("application/json",),
        max_bytes=1 * MIB,
        wrong_type_message="Please upload a valid text file (e.g., .txt, .md, .json).",
        too_large_message="File size exceeds 1MB limit.",
        reject_blank_text=True,
        empty_message="Please enter some text to analyze.",
    ),
    Uploader.IMAGE: UploadRule(
        mime_prefixes=("image/",),
        max_bytes=10 * MIB,
        wrong_type_message="Please upload a valid image file.",
        too_large_message="File size exceeds 10MB.",
        reject_empty_bytes=True,
    ),
    Uploader.AUDIO_OR_VIDEO: UploadRule(
        mime_prefixes=("audio/", "video/"),
        max_bytes=20 * MIB,
        wrong_type_message="Please upload an audio or video file.",
        too_large_message="File size exceeds 20MB limit.",
    ),
    Uploader.VIDEO: UploadRule(
        mime_prefixes=("video/",),
        max_bytes=50 * MIB,
        wrong_type_message="Please upload a valid video file.",
        too_large_message="File size exceeds 50MB limit.",
    ),
}


def get_upload_rule(uploader: Uploader) -> UploadRule:
    """Get the rule set for an upload surface."""
    return UPLOAD_RULES[uploader]


def validate(artifact: Artifact) -> None:
    """
    Validate an artifact against its uploader's rules.

    Args:
        artifact: The submitted artifact

    Raises:
        ValidationError: With kind WrongType, TooLarge or Empty
    """
    rule = get_upload_rule(artifact.upload_surface)

    if not rule.accepts_mime(artifact.declared_mime_type):
        raise ValidationError(ValidationErrorKind.WRONG_TYPE, rule.wrong_type_message)

    if artifact.byte_size > rule.max_bytes:
        raise ValidationError(ValidationErrorKind.TOO_LARGE, rule.too_large_message)

    if rule.reject_empty_bytes and artifact.byte_size <= 0:
        raise ValidationError(ValidationErrorKind.EMPTY, rule.empty_message)

    if rule.reject_blank_text:
        content = artifact.raw_content
        if isinstance(content, bytes):
            content = content.decode("utf-8-sig", errors="replace")
        if not trim_text(content):
            raise ValidationError(ValidationErrorKind.EMPTY, rule.empty_message)

    logger.debug(
        f"Validated {artifact.modality.value} artifact "
        f"({artifact.byte_size} bytes, {artifact.declared_mime_type})"
    )
