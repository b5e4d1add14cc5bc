"""
Core data model for the detection pipeline.

An Artifact is one submitted unit of content. A Verdict is what the
pipeline hands back to the caller. Both are immutable.
"""
from dataclasses import dataclass
from enum import Enum
from typing import Optional, Union


class Modality(str, Enum):
    """Content category - selects classifier and validation rules."""
    TEXT = "text"
    IMAGE = "image"
    AUDIO = "audio"
    VIDEO = "video"

    @property
    def noun(self) -> str:
        """Display noun used in verdict labels ("AI-Generated Image")."""
        return self.value.capitalize()


class Uploader(str, Enum):
    """
    Upload surface an artifact arrived through.

    The audio uploader also takes video files, with smaller limits than
    the dedicated video uploader.
    """
    TEXT = "text"
    IMAGE = "image"
    AUDIO_OR_VIDEO = "audio_or_video"
    VIDEO = "video"


@dataclass(frozen=True)
class Artifact:
    """A submitted unit of analysis."""
    modality: Modality
    raw_content: Union[bytes, str]
    declared_mime_type: str
    byte_size: int
    original_name: Optional[str] = None
    last_modified: Optional[int] = None  # epoch milliseconds, files only
    uploader: Optional[Uploader] = None

    @property
    def is_text(self) -> bool:
        return self.modality == Modality.TEXT and isinstance(self.raw_content, str)

    @property
    def upload_surface(self) -> Uploader:
        """Uploader, defaulting to the one matching the modality."""
        if self.uploader is not None:
            return self.uploader
        return {
            Modality.TEXT: Uploader.TEXT,
            Modality.IMAGE: Uploader.IMAGE,
            Modality.AUDIO: Uploader.AUDIO_OR_VIDEO,
            Modality.VIDEO: Uploader.VIDEO,
        }[self.modality]

    @classmethod
    def from_text(
        cls,
        content: str,
        original_name: Optional[str] = None,
        mime_type: str = "text/plain",
        byte_size: Optional[int] = None
    ) -> "Artifact":
        """Build a text artifact from pasted or uploaded text."""
        if byte_size is None:
            byte_size = len(content.encode("utf-8"))
        return cls(
            modality=Modality.TEXT,
            raw_content=content,
            declared_mime_type=mime_type,
            byte_size=byte_size,
            original_name=original_name,
            uploader=Uploader.TEXT,
        )

    @classmethod
    def from_upload(
        cls,
        content: bytes,
        mime_type: str,
        uploader: Uploader,
        original_name: Optional[str] = None,
        last_modified: Optional[int] = None,
        byte_size: Optional[int] = None
    ) -> "Artifact":
        """
        Build a media artifact from an uploaded file.

        Modality is taken from the mime type when it names a known media
        family (so a video dropped on the audio uploader is a video),
        otherwise from the uploader. `byte_size` overrides the content
        length for uploads rejected before their body was read.
        """
        family = (mime_type or "").split("/", 1)[0].lower()
        try:
            modality = Modality(family)
        except ValueError:
            modality = {
                Uploader.TEXT: Modality.TEXT,
                Uploader.IMAGE: Modality.IMAGE,
                Uploader.AUDIO_OR_VIDEO: Modality.AUDIO,
                Uploader.VIDEO: Modality.VIDEO,
            }[uploader]

        return cls(
            modality=modality,
            raw_content=content,
            declared_mime_type=mime_type or "",
            byte_size=len(content) if byte_size is None else byte_size,
            original_name=original_name,
            last_modified=last_modified,
            uploader=uploader,
        )


@dataclass(frozen=True)
class RawVerdict:
    """
    Classifier output before normalization.

    Service-backed classifiers fill `text` with the free-form reply.
    Heuristic classifiers fill `label` and `confidence` directly.
    """
    text: Optional[str] = None
    label: Optional[str] = None
    confidence: Optional[float] = None

    @property
    def is_structured(self) -> bool:
        return self.text is None and self.label is not None


@dataclass(frozen=True)
class Verdict:
    """Normalized pipeline output."""
    label: str
    confidence: float
    modality: Modality
    fingerprint: Optional[str] = None
    fallback_used: bool = False

    def to_dict(self) -> dict:
        """Convert to the boundary response shape."""
        return {
            "result": self.label,
            "confidence": self.confidence,
            "modality": self.modality.value,
            "fallback_used": self.fallback_used,
        }
