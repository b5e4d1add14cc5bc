"""
Tests for per-uploader artifact validation.
"""
import pytest
from neuroscope.detection.artifact import Artifact, Modality, Uploader
from neuroscope.detection.errors import ValidationError, ValidationErrorKind
from neuroscope.detection.validation import MIB, validate


def media(modality, mime, size, uploader):
    """Build a media artifact with a declared size (content is irrelevant)."""
    return Artifact(
        modality=modality,
        raw_content=b"",
        declared_mime_type=mime,
        byte_size=size,
        original_name="upload",
        uploader=uploader,
    )


def assert_rejected(artifact, kind):
    with pytest.raises(ValidationError) as exc:
        validate(artifact)
    assert exc.value.kind == kind
    assert exc.value.code == kind.value
    return exc.value


class TestImageRules:

    def test_exactly_10_mib_accepted(self):
        validate(media(Modality.IMAGE, "image/png", 10 * MIB, Uploader.IMAGE))

    def test_10_mib_plus_one_rejected(self):
        error = assert_rejected(
            media(Modality.IMAGE, "image/png", 10 * MIB + 1, Uploader.IMAGE),
            ValidationErrorKind.TOO_LARGE,
        )
        assert error.message == "File size exceeds 10MB."

    def test_empty_image_rejected(self):
        error = assert_rejected(
            media(Modality.IMAGE, "image/jpeg", 0, Uploader.IMAGE),
            ValidationErrorKind.EMPTY,
        )
        assert error.message == "Empty file uploaded."

    def test_wrong_type(self):
        error = assert_rejected(
            media(Modality.IMAGE, "application/pdf", 100, Uploader.IMAGE),
            ValidationErrorKind.WRONG_TYPE,
        )
        assert error.message == "Please upload a valid image file."

    def test_type_checked_before_size(self):
        assert_rejected(
            media(Modality.IMAGE, "text/plain", 50 * MIB, Uploader.IMAGE),
            ValidationErrorKind.WRONG_TYPE,
        )


class TestTextRules:

    def test_blank_text_rejected(self):
        assert_rejected(Artifact.from_text("   \n\t "), ValidationErrorKind.EMPTY)

    def test_empty_text_rejected(self):
        assert_rejected(Artifact.from_text(""), ValidationErrorKind.EMPTY)

    def test_byte_order_mark_only_rejected(self):
        assert_rejected(Artifact.from_text(chr(0xFEFF)), ValidationErrorKind.EMPTY)

    def test_bom_prefixed_bytes_rejected_when_blank(self):
        artifact = Artifact(
            modality=Modality.TEXT,
            raw_content=b"\xef\xbb\xbf  ",
            declared_mime_type="text/plain",
            byte_size=5,
            uploader=Uploader.TEXT,
        )
        assert_rejected(artifact, ValidationErrorKind.EMPTY)

    def test_single_character_accepted(self):
        validate(Artifact.from_text("a"))

    def test_json_file_accepted(self):
        validate(Artifact.from_text('{"a": 1}', original_name="a.json", mime_type="application/json"))

    def test_markdown_file_accepted(self):
        validate(Artifact.from_text("# Title", original_name="a.md", mime_type="text/markdown"))

    def test_pdf_rejected(self):
        assert_rejected(
            Artifact.from_text("%PDF", original_name="a.pdf", mime_type="application/pdf"),
            ValidationErrorKind.WRONG_TYPE,
        )

    def test_over_1_mib_rejected(self):
        error = assert_rejected(
            Artifact.from_text("x", mime_type="text/plain", byte_size=MIB + 1),
            ValidationErrorKind.TOO_LARGE,
        )
        assert error.message == "File size exceeds 1MB limit."


class TestAudioVideoRules:

    def test_audio_uploader_takes_video(self):
        validate(media(Modality.VIDEO, "video/mp4", 20 * MIB, Uploader.AUDIO_OR_VIDEO))

    def test_audio_uploader_limit(self):
        error = assert_rejected(
            media(Modality.AUDIO, "audio/mpeg", 20 * MIB + 1, Uploader.AUDIO_OR_VIDEO),
            ValidationErrorKind.TOO_LARGE,
        )
        assert error.message == "File size exceeds 20MB limit."

    def test_audio_uploader_rejects_images(self):
        error = assert_rejected(
            media(Modality.IMAGE, "image/png", 10, Uploader.AUDIO_OR_VIDEO),
            ValidationErrorKind.WRONG_TYPE,
        )
        assert error.message == "Please upload an audio or video file."

    def test_video_uploader_limit(self):
        validate(media(Modality.VIDEO, "video/webm", 50 * MIB, Uploader.VIDEO))
        assert_rejected(
            media(Modality.VIDEO, "video/webm", 50 * MIB + 1, Uploader.VIDEO),
            ValidationErrorKind.TOO_LARGE,
        )

    def test_video_uploader_rejects_audio(self):
        error = assert_rejected(
            media(Modality.AUDIO, "audio/mpeg", 10, Uploader.VIDEO),
            ValidationErrorKind.WRONG_TYPE,
        )
        assert error.message == "Please upload a valid video file."

    def test_modality_default_uploader(self):
        """Artifacts without an explicit uploader use the modality's own rules."""
        artifact = Artifact(
            modality=Modality.VIDEO,
            raw_content=b"",
            declared_mime_type="video/mp4",
            byte_size=30 * MIB,
        )
        validate(artifact)
