"""
Tests for artifact fingerprinting and seed derivation.
"""
import pytest
from neuroscope.detection.artifact import Artifact, Modality, Uploader
from neuroscope.detection.fingerprint import (
    char_code_sum,
    fingerprint,
    fingerprint_file,
    fingerprint_text,
    seed_from_fingerprint,
    text_length,
    trim_text,
)

GRINNING_FACE = chr(0x1F600)
BOM = chr(0xFEFF)


class TestTextFingerprint:
    """Text is fingerprinted by the character-code sum of its trimmed content."""

    def test_hello_world_sum(self):
        assert fingerprint_text("Hello world") == "1084"

    def test_surrounding_whitespace_ignored(self):
        assert fingerprint_text("  Hello world \n") == fingerprint_text("Hello world")

    def test_artifact_uses_text_rule(self):
        artifact = Artifact.from_text("Hello world")
        assert fingerprint(artifact) == "1084"

    def test_seed_is_sum_mod_100(self):
        assert seed_from_fingerprint("1084") == pytest.approx(0.84)
        assert seed_from_fingerprint("1000") == 0.0

    def test_astral_characters_sum_utf16_units(self):
        # U+1F600 is the surrogate pair D83D DE00
        assert fingerprint(Artifact.from_text("I love it " + GRINNING_FACE)) == "113017"
        assert text_length(GRINNING_FACE) == 2

    def test_lone_surrogate_is_summed(self):
        assert char_code_sum(chr(0xD800)) == 0xD800

    def test_byte_order_mark_is_trimmed(self):
        assert fingerprint_text(BOM + "Hello world") == "1084"
        assert trim_text(BOM) == ""

    def test_no_break_space_is_trimmed(self):
        assert fingerprint_text(chr(0xA0) + "Hello world" + chr(0x3000)) == "1084"

    def test_interior_whitespace_kept(self):
        assert trim_text(" a b ") == "a b"


class TestFileFingerprint:
    """Files are fingerprinted from name, size, mime type and timestamp."""

    def test_format(self):
        assert fingerprint_file("cat.png", 2048, "image/png", 1700000000000) == \
            "cat.png-2048-image/png-1700000000000"

    def test_upload_artifact(self):
        artifact = Artifact.from_upload(
            content=b"\x89PNG\r\n",
            mime_type="image/png",
            uploader=Uploader.IMAGE,
            original_name="cat.png",
            last_modified=42,
        )
        assert fingerprint(artifact) == "cat.png-6-image/png-42"

    def test_missing_name_and_timestamp(self):
        artifact = Artifact.from_upload(b"abc", "audio/mpeg", Uploader.AUDIO_OR_VIDEO)
        assert fingerprint(artifact) == "-3-audio/mpeg-0"

    def test_file_seed_sums_fingerprint_string(self):
        value = "cat.png-6-image/png-42"
        assert seed_from_fingerprint(value) == (char_code_sum(value) % 100) / 100

    def test_content_does_not_matter(self):
        """Only metadata is identity-bearing for files."""
        a = Artifact.from_upload(b"aaaa", "image/png", Uploader.IMAGE, "x.png", 1)
        b = Artifact.from_upload(b"bbbb", "image/png", Uploader.IMAGE, "x.png", 1)
        assert fingerprint(a) == fingerprint(b)


class TestDeterminism:

    @pytest.mark.parametrize("artifact", [
        Artifact.from_text("The quick brown fox"),
        Artifact.from_upload(b"data", "video/mp4", Uploader.VIDEO, "clip.mp4", 99),
        Artifact(
            modality=Modality.AUDIO,
            raw_content=b"",
            declared_mime_type="audio/wav",
            byte_size=123,
            original_name="a.wav",
        ),
    ])
    def test_same_artifact_same_fingerprint(self, artifact):
        assert fingerprint(artifact) == fingerprint(artifact)
        assert seed_from_fingerprint(fingerprint(artifact)) == \
            seed_from_fingerprint(fingerprint(artifact))

    @pytest.mark.parametrize("value", ["0", "1084", "a-1-b-2", "", "clip.mp4-1-video/mp4-0"])
    def test_seed_range(self, value):
        seed = seed_from_fingerprint(value)
        assert 0.0 <= seed < 1.0
