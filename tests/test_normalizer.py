"""
Tests for service reply parsing and verdict normalization.
"""
import logging
import pytest
from neuroscope.detection.artifact import Modality, RawVerdict
from neuroscope.detection.errors import VerdictParseError
from neuroscope.detection.normalizer import (
    FALLBACK_CONFIDENCE,
    normalize,
    parse_leading_float,
    parse_verdict,
)


class TestParseVerdict:

    @pytest.mark.parametrize("text,label,confidence", [
        ("AI, 87", "AI", 87.0),
        ("Human: 64", "Human", 64.0),
        ("Human: 64%", "Human", 64.0),
        ("  AI ,92.5 ", "AI", 92.5),
        ("AI: 85, fairly sure", "AI", 85.0),
        ("Human, 7.5e1", "Human", 75.0),
        ("AI, 0", "AI", 0.0),
    ])
    def test_parses(self, text, label, confidence):
        parsed = parse_verdict(text)
        assert parsed.label == label
        assert parsed.confidence == confidence

    def test_no_delimiter(self):
        with pytest.raises(VerdictParseError) as exc:
            parse_verdict("AI 85")
        assert exc.value.label == "AI 85"

    def test_no_number_after_delimiter(self):
        with pytest.raises(VerdictParseError) as exc:
            parse_verdict("AI, quite confident")
        assert exc.value.label == "AI"

    def test_empty_label(self):
        with pytest.raises(VerdictParseError) as exc:
            parse_verdict(": 80")
        assert exc.value.label is None

    def test_leading_float(self):
        assert parse_leading_float(" 42abc") == 42.0
        assert parse_leading_float(".5") == 0.5
        assert parse_leading_float("abc") is None
        assert parse_leading_float("1e999") is None


class TestNormalizeServiceOutput:

    def test_well_formed(self):
        verdict = normalize(RawVerdict(text="AI, 91"), Modality.TEXT, fingerprint="123")
        assert verdict.label == "AI"
        assert verdict.confidence == 91.0
        assert verdict.modality == Modality.TEXT
        assert verdict.fingerprint == "123"
        assert verdict.fallback_used is False

    def test_malformed_uses_fallback(self):
        verdict = normalize(RawVerdict(text="I cannot determine that"), Modality.IMAGE)
        assert verdict.confidence == 70
        assert verdict.label == "I cannot determine that"
        assert verdict.fallback_used is True

    def test_empty_reply(self):
        verdict = normalize(RawVerdict(text=""), Modality.TEXT)
        assert verdict.label == "Unknown"
        assert verdict.confidence == FALLBACK_CONFIDENCE
        assert verdict.fallback_used is True

    def test_fallback_is_logged(self, caplog):
        with caplog.at_level(logging.WARNING, logger="neuroscope.detection.normalizer"):
            normalize(RawVerdict(text="AI, n/a"), Modality.TEXT)
        assert any("Malformed text service reply" in r.message for r in caplog.records)

    def test_custom_fallback(self):
        verdict = normalize(RawVerdict(text="AI"), Modality.TEXT, fallback_confidence=50)
        assert verdict.confidence == 50

    @pytest.mark.parametrize("text,expected", [
        ("AI, 150", 100.0),
        ("Human, -5", 0.0),
    ])
    def test_clamped(self, text, expected):
        assert normalize(RawVerdict(text=text), Modality.TEXT).confidence == expected


class TestNormalizeStructuredOutput:

    def test_passthrough(self):
        verdict = normalize(RawVerdict(label="Human-Made Audio", confidence=77), Modality.AUDIO)
        assert verdict.label == "Human-Made Audio"
        assert verdict.confidence == 77
        assert verdict.fallback_used is False

    @pytest.mark.parametrize("confidence,expected", [(120, 100.0), (-3, 0.0), (100, 100.0), (0, 0.0)])
    def test_clamped(self, confidence, expected):
        verdict = normalize(RawVerdict(label="X", confidence=confidence), Modality.VIDEO)
        assert verdict.confidence == expected

    def test_nan_confidence_falls_back(self):
        verdict = normalize(RawVerdict(label="X", confidence=float("nan")), Modality.VIDEO)
        assert verdict.confidence == 70
        assert verdict.fallback_used is True
