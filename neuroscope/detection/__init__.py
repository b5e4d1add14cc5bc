"""
Detection pipeline: artifact validation, fingerprinting, classification
dispatch and result normalization.

The orchestrator lives in neuroscope.detection.orchestrator and is not
re-exported here, since it depends on the classifiers package.
"""
from neuroscope.detection.artifact import Artifact, Modality, Uploader, RawVerdict, Verdict
from neuroscope.detection.errors import (
    ClassificationError,
    ClassifierNotFoundError,
    DetectionError,
    ValidationError,
    ValidationErrorKind,
    VerdictParseError
)
from neuroscope.detection.fingerprint import fingerprint, seed_from_fingerprint
from neuroscope.detection.normalizer import normalize, parse_verdict
from neuroscope.detection.validation import validate

__all__ = [
    "Artifact",
    "Modality",
    "Uploader",
    "RawVerdict",
    "Verdict",
    "ClassificationError",
    "ClassifierNotFoundError",
    "DetectionError",
    "ValidationError",
    "ValidationErrorKind",
    "VerdictParseError",
    "fingerprint",
    "seed_from_fingerprint",
    "normalize",
    "parse_verdict",
    "validate"
]
