"""
Typed failures raised by the detection pipeline.
"""
from enum import Enum
from typing import Optional


class ValidationErrorKind(str, Enum):
    """Why an artifact was rejected before classification."""
    WRONG_TYPE = "WrongType"
    TOO_LARGE = "TooLarge"
    EMPTY = "Empty"


class DetectionError(Exception):
    """Base class for detection pipeline failures."""
    code: str = "DetectionFailed"

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class ValidationError(DetectionError):
    """
    Artifact rejected before any processing.

    The message is shown to the caller verbatim.
    """

    def __init__(self, kind: ValidationErrorKind, message: str):
        super().__init__(message)
        self.kind = kind

    @property
    def code(self) -> str:
        return self.kind.value


class ClassificationError(DetectionError):
    """
    Classifier failed (service error, timeout, bad credentials).

    Only the generic message is surfaced; `cause` is kept for logging.
    """
    code = "DetectionFailed"

    def __init__(self, message: str, cause: Optional[BaseException] = None):
        super().__init__(message)
        self.cause = cause


class VerdictParseError(ValueError):
    """Free-form service reply could not be parsed into a verdict."""

    def __init__(self, message: str, label: Optional[str] = None):
        super().__init__(message)
        self.label = label


class ClassifierNotFoundError(Exception):
    """Raised when no classifier is registered for a modality or strategy."""
    pass
