"""
Base classifier class.

All classifier strategies inherit from BaseClassifier and share one
capability: turn an artifact (plus its fingerprint) into a RawVerdict.
"""
from abc import ABC, abstractmethod
from typing import Dict, Any

from neuroscope.detection.artifact import Artifact, Modality, RawVerdict


class BaseClassifier(ABC):
    """
    Abstract base class for all modality classifiers.

    Subclasses must implement:
    - classify(): Main classification logic
    - strategy: Class attribute naming the strategy
    """

    # Subclasses should set this
    strategy: str = "base"

    def __init__(self, modality: Modality):
        self.modality = modality

    @abstractmethod
    async def classify(self, artifact: Artifact, fingerprint: str) -> RawVerdict:
        """
        Classify an artifact.

        Args:
            artifact: Validated artifact
            fingerprint: Fingerprint derived from the artifact

        Returns:
            RawVerdict (free-form text or pre-structured label/confidence)

        Raises:
            ClassificationError: If the classifier could not produce a verdict
        """
        pass

    def describe(self) -> Dict[str, Any]:
        """Describe this classifier for health/info endpoints."""
        return {
            "modality": self.modality.value,
            "strategy": self.strategy,
        }
