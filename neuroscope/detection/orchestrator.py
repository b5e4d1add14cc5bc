"""
Detection orchestrator - the single entry point for running the pipeline.

Stages run strictly in order:

    IDLE -> VALIDATING -> FINGERPRINTING -> CLASSIFYING -> NORMALIZING -> DONE

with FAILED reachable from any stage after IDLE. Only CLASSIFYING may
await external I/O; every other stage is a synchronous, pure step. A run
is never retried; a new submission starts a new run.
"""
import time
from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, List, Optional

from neuroscope.classifiers.base import BaseClassifier
from neuroscope.detection.artifact import Artifact, Modality, RawVerdict, Verdict
from neuroscope.detection.errors import (
    ClassificationError,
    ClassifierNotFoundError,
    DetectionError,
    ValidationError,
)
from neuroscope.detection.fingerprint import fingerprint as derive_fingerprint
from neuroscope.detection.normalizer import normalize, FALLBACK_CONFIDENCE
from neuroscope.detection.validation import validate
from neuroscope.core.logging import get_logger

logger = get_logger("detection.orchestrator")


class DetectionStage(str, Enum):
    """Pipeline state machine."""
    IDLE = "idle"
    VALIDATING = "validating"
    FINGERPRINTING = "fingerprinting"
    CLASSIFYING = "classifying"
    NORMALIZING = "normalizing"
    DONE = "done"
    FAILED = "failed"


_NEXT_STAGE = {
    DetectionStage.IDLE: DetectionStage.VALIDATING,
    DetectionStage.VALIDATING: DetectionStage.FINGERPRINTING,
    DetectionStage.FINGERPRINTING: DetectionStage.CLASSIFYING,
    DetectionStage.CLASSIFYING: DetectionStage.NORMALIZING,
    DetectionStage.NORMALIZING: DetectionStage.DONE,
}


@dataclass
class DetectionRun:
    """State of one pipeline invocation."""
    artifact: Artifact
    stage: DetectionStage = DetectionStage.IDLE
    history: List[DetectionStage] = field(default_factory=lambda: [DetectionStage.IDLE])
    fingerprint: Optional[str] = None
    verdict: Optional[Verdict] = None
    error: Optional[DetectionError] = None
    failed_at: Optional[DetectionStage] = None
    duration_seconds: float = 0.0

    def advance(self) -> DetectionStage:
        """Move to the next stage in sequence."""
        if self.stage not in _NEXT_STAGE:
            raise RuntimeError(f"Cannot advance from terminal stage {self.stage.value}")
        self.stage = _NEXT_STAGE[self.stage]
        self.history.append(self.stage)
        return self.stage

    def fail(self, error: DetectionError) -> None:
        """Move to FAILED, remembering where the failure happened."""
        if self.stage in (DetectionStage.IDLE, DetectionStage.DONE, DetectionStage.FAILED):
            raise RuntimeError(f"Cannot fail from stage {self.stage.value}")
        self.failed_at = self.stage
        self.error = error
        self.stage = DetectionStage.FAILED
        self.history.append(self.stage)

    @property
    def succeeded(self) -> bool:
        return self.stage == DetectionStage.DONE


class DetectionOrchestrator:
    """
    Runs validate -> fingerprint -> classify -> normalize for one artifact.

    Holds only its classifier set, which is read-only after construction,
    so concurrent runs share no mutable state.
    """

    def __init__(
        self,
        classifiers: Dict[Modality, BaseClassifier],
        fallback_confidence: float = FALLBACK_CONFIDENCE
    ):
        self.classifiers = dict(classifiers)
        self.fallback_confidence = fallback_confidence

    def get_classifier(self, modality: Modality) -> BaseClassifier:
        if modality not in self.classifiers:
            raise ClassifierNotFoundError(f"No classifier configured for {modality.value}")
        return self.classifiers[modality]

    async def run(self, artifact: Artifact) -> DetectionRun:
        """
        Run the pipeline and return the full run record.

        Never raises for pipeline failures; inspect run.error instead.
        Any other unexpected error is recorded as a ClassificationError.
        """
        run = DetectionRun(artifact=artifact)
        start = time.time()

        try:
            run.advance()  # VALIDATING
            validate(artifact)

            run.advance()  # FINGERPRINTING
            run.fingerprint = derive_fingerprint(artifact)

            run.advance()  # CLASSIFYING
            classifier = self.get_classifier(artifact.modality)
            raw = await self._classify(classifier, artifact, run.fingerprint)

            run.advance()  # NORMALIZING
            run.verdict = normalize(
                raw,
                artifact.modality,
                fingerprint=run.fingerprint,
                fallback_confidence=self.fallback_confidence,
            )

            run.advance()  # DONE

        except ValidationError as e:
            logger.info(f"Rejected {artifact.modality.value} artifact: {e.code} - {e.message}")
            run.fail(e)
        except ClassificationError as e:
            logger.error(
                f"Classification failed for {artifact.modality.value} artifact "
                f"{run.fingerprint}: {e.cause or e}",
                exc_info=e.cause is not None
            )
            run.fail(e)
        except ClassifierNotFoundError as e:
            logger.error(str(e))
            run.fail(ClassificationError(f"{artifact.modality.noun} detection failed", cause=e))
        except Exception as e:
            logger.error(
                f"Unexpected error while {run.stage.value} {artifact.modality.value} artifact: {e}",
                exc_info=True
            )
            run.fail(ClassificationError(f"{artifact.modality.noun} detection failed", cause=e))

        run.duration_seconds = time.time() - start

        if run.verdict is not None:
            logger.info(
                f"Detection complete: {run.verdict.label} "
                f"({run.verdict.confidence:.1f}) in {run.duration_seconds:.2f}s"
            )
        return run

    async def detect(self, artifact: Artifact) -> Verdict:
        """
        Run the pipeline and return the verdict.

        Raises:
            ValidationError: Artifact rejected before classification
            ClassificationError: Classifier failed
        """
        run = await self.run(artifact)
        if run.error is not None:
            raise run.error
        return run.verdict

    async def _classify(self, classifier: BaseClassifier, artifact: Artifact, fingerprint: str):
        try:
            raw = await classifier.classify(artifact, fingerprint)
        except ClassificationError:
            raise
        except Exception as e:
            raise ClassificationError(
                f"{artifact.modality.noun} detection failed", cause=e
            ) from e

        if not isinstance(raw, RawVerdict):
            raise ClassificationError(
                f"{artifact.modality.noun} detection failed",
                cause=TypeError(f"{classifier.strategy} classifier returned {type(raw).__name__}")
            )
        return raw

    def describe(self) -> Dict[str, Dict]:
        """Describe the configured classifiers."""
        return {
            modality.value: classifier.describe()
            for modality, classifier in self.classifiers.items()
        }
