"""
Deterministic heuristic classifier.

PLACEHOLDER POLICY - NOT A TRAINED MODEL. The verdict is derived from the
fingerprint seed alone:

    confidence = floor(seed * 20 + 70)        -> always in [70, 90)
    label      = "AI-Generated <Noun>" if seed > cutoff else "Human-Made <Noun>"

The cutoffs and size thresholds below are arbitrary constants kept for
behavioral compatibility. Output looks plausible but carries no evidence
about the content. Swap in a real model behind BaseClassifier.
"""
import math
from dataclasses import dataclass
from typing import Dict, Tuple, Any

from neuroscope.classifiers.base import BaseClassifier
from neuroscope.detection.artifact import Artifact, Modality, RawVerdict, Uploader
from neuroscope.detection.fingerprint import seed_from_fingerprint, text_length, trim_text
from neuroscope.detection.validation import MIB

CONFIDENCE_BASE = 70
CONFIDENCE_SPAN = 20


@dataclass(frozen=True)
class HeuristicPolicy:
    """Label cutoffs for one modality/uploader combination."""
    base_cutoff: float
    small_cutoff: float
    small_below: int
    measure: str = "bytes"  # "bytes" or "chars" (UTF-16 units)

    def is_small(self, artifact: Artifact) -> bool:
        if self.measure == "chars":
            content = artifact.raw_content
            if isinstance(content, bytes):
                content = content.decode("utf-8-sig", errors="replace")
            return text_length(trim_text(content)) < self.small_below
        return artifact.byte_size < self.small_below

    def cutoff_for(self, artifact: Artifact) -> float:
        if self.is_small(artifact):
            return self.small_cutoff
        return self.base_cutoff


DEFAULT_POLICY = HeuristicPolicy(base_cutoff=0.5, small_cutoff=0.3, small_below=2 * MIB)

# (modality, uploader) -> policy
HEURISTIC_POLICIES: Dict[Tuple[Modality, Uploader], HeuristicPolicy] = {
    (Modality.TEXT, Uploader.TEXT): HeuristicPolicy(0.5, 0.3, 100, measure="chars"),
    (Modality.IMAGE, Uploader.IMAGE): HeuristicPolicy(0.5, 0.3, 2 * MIB),
    (Modality.AUDIO, Uploader.AUDIO_OR_VIDEO): HeuristicPolicy(0.5, 0.3, 5 * MIB),
    (Modality.VIDEO, Uploader.AUDIO_OR_VIDEO): HeuristicPolicy(0.4, 0.3, 5 * MIB),
    (Modality.VIDEO, Uploader.VIDEO): HeuristicPolicy(0.5, 0.3, 10 * MIB),
}


def get_policy(artifact: Artifact) -> HeuristicPolicy:
    """Get the heuristic policy for an artifact."""
    return HEURISTIC_POLICIES.get(
        (artifact.modality, artifact.upload_surface),
        DEFAULT_POLICY
    )


def heuristic_confidence(seed: float) -> int:
    """Confidence band [70, 90) driven by the seed."""
    return math.floor(seed * CONFIDENCE_SPAN + CONFIDENCE_BASE)


def heuristic_label(seed: float, cutoff: float, modality: Modality) -> str:
    if seed > cutoff:
        return f"AI-Generated {modality.noun}"
    return f"Human-Made {modality.noun}"


class DeterministicHeuristicClassifier(BaseClassifier):
    """
    Offline classifier driven by the fingerprint seed.

    Never suspends and never fails; used for audio and video, and as the
    fallback for any modality when no inference service is configured.
    """

    strategy = "heuristic"

    async def classify(self, artifact: Artifact, fingerprint: str) -> RawVerdict:
        seed = seed_from_fingerprint(fingerprint)
        cutoff = get_policy(artifact).cutoff_for(artifact)
        return RawVerdict(
            label=heuristic_label(seed, cutoff, artifact.modality),
            confidence=float(heuristic_confidence(seed)),
        )

    def describe(self) -> Dict[str, Any]:
        info = super().describe()
        info["placeholder"] = True
        return info
