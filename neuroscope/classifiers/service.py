"""
Service-backed classifier - delegates to an external inference service.
"""
import asyncio
import base64
from functools import partial
from typing import Dict, Any

from neuroscope.classifiers.base import BaseClassifier
from neuroscope.detection.artifact import Artifact, Modality, RawVerdict
from neuroscope.detection.errors import ClassificationError
from neuroscope.llm.base import LLMAdapter, ImageInput
from neuroscope.core.logging import get_logger

logger = get_logger("classifiers.service")

TEXT_PROMPT = (
    'Is this text written by a human or AI? Just reply with "Human" or "AI" '
    "and a confidence score from 0 to 100.\n\nText:\n{content}"
)

IMAGE_PROMPT = (
    "Tell if this image is AI-generated or human-made. "
    "Only say 'AI' or 'Human' with confidence from 0 to 100."
)

# Modalities whose payload can be sent to the inference service
SERVICE_MODALITIES = (Modality.TEXT, Modality.IMAGE)


class ServiceBackedClassifier(BaseClassifier):
    """
    Classifier that asks an LLM for "AI or Human" plus a confidence.

    The reply is returned untouched as RawVerdict(text=...); parsing is the
    normalizer's job. No retries: one call per submission.
    """

    strategy = "service"

    def __init__(self, modality: Modality, llm: LLMAdapter):
        if modality not in SERVICE_MODALITIES:
            raise ValueError(f"Service classification not supported for {modality.value}")
        super().__init__(modality)
        self.llm = llm

    def _build_request(self, artifact: Artifact) -> Dict[str, Any]:
        if self.modality == Modality.TEXT:
            content = artifact.raw_content
            if isinstance(content, bytes):
                content = content.decode("utf-8", errors="replace")
            return {"prompt": TEXT_PROMPT.format(content=content)}

        image = ImageInput(
            data_base64=base64.b64encode(artifact.raw_content).decode("utf-8"),
            mime_type=artifact.declared_mime_type,
        )
        return {"prompt": IMAGE_PROMPT, "images": [image]}

    async def classify(self, artifact: Artifact, fingerprint: str) -> RawVerdict:
        request = self._build_request(artifact)
        loop = asyncio.get_running_loop()

        try:
            response = await loop.run_in_executor(
                None, partial(self.llm.generate, **request)
            )
        except Exception as e:
            logger.error(
                f"{self.llm.provider_name} call failed for {self.modality.value} "
                f"artifact {fingerprint}: {e}"
            )
            raise ClassificationError(
                f"{self.modality.noun} detection failed", cause=e
            ) from e

        return RawVerdict(text=response.content)

    def describe(self) -> Dict[str, Any]:
        info = super().describe()
        info["provider"] = self.llm.provider_name
        info["model"] = self.llm.model_name
        return info
