"""
LLM Adapter Base Class - Abstract interface for inference service providers.

The service-backed classifiers only see this interface, so providers can be
swapped (or faked in tests) without touching classification code.
"""
from abc import ABC, abstractmethod
from typing import Optional, List, Dict, Any
from dataclasses import dataclass


@dataclass
class ImageInput:
    """Inline image payload for multimodal prompts."""
    data_base64: str
    mime_type: str

    @property
    def data_url(self) -> str:
        return f"data:{self.mime_type};base64,{self.data_base64}"


@dataclass
class LLMResponse:
    """Standardized LLM response across all providers."""
    content: str
    model: str
    provider: str
    usage: Optional[Dict[str, int]] = None  # tokens used
    finish_reason: Optional[str] = None
    raw_response: Optional[Any] = None


class LLMAdapter(ABC):
    """
    Abstract base class for LLM adapters.

    All LLM providers must implement this interface.
    """

    @property
    @abstractmethod
    def provider_name(self) -> str:
        """Return the provider name (e.g., 'openai')."""
        pass

    @property
    @abstractmethod
    def model_name(self) -> str:
        """Return the model being used."""
        pass

    @abstractmethod
    def generate(
        self,
        prompt: str,
        system_prompt: Optional[str] = None,
        images: Optional[List[ImageInput]] = None,
        max_tokens: int = 50,
        temperature: float = 0.0,
        **kwargs
    ) -> LLMResponse:
        """
        Generate text completion.

        Args:
            prompt: User prompt/message
            system_prompt: System message for context
            images: Optional inline images sent alongside the prompt
            max_tokens: Maximum tokens to generate
            temperature: Sampling temperature (0-1)
            **kwargs: Provider-specific options

        Returns:
            LLMResponse with generated content
        """
        pass

    @abstractmethod
    def is_available(self) -> bool:
        """Check if this provider is available (API key set, etc.)."""
        pass

    def health_check(self) -> Dict[str, Any]:
        """
        Perform health check on the provider.

        Returns dict with status and details.
        """
        return {
            "provider": self.provider_name,
            "model": self.model_name,
            "available": self.is_available(),
        }
